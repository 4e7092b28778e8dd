import re
from typing import Annotated

from pydantic import AfterValidator, BaseModel, EmailStr, Field, SecretStr

# ASCII letters, digits and printable symbols only; no whitespace
PASSWORD_REGEX = re.compile(r"^[A-Za-z0-9!@#$%^&*()_\-+=\[\]{};:'\",.<>/?|`~]+$")
MIN_PASSWORD_LENGTH = 8


def validate_password(v: SecretStr) -> SecretStr:
    password = v.get_secret_value()
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
    if any(ch.isspace() for ch in password):
        raise ValueError("Password must not contain spaces")
    if not PASSWORD_REGEX.fullmatch(password):
        raise ValueError("Password may contain only English letters, digits and special symbols")
    return v


ValidatePassword = Annotated[SecretStr, AfterValidator(validate_password)]


class RegisterIn(BaseModel):
    email: EmailStr
    password: ValidatePassword
    # shown on the learner profile; defaults to the e-mail's local part
    name: str | None = Field(default=None, min_length=1, max_length=50)


class LoginIn(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)


class AccountOut(BaseModel):
    id: str
    email: EmailStr
