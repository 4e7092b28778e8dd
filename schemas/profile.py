from datetime import datetime

from pydantic import BaseModel, constr

from domain.language import Language
from domain.user import User


class LanguageOut(BaseModel):
    code: str
    name: str
    native_name: str

    @classmethod
    def of(cls, language: Language) -> "LanguageOut":
        return cls(code=language.code, name=language.name, native_name=language.native_name)


class ProfileOut(BaseModel):
    id: str
    name: str
    teaching_language: LanguageOut
    learning_languages: list[LanguageOut]
    created_at: datetime

    @classmethod
    def of(cls, user: User) -> "ProfileOut":
        return cls(
            id=user.id,
            name=user.name,
            teaching_language=LanguageOut.of(user.teaching_language),
            learning_languages=[LanguageOut.of(lang) for lang in user.learning_languages],
            created_at=user.created_at,
        )


class TeachingLanguageIn(BaseModel):
    code: str


class ProfileNameIn(BaseModel):
    name: constr(strip_whitespace=True, min_length=1, max_length=50)
