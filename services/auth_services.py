import logging
from typing import Callable, Union

from fastapi import HTTPException, status
from pydantic import SecretStr
from sqlalchemy.orm import Session

from core.security import hash_password, verify_password
from models.account import Account
from repositories.account_repo import AccountRepository

logger = logging.getLogger(__name__)

AuthListener = Callable[[Account | None], None]


class AuthService:
    def __init__(self, db: Session):
        self.repo = AccountRepository(db)

    def sign_up(self, *, email: str, password: Union[str, SecretStr]) -> Account:
        if self.repo.get_by_email(email):
            raise HTTPException(status_code=400, detail="Email already registered")
        account = self.repo.create(email=email, password_hash=hash_password(password))
        logger.info("Registered account %s", account.id)
        return account

    def login(self, *, email: str, password: Union[str, SecretStr]) -> Account:
        account = self.repo.get_by_email(email)
        if not account or not verify_password(password, account.password_hash):
            logger.info("Rejected login for %s", email)
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
        return account


class AuthSession:
    """Tracks who is signed in and tells subscribers whenever that changes."""

    def __init__(self, auth_service: AuthService):
        self.auth_service = auth_service
        self._current: Account | None = None
        self._listeners: list[AuthListener] = []

    @property
    def current_user(self) -> Account | None:
        return self._current

    def on_auth_state_changed(self, callback: AuthListener) -> Callable[[], None]:
        self._listeners.append(callback)
        callback(self._current)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def sign_up(self, email: str, password: Union[str, SecretStr]) -> Account:
        account = self.auth_service.sign_up(email=email, password=password)
        self._set_current(account)
        return account

    def login(self, email: str, password: Union[str, SecretStr]) -> Account:
        account = self.auth_service.login(email=email, password=password)
        self._set_current(account)
        return account

    def logout(self) -> None:
        self._set_current(None)

    def _set_current(self, account: Account | None) -> None:
        self._current = account
        for listener in list(self._listeners):
            listener(account)
