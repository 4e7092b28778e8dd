import uuid

from sqlalchemy.orm import Session
from sqlalchemy import select
from models.account import Account


class AccountRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_email(self, email: str) -> Account | None:
        return self.db.execute(select(Account).where(Account.email == email)).scalar_one_or_none()

    def get_by_id(self, account_id: str) -> Account | None:
        return self.db.get(Account, account_id)

    def create(self, *, email: str, password_hash: str) -> Account:
        account = Account(id=uuid.uuid4().hex, email=email, password_hash=password_hash)
        self.db.add(account)
        self.db.commit()
        self.db.refresh(account)
        return account
