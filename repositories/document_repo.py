from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from models.documents import HistoryEntryDocument, ProfileDocument, WordBookEntryDocument


def _as_entry(entity) -> dict:
    # sub-collection documents are returned with their id merged in
    return {"id": str(entity.id), **entity.data}


class ProfileDocumentRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, profile_id: str) -> dict | None:
        entity = self.db.get(ProfileDocument, profile_id)
        return dict(entity.data) if entity else None

    def set(self, profile_id: str, data: dict) -> dict:
        entity = self.db.get(ProfileDocument, profile_id)
        if entity:
            entity.data = dict(data)
        else:
            entity = ProfileDocument(id=profile_id, data=dict(data))
            self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return dict(entity.data)

    def update(self, profile_id: str, data: dict) -> dict:
        entity = self.db.get(ProfileDocument, profile_id)
        if entity is None:
            raise LookupError(f"Profile {profile_id} does not exist")
        # reassign so the JSON column is flagged dirty
        entity.data = {**entity.data, **data}
        self.db.commit()
        self.db.refresh(entity)
        return dict(entity.data)

    def delete(self, profile_id: str) -> bool:
        entity = self.db.get(ProfileDocument, profile_id)
        if entity is None:
            return False
        self.db.delete(entity)
        self.db.commit()
        return True


class _SubCollectionRepository:
    model = None

    def __init__(self, db: Session):
        self.db = db

    def add(self, *, user_id: str, data: dict) -> dict:
        now = datetime.now(timezone.utc)
        payload = {**data, "createdAt": now.isoformat()}
        entity = self.model(user_id=user_id, data=payload, created_at=now)
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return _as_entry(entity)

    def list_for_user(self, user_id: str) -> list[dict]:
        stmt = (
            select(self.model)
            .where(self.model.user_id == user_id)
            .order_by(self.model.created_at.desc(), self.model.id.desc())
        )
        return [_as_entry(entity) for entity in self.db.execute(stmt).scalars()]

    def delete(self, *, user_id: str, entry_id: str) -> bool:
        try:
            key = int(entry_id)
        except (TypeError, ValueError):
            return False
        stmt = select(self.model).where(self.model.id == key, self.model.user_id == user_id)
        entity = self.db.execute(stmt).scalar_one_or_none()
        if entity is None:
            return False
        self.db.delete(entity)
        self.db.commit()
        return True


class WordBookEntryRepository(_SubCollectionRepository):
    model = WordBookEntryDocument


class HistoryEntryRepository(_SubCollectionRepository):
    model = HistoryEntryDocument
