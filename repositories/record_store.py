"""Key/value transports for whole-record persistence."""
import json
import logging
from pathlib import Path
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.orm import Session

from models.stored_record import StoredRecord

logger = logging.getLogger(__name__)


class RecordStore(Protocol):
    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class SqlRecordStore:
    def __init__(self, db: Session):
        self.db = db

    def get(self, key: str) -> str | None:
        stmt = select(StoredRecord.value).where(StoredRecord.key == key)
        return self.db.execute(stmt).scalar_one_or_none()

    def set(self, key: str, value: str) -> None:
        entity = self.db.get(StoredRecord, key)
        if entity:
            entity.value = value
        else:
            self.db.add(StoredRecord(key=key, value=value))
        self.db.commit()

    def delete(self, key: str) -> None:
        entity = self.db.get(StoredRecord, key)
        if entity is None:
            return
        self.db.delete(entity)
        self.db.commit()


class JsonFileRecordStore:
    """All keys kept in one JSON object on disk."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except ValueError as exc:
            logger.warning("Record file %s is unreadable, treating it as empty: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Record file %s does not hold a JSON object, treating it as empty", self.path)
            return {}
        return data

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        tmp.replace(self.path)

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def delete(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)
