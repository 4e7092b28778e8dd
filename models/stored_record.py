from sqlalchemy import Column, DateTime, String, Text, func

from core.database import Base


class StoredRecord(Base):
    """Key/value row holding one serialized record, e.g. ``user`` or ``wordbook_<id>``."""

    __tablename__ = "stored_records"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
