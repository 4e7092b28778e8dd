from sqlalchemy import JSON, Column, DateTime, Integer, String, func

from core.database import Base


class ProfileDocument(Base):
    __tablename__ = "profiles"

    id = Column(String(64), primary_key=True)
    data = Column(JSON, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


class WordBookEntryDocument(Base):
    __tablename__ = "wordbook_entries"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    data = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)


class HistoryEntryDocument(Base):
    __tablename__ = "history_entries"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    data = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
