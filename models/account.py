from sqlalchemy import Column, DateTime, String, func
from sqlalchemy.orm import relationship

from core.database import Base


class Account(Base):
    """Sign-in credentials; the learner profile lives in a separate document keyed by ``id``."""

    __tablename__ = "accounts"

    id = Column(String(64), primary_key=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    refresh_tokens = relationship("RefreshToken", back_populates="account", cascade="all, delete-orphan")
