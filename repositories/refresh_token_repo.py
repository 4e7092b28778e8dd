from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from domain.timestamps import as_utc, utcnow
from models.refresh_token import RefreshToken


class RefreshTokenRepository:
    """One live refresh token per account; rotated on every refresh."""

    def __init__(self, db: Session):
        self.db = db

    def add(self, *, user_id: str, jti: str, expires_at: datetime) -> RefreshToken:
        token = RefreshToken(user_id=user_id, jti=jti, expires_at=expires_at)
        self.db.add(token)
        self.db.commit()
        self.db.refresh(token)
        return token

    def replace_for_user(self, *, user_id: str, jti: str, expires_at: datetime) -> RefreshToken:
        self.db.execute(delete(RefreshToken).where(RefreshToken.user_id == user_id))
        self.db.commit()
        return self.add(user_id=user_id, jti=jti, expires_at=expires_at)

    def get_by_jti(self, jti: str) -> RefreshToken | None:
        return self.db.execute(select(RefreshToken).where(RefreshToken.jti == jti)).scalar_one_or_none()

    def revoke(self, jti: str) -> None:
        token = self.get_by_jti(jti)
        if token:
            self._mark_revoked(token)

    def is_revoked(self, jti: str) -> bool:
        token = self.get_by_jti(jti)
        if token is None or token.revoked:
            return True
        return self._expire_if_due(token)

    def assert_active(self, *, jti: str, user_id: str) -> RefreshToken:
        token = self.get_by_jti(jti)
        if not token or token.user_id != user_id:
            raise PermissionError("Refresh token is not registered")
        if token.revoked:
            raise PermissionError("Refresh token has been revoked")
        if self._expire_if_due(token):
            raise PermissionError("Refresh token has expired")
        return token

    def _expire_if_due(self, token: RefreshToken) -> bool:
        # sqlite hands back naive datetimes
        if as_utc(token.expires_at) > utcnow():
            return False
        self._mark_revoked(token)
        return True

    def _mark_revoked(self, token: RefreshToken) -> None:
        token.mark_revoked()
        self.db.add(token)
        self.db.commit()
