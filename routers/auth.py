import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from authx import AuthX, AuthXConfig, TokenPayload
from core.config import settings
from core.database import SessionLocal, get_db
from domain.timestamps import as_utc
from schemas.auth import AccountOut, LoginIn, RegisterIn
from repositories.refresh_token_repo import RefreshTokenRepository
from services.auth_services import AuthService
from services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user", tags=["user"])

_cookie_samesite = settings.JWT_COOKIE_SAMESITE.lower() if settings.JWT_COOKIE_SAMESITE else "lax"
_cookie_domain = settings.JWT_COOKIE_DOMAIN or None

config = AuthXConfig(
    JWT_SECRET_KEY=settings.SECRET_KEY,
    JWT_ALGORITHM=settings.JWT_ALG,
    JWT_ACCESS_TOKEN_EXPIRES=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    JWT_REFRESH_TOKEN_EXPIRES=timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
    JWT_TOKEN_LOCATION=["cookies"],
    JWT_ACCESS_COOKIE_NAME=settings.JWT_ACCESS_COOKIE_NAME,
    JWT_REFRESH_COOKIE_NAME=settings.JWT_REFRESH_COOKIE_NAME,
    JWT_COOKIE_SAMESITE=_cookie_samesite,
    JWT_COOKIE_SECURE=settings.JWT_COOKIE_SECURE,
    JWT_COOKIE_DOMAIN=_cookie_domain,
    JWT_COOKIE_CSRF_PROTECT=settings.JWT_COOKIE_CSRF_PROTECT,
)

security = AuthX(config=config)


def current_user_id(payload: TokenPayload = Depends(security.access_token_required)) -> str:
    """Account id of the signed-in learner; also the key of their profile document."""
    if not payload.sub:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid subject in token")
    return str(payload.sub)


def _decode_token(token: str) -> TokenPayload:
    return TokenPayload.decode(
        token=token,
        key=security.config.public_key,
        algorithms=[security.config.JWT_ALGORITHM],
    )


def _refresh_metadata(token: str) -> tuple[str, datetime]:
    payload = _decode_token(token)
    if payload.jti is None or payload.exp is None:
        raise ValueError("Refresh token is missing jti or exp")
    if isinstance(payload.exp, datetime):
        return payload.jti, as_utc(payload.exp)
    return payload.jti, datetime.fromtimestamp(payload.exp, tz=timezone.utc)


def _is_token_revoked(token: str, **_: Any) -> bool:
    try:
        payload = _decode_token(token)
    except Exception:
        return True
    # only refresh tokens are tracked server-side
    if payload.type != "refresh" or payload.jti is None:
        return False

    db = SessionLocal()
    try:
        return RefreshTokenRepository(db).is_revoked(payload.jti)
    finally:
        db.close()


security.set_token_blocklist(_is_token_revoked)


def _issue_cookies(response: Response, repo: RefreshTokenRepository, account_id: str, *, rotate: bool) -> None:
    access_token = security.create_access_token(uid=account_id)
    refresh_token = security.create_refresh_token(uid=account_id)

    jti, expires_at = _refresh_metadata(refresh_token)
    if rotate:
        repo.add(user_id=account_id, jti=jti, expires_at=expires_at)
    else:
        repo.replace_for_user(user_id=account_id, jti=jti, expires_at=expires_at)

    security.set_access_cookies(access_token, response)
    security.set_refresh_cookies(refresh_token, response)


def _clear_cookies(response: Response) -> None:
    security.unset_cookies(response)
    cookie_kwargs = {
        "path": "/",
        "domain": _cookie_domain,
        "samesite": _cookie_samesite,
        "secure": settings.JWT_COOKIE_SECURE,
    }
    for name in (security.config.JWT_ACCESS_COOKIE_NAME, security.config.JWT_REFRESH_COOKIE_NAME):
        response.delete_cookie(name, httponly=True, **cookie_kwargs)
    for name in (security.config.JWT_ACCESS_CSRF_COOKIE_NAME, security.config.JWT_REFRESH_CSRF_COOKIE_NAME):
        if name:
            response.delete_cookie(name, httponly=False, **cookie_kwargs)


@router.post("/register", response_model=AccountOut)
async def post_reg(data: RegisterIn, db: Session = Depends(get_db)):
    account = AuthService(db).sign_up(email=data.email, password=data.password)
    UserService(db).ensure_profile(account.id, data.name or data.email.split("@")[0])
    return AccountOut(id=account.id, email=account.email)


@router.post("/login")
async def post_login(response: Response, data: LoginIn, db: Session = Depends(get_db)):
    account = AuthService(db).login(email=data.email, password=data.password)
    # accounts created before profiles existed get one on first sign-in
    UserService(db).ensure_profile(account.id, account.email.split("@")[0])
    _issue_cookies(response, RefreshTokenRepository(db), account.id, rotate=False)
    return {"status": "ok"}


@router.get("/me")
async def me(user_id: str = Depends(current_user_id)):
    return {"user_id": user_id}


@router.post("/logout")
async def logout(
    response: Response,
    payload: TokenPayload = Depends(security.refresh_token_required),
    db: Session = Depends(get_db),
):
    if payload.jti:
        RefreshTokenRepository(db).revoke(payload.jti)
    _clear_cookies(response)
    logger.info("Signed out %s", payload.sub)
    return {"ok": True}


@router.post("/refresh")
async def refresh(
    response: Response,
    payload: TokenPayload = Depends(security.refresh_token_required),
    db: Session = Depends(get_db),
):
    if not payload.sub or payload.jti is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Malformed refresh token")
    user_id = str(payload.sub)

    repo = RefreshTokenRepository(db)
    try:
        repo.assert_active(jti=payload.jti, user_id=user_id)
    except PermissionError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc

    repo.revoke(payload.jti)
    _issue_cookies(response, repo, user_id, rotate=True)
    return {"status": "ok"}
