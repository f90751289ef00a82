"""
Authentication Utility - JWT and Password handling.

Provides:
- Password hashing with bcrypt
- JWT token creation/verification
- Identity store lookups (users table)
- FastAPI dependencies for protected routes, one per role
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy import text

from skillbridge.core.config import get_settings
from skillbridge.db.postgres import get_db_session

settings = get_settings()

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Bearer token extractor
bearer_scheme = HTTPBearer()

USER_COLUMNS = "uid, email, name, role, is_active, created_at"


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Optional[dict]:
    """Decode and verify JWT token."""
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def _row_to_user(row) -> dict:
    return {
        "uid": row[0], "email": row[1], "name": row[2],
        "role": row[3], "is_active": bool(row[4]), "created_at": row[5]
    }


def get_user_by_uid(uid: str) -> Optional[dict]:
    """Fetch a user row by uid, or None."""
    with get_db_session() as db:
        row = db.execute(
            text(f"SELECT {USER_COLUMNS} FROM users WHERE uid = :uid"),
            {"uid": uid}
        ).fetchone()
    return _row_to_user(row) if row else None


def get_users_by_uid(uids: list) -> dict:
    """Fetch several users at once, keyed by uid."""
    users = {}
    with get_db_session() as db:
        for uid in set(uids):
            row = db.execute(
                text(f"SELECT {USER_COLUMNS} FROM users WHERE uid = :uid"),
                {"uid": uid}
            ).fetchone()
            if row:
                users[uid] = _row_to_user(row)
    return users


async def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme)) -> dict:
    """
    FastAPI dependency - Get current authenticated user.

    Usage:
        @app.get("/protected")
        async def route(user: dict = Depends(get_current_user)):
            return user
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    payload = decode_token(credentials.credentials)
    if not payload:
        raise credentials_exception

    uid = payload.get("sub")
    if not uid:
        raise credentials_exception

    user = get_user_by_uid(uid)
    if not user:
        raise credentials_exception

    if not user["is_active"]:
        raise HTTPException(status_code=403, detail="Account deactivated")

    return user


def _require_role(role: str, label: str):
    async def dependency(user: dict = Depends(get_current_user)) -> dict:
        if user["role"] != role:
            raise HTTPException(status_code=403, detail=f"{label} only")
        return user
    return dependency


get_current_student = _require_role("student", "Students")
get_current_company = _require_role("company", "Companies")
get_current_evaluator = _require_role("evaluator", "Evaluators")


async def get_current_reviewer(user: dict = Depends(get_current_user)) -> dict:
    """Dependency - companies and evaluators may view candidate profiles."""
    if user["role"] not in ("company", "evaluator"):
        raise HTTPException(status_code=403, detail="Companies and evaluators only")
    return user
