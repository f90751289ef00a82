"""
Authentication Routes

POST /auth/signup - Register new user, create role profile, send welcome email
POST /auth/login - Login and get JWT token
GET /auth/me - Get current user info
"""

import logging
import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy import text

from skillbridge.db.postgres import get_db_session
from skillbridge.core.auth import hash_password, verify_password, create_access_token, get_current_user
from skillbridge.services.mongo_service import (
    StudentProfileService, CompanyProfileService, EvaluatorProfileService
)
from skillbridge.services.notification_service import NotificationError, get_notification_service
from skillbridge.schemas.schemas import (
    SignupRequest, LoginRequest, TokenResponse, UserResponse, UserRole
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def create_role_profile(uid: str, role: UserRole, name: str) -> None:
    """Initialize the role-specific profile document."""
    if role == UserRole.student:
        StudentProfileService().create_default(uid)
    elif role == UserRole.company:
        CompanyProfileService().create_default(uid, company_name=name)
    elif role == UserRole.evaluator:
        EvaluatorProfileService().create_default(uid)


@router.post("/signup", response_model=TokenResponse, status_code=201)
async def signup(request: SignupRequest):
    """
    Register a new account.

    Creates the identity row, the empty role profile, and sends a welcome
    email. Returns a token so the client is logged in right away.
    """
    email = request.email.lower()
    uid = uuid.uuid4().hex

    with get_db_session() as db:
        result = db.execute(
            text("SELECT uid FROM users WHERE email = :email"),
            {"email": email}
        )
        if result.fetchone():
            raise HTTPException(status_code=400, detail="Email already registered")

        db.execute(
            text("""
                INSERT INTO users (uid, email, password_hash, name, role, is_active, created_at)
                VALUES (:uid, :email, :password_hash, :name, :role, :is_active, :created_at)
            """),
            {
                "uid": uid,
                "email": email,
                "password_hash": hash_password(request.password),
                "name": request.name.strip(),
                "role": request.role.value,
                "is_active": True,
                "created_at": datetime.now(timezone.utc).isoformat()
            }
        )
        # Inside the session: a failed profile write rolls back the user row
        create_role_profile(uid, request.role, request.name.strip())

    logger.info("Registered %s %s", request.role.value, uid)

    try:
        get_notification_service().send_welcome_email(to_email=email, user_name=request.name.strip())
    except NotificationError as e:
        logger.warning("Welcome email to %s failed: %s", email, e)

    token = create_access_token(data={"sub": uid, "role": request.role.value})
    return TokenResponse(access_token=token, uid=uid, role=request.role.value)


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest):
    """
    Login and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    with get_db_session() as db:
        result = db.execute(
            text("SELECT uid, password_hash, role, is_active FROM users WHERE email = :email"),
            {"email": request.email.lower()}
        )
        user = result.fetchone()

    if not user:
        raise HTTPException(status_code=401, detail="Invalid email or password")

    uid, password_hash, role, is_active = user

    if not verify_password(request.password, password_hash):
        raise HTTPException(status_code=401, detail="Invalid email or password")

    if not is_active:
        raise HTTPException(status_code=403, detail="Account deactivated")

    token = create_access_token(data={"sub": uid, "role": role})

    return TokenResponse(access_token=token, uid=uid, role=role)


@router.get("/me", response_model=UserResponse)
async def get_me(user: dict = Depends(get_current_user)):
    """Get current authenticated user's info."""
    return UserResponse(**user)
