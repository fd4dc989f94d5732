import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import Optional

from auth import create_token, get_current_user
from config import PASSWORD_MIN_LENGTH
from database import get_db
from services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["Auth"])


# ── Pydantic schemas ──────────────────────────────────────────────
class RegisterRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


def _token_for(user) -> str:
    return create_token({"user_id": user.id, "email": user.email, "name": user.name})


# ── Routes ────────────────────────────────────────────────────────
@router.post("/register")
async def register(body: RegisterRequest, db: Session = Depends(get_db)):
    """Create an account, its streak row, and return a token."""
    if not body.name or not body.email or not body.password:
        raise HTTPException(status_code=400, detail="All fields are required")
    if len(body.password) < PASSWORD_MIN_LENGTH:
        raise HTTPException(status_code=400, detail=f"Password must be at least {PASSWORD_MIN_LENGTH} characters")

    try:
        if UserService.get_by_email(db, body.email):
            raise HTTPException(status_code=400, detail="Email already in use")

        user = UserService.register(db, body.name, body.email, body.password)
        return {
            "status": "success",
            "message": "Registration successful",
            "data": {"token": _token_for(user), "user": user.to_dict()},
        }
    except HTTPException:
        raise
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        raise HTTPException(status_code=400, detail="Email already in use")
    except Exception:
        logger.exception("Registration failed")
        raise HTTPException(status_code=500, detail="Server error")


@router.post("/login")
async def login(body: LoginRequest, db: Session = Depends(get_db)):
    """Authenticate with email + password."""
    if not body.email or not body.password:
        raise HTTPException(status_code=400, detail="Email and password are required")

    try:
        user, reason = UserService.authenticate(db, body.email, body.password)
        if not user:
            raise HTTPException(status_code=401, detail=reason)

        return {
            "status": "success",
            "message": "Logged in",
            "data": {"token": _token_for(user), "user": user.to_dict()},
        }
    except HTTPException:
        raise
    except Exception:
        logger.exception("Login failed")
        raise HTTPException(status_code=500, detail="Server error")


@router.get("/me")
async def me(user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    """Return the current user's profile."""
    try:
        user = UserService.get(db, user_id)
        if not user:
            raise HTTPException(status_code=404, detail="User not found")
        data = user.to_dict()
        data["created_at"] = str(user.created_at or "")
        return {"status": "success", "data": data}
    except HTTPException:
        raise
    except Exception:
        logger.exception("Fetching profile failed")
        raise HTTPException(status_code=500, detail="Server error")
