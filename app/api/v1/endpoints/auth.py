# File: app/api/v1/endpoints/auth.py
from datetime import datetime, timedelta, timezone
from typing import Any
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from app import crud, schemas
from app.api import deps
from app.core import security
from app.core.config import settings
from app.db.database import get_db
from app.models.user import User
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

def _issue_token(db: Session, user: User) -> dict:
    user.last_login = datetime.now(timezone.utc)
    db.commit()
    access_token = security.create_access_token(
        user.email,
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        extra={"role": user.role.value},
    )
    return {"access_token": access_token, "token_type": "bearer"}

@router.post("/register", response_model=schemas.User, status_code=status.HTTP_201_CREATED)
def register(
    *,
    db: Session = Depends(get_db),
    user_in: schemas.UserCreate,
) -> Any:
    if crud.user.get_by_email(db, email=user_in.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A user with this email already exists"
        )
    user = crud.user.create(db, obj_in=user_in)
    logger.info(f"Registered {user.role.value} account {user.email}")
    return user

@router.post("/login", response_model=schemas.Token)
def login_access_token(
    db: Session = Depends(get_db),
    form_data: OAuth2PasswordRequestForm = Depends()
) -> Any:
    """OAuth2 compatible token login"""
    user = crud.user.authenticate(db, email=form_data.username, password=form_data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password"
        )
    if not crud.user.is_active(user):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Inactive user")
    return _issue_token(db, user)

@router.post("/login/json", response_model=schemas.Token)
def login_json(
    *,
    db: Session = Depends(get_db),
    login_in: schemas.LoginRequest,
) -> Any:
    user = crud.user.authenticate(db, email=login_in.email, password=login_in.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password"
        )
    if not crud.user.is_active(user):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Inactive user")
    return _issue_token(db, user)

@router.get("/me", response_model=schemas.User)
def read_current_user(current_user: User = Depends(deps.get_current_active_user)) -> Any:
    return current_user
