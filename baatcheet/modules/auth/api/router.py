"""Authentication router: registration and login"""
from typing import Any, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session

from baatcheet.core.config import Settings
from baatcheet.core.storage import LocalAssetStorage
from baatcheet.deps import get_db, get_settings, get_storage
from baatcheet.modules.auth.schemas.auth import LoginRequest, LoginResponse
from baatcheet.modules.auth.services.auth import login, register
from baatcheet.modules.user_management.schemas.user import User as UserSchema

router = APIRouter()


@router.post("/register", response_model=UserSchema, status_code=status.HTTP_201_CREATED)
async def register_user(
    *,
    db: Session = Depends(get_db),
    storage: LocalAssetStorage = Depends(get_storage),
    first_name: Optional[str] = Form(None),
    last_name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    password: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
    occupation: Optional[str] = Form(None),
    picture: Optional[UploadFile] = File(None),
) -> Any:
    """Register a new user with an optional profile picture"""
    user_data = {
        "first_name": first_name,
        "last_name": last_name,
        "email": email,
        "password": password,
        "location": location,
        "occupation": occupation,
    }
    user = await register(db, storage, user_data, picture)
    return UserSchema.model_validate(user)


@router.post("/login", response_model=LoginResponse)
def login_user(
    *,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    credentials: LoginRequest,
) -> Any:
    """Exchange email and password for a bearer token"""
    token, user = login(db, settings, credentials.email, credentials.password)
    return LoginResponse(token=token, user=UserSchema.model_validate(user))
