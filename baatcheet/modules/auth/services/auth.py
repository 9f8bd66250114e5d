import logging
import uuid
from typing import Any, Dict, Optional, Tuple

from fastapi import UploadFile
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from baatcheet.core.config import Settings
from baatcheet.core.exceptions import AuthError, ConflictError, ValidationError
from baatcheet.core.security import create_access_token, get_password_hash, verify_password
from baatcheet.core.storage import LocalAssetStorage
from baatcheet.db.session import commit_or_raise
from baatcheet.modules.user_management.models.user import User
from baatcheet.modules.user_management.schemas.user import UserCreate
from baatcheet.modules.user_management.services.user import get_user_by_email

logger = logging.getLogger("baatcheet")


async def register(
    db: Session,
    storage: LocalAssetStorage,
    user_data: Dict[str, Any],
    picture: Optional[UploadFile] = None,
) -> User:
    """
    Register a new user with an optional profile picture.

    Fields are validated and the email checked before the picture is
    written, so a rejected registration leaves no file behind.
    """
    try:
        user_in = UserCreate(**{k: v for k, v in user_data.items() if v is not None})
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic(e)

    if get_user_by_email(db, user_in.email):
        raise ConflictError("Email already registered", context={"email": user_in.email})

    stored = await storage.save(picture) if picture and picture.filename else None

    user = User(
        id=str(uuid.uuid4()),
        first_name=user_in.first_name,
        last_name=user_in.last_name,
        email=user_in.email,
        hashed_password=get_password_hash(user_in.password),
        location=user_in.location,
        occupation=user_in.occupation,
        picture_path=stored.key if stored else None,
        picture_original_name=stored.original_name if stored else None,
        viewed_profile=0,
        impressions=0,
    )
    db.add(user)
    try:
        commit_or_raise(db, "register user")
    except IntegrityError:
        # Lost a race against another registration with the same email
        if stored:
            storage.delete(stored.key)
        raise ConflictError("Email already registered", context={"email": user_in.email})
    except Exception:
        if stored:
            storage.delete(stored.key)
        raise

    db.refresh(user)
    logger.info(f"Registered user {user.id}")
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    """Return the user for valid credentials or raise AuthError"""
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.hashed_password):
        logger.warning(f"Failed login attempt for {email}")
        raise AuthError("Invalid email or password")
    return user


def login(db: Session, settings: Settings, email: str, password: str) -> Tuple[str, User]:
    """Authenticate and issue a signed, time-bounded bearer token"""
    user = authenticate(db, email, password)
    token = create_access_token(user.id, settings)
    logger.info(f"User {user.id} logged in")
    return token, user
