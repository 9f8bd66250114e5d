from typing import Optional
from sqlalchemy.orm import Session

from baatcheet.core.exceptions import NotFoundError
from baatcheet.modules.user_management.models.user import User


def get_user(db: Session, user_id: str) -> Optional[User]:
    """Get user by ID"""
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """Get user by email"""
    return db.query(User).filter(User.email == email.lower()).first()


def get_user_or_raise(db: Session, user_id: str) -> User:
    """Get user by ID or raise NotFoundError"""
    user = get_user(db, user_id)
    if not user:
        raise NotFoundError("User not found", context={"user_id": user_id})
    return user
