from typing import List, Tuple
import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy import and_, or_

from baatcheet.core.exceptions import ValidationError
from baatcheet.db.session import commit_or_raise
from baatcheet.modules.friendships.models.friendship import Friendship
from baatcheet.modules.user_management.models.user import User
from baatcheet.modules.user_management.services.user import get_user_or_raise

logger = logging.getLogger(__name__)


def get_bidirectional_friendship_filter(user_id: str, friend_id: str):
    """Create a filter for bidirectional friendship between two users"""
    return or_(
        and_(Friendship.user_id == user_id, Friendship.friend_id == friend_id),
        and_(Friendship.user_id == friend_id, Friendship.friend_id == user_id)
    )


def _delete_friendship(db: Session, user_id: str, friend_id: str) -> int:
    return db.query(Friendship).filter(
        get_bidirectional_friendship_filter(user_id, friend_id)
    ).delete(synchronize_session=False)


def get_friends(db: Session, user_id: str) -> List[User]:
    """Get a user's friends as User objects, most recent friendship first"""
    get_user_or_raise(db, user_id)
    return (
        db.query(User)
        .join(Friendship, Friendship.friend_id == User.id)
        .filter(Friendship.user_id == user_id)
        .order_by(Friendship.created_at.desc())
        .all()
    )


def add_remove_friend(db: Session, user_id: str, friend_id: str) -> Tuple[User, User]:
    """
    Flip the friend relation between two users.

    Both direction rows are deleted in one statement; when nothing was
    deleted the users were not friends and both rows are inserted instead.
    """
    if user_id == friend_id:
        raise ValidationError("Users cannot befriend themselves", context={"user_id": user_id})

    user = get_user_or_raise(db, user_id)
    friend = get_user_or_raise(db, friend_id)

    removed = _delete_friendship(db, user_id, friend_id)
    if not removed:
        db.add_all([
            Friendship(user_id=user_id, friend_id=friend_id),
            Friendship(user_id=friend_id, friend_id=user_id),
        ])

    try:
        commit_or_raise(db, "update friends")
    except IntegrityError:
        # A concurrent toggle inserted the pair first; this flip undoes it
        logger.info(f"Concurrent friend toggle detected: {user_id} <-> {friend_id}")
        _delete_friendship(db, user_id, friend_id)
        commit_or_raise(db, "update friends")
        removed = 1

    action = "removed" if removed else "created"
    logger.info(f"Successfully {action} bidirectional friendship: {user_id} <-> {friend_id}")

    db.refresh(user)
    db.refresh(friend)
    return user, friend
