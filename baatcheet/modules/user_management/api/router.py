from typing import Any, List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from baatcheet.core.exceptions import ForbiddenError
from baatcheet.deps import get_db, verify_token
from baatcheet.modules.friendships.schemas.friendship import FriendsUpdate
from baatcheet.modules.friendships.services.friendship import add_remove_friend, get_friends
from baatcheet.modules.user_management.schemas.user import User as UserSchema
from baatcheet.modules.user_management.services.user import get_user_or_raise

router = APIRouter()


@router.get("/{user_id}", response_model=UserSchema)
def read_user_by_id(
    user_id: str,
    db: Session = Depends(get_db),
) -> Any:
    """Get a specific user by id"""
    return UserSchema.model_validate(get_user_or_raise(db, user_id))


@router.get("/{user_id}/friends", response_model=List[UserSchema])
def read_user_friends(
    user_id: str,
    db: Session = Depends(get_db),
) -> Any:
    """Get a user's friends, most recent friendship first"""
    return [UserSchema.model_validate(friend) for friend in get_friends(db, user_id)]


@router.patch("/{user_id}/{friend_id}", response_model=FriendsUpdate)
def add_remove_user_friend(
    user_id: str,
    friend_id: str,
    db: Session = Depends(get_db),
    current_user_id: str = Depends(verify_token),
) -> Any:
    """Add the friend if absent, remove it otherwise; both sides are updated"""
    if current_user_id != user_id:
        raise ForbiddenError(
            "Cannot change another user's friends",
            context={"user_id": user_id, "token_user_id": current_user_id},
        )

    user, friend = add_remove_friend(db, user_id, friend_id)
    return FriendsUpdate(
        user_id=user.id,
        friends=user.friends,
        friend_id=friend.id,
        friend_friends=friend.friends,
    )
