from typing import List
from pydantic import BaseModel


class FriendsUpdate(BaseModel):
    """Both sides of a friend toggle after it was applied"""
    user_id: str
    friends: List[str]
    friend_id: str
    friend_friends: List[str]
