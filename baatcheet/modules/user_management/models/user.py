from typing import List

from sqlalchemy import Column, String, DateTime, Integer
from sqlalchemy.orm import relationship

from baatcheet.db.session import Base, utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    picture_path = Column(String, nullable=True)
    picture_original_name = Column(String, nullable=True)
    location = Column(String, nullable=True)
    occupation = Column(String, nullable=True)
    viewed_profile = Column(Integer, default=0, nullable=False)
    impressions = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Rows are written by the friendship service, never through this collection
    friendships = relationship(
        "Friendship",
        foreign_keys="Friendship.user_id",
        order_by="Friendship.created_at",
        lazy="selectin",
        viewonly=True,
    )

    @property
    def friends(self) -> List[str]:
        return [friendship.friend_id for friendship in self.friendships]
