from typing import List

from sqlalchemy import Column, String, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship

from baatcheet.db.session import Base, utcnow


class Post(Base):
    __tablename__ = "posts"

    id = Column(String, primary_key=True, index=True)
    author_id = Column(String, ForeignKey("users.id"), index=True, nullable=False)
    text = Column(Text, nullable=False)
    picture_path = Column(String, nullable=True)
    picture_original_name = Column(String, nullable=True)
    created_at = Column(DateTime, default=utcnow, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    like_entries = relationship(
        "PostLike",
        order_by="PostLike.created_at",
        lazy="selectin",
        viewonly=True,
    )
    comment_entries = relationship(
        "Comment",
        order_by="Comment.created_at",
        lazy="selectin",
        viewonly=True,
    )

    @property
    def likes(self) -> List[str]:
        return [like.user_id for like in self.like_entries]

    @property
    def comments(self) -> List[str]:
        return [comment.content for comment in self.comment_entries]
