from sqlalchemy import Column, String, DateTime, ForeignKey

from baatcheet.db.session import Base, utcnow


class PostLike(Base):
    __tablename__ = "post_likes"

    # The composite key makes a like a set member: one row per (post, user)
    post_id = Column(String, ForeignKey("posts.id"), primary_key=True)
    user_id = Column(String, ForeignKey("users.id"), primary_key=True)
    created_at = Column(DateTime, default=utcnow)
