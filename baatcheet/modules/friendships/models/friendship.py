from sqlalchemy import Column, String, DateTime, ForeignKey, CheckConstraint

from baatcheet.db.session import Base, utcnow


class Friendship(Base):
    """One direction of a friend relation; a friendship is always two rows"""
    __tablename__ = "friendships"

    user_id = Column(String, ForeignKey("users.id"), primary_key=True)
    friend_id = Column(String, ForeignKey("users.id"), primary_key=True)
    created_at = Column(DateTime, default=utcnow)

    __table_args__ = (
        CheckConstraint("user_id != friend_id", name="no_self_friendship"),
    )
