from sqlalchemy import Column, String, DateTime, Text, ForeignKey

from baatcheet.db.session import Base, utcnow


class Comment(Base):
    __tablename__ = "comments"

    id = Column(String, primary_key=True, index=True)
    content = Column(Text, nullable=False)
    author_id = Column(String, ForeignKey("users.id"))
    post_id = Column(String, ForeignKey("posts.id"), index=True)
    created_at = Column(DateTime, default=utcnow)
