import uuid
from sqlalchemy.orm import Session

from baatcheet.db.session import commit_or_raise
from baatcheet.modules.posts.comments.models.comment import Comment
from baatcheet.modules.posts.comments.schemas.comment import CommentCreate
from baatcheet.modules.posts.models.post import Post
from baatcheet.modules.posts.services.post import get_post_or_raise
from baatcheet.modules.user_management.services.user import get_user_or_raise


def add_comment(db: Session, post_id: str, comment_in: CommentCreate, author_id: str) -> Post:
    """Append a comment to a post and return the updated post"""
    post = get_post_or_raise(db, post_id)
    get_user_or_raise(db, author_id)

    comment = Comment(
        id=str(uuid.uuid4()),
        post_id=post_id,
        author_id=author_id,
        content=comment_in.text,
    )
    db.add(comment)
    commit_or_raise(db, "add comment")
    db.refresh(post)
    return post
