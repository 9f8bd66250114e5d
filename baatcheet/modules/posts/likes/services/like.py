import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from baatcheet.db.session import commit_or_raise
from baatcheet.modules.posts.likes.models.like import PostLike
from baatcheet.modules.posts.models.post import Post
from baatcheet.modules.posts.services.post import get_post_or_raise
from baatcheet.modules.user_management.services.user import get_user_or_raise

logger = logging.getLogger(__name__)


def _delete_like(db: Session, post_id: str, user_id: str) -> int:
    return (
        db.query(PostLike)
        .filter(PostLike.post_id == post_id, PostLike.user_id == user_id)
        .delete(synchronize_session=False)
    )


def toggle_like(db: Session, post_id: str, user_id: str) -> Post:
    """
    Add ``user_id`` to the post's likes, or remove it if already there.

    The like is removed with a conditional delete; only when that deleted
    nothing is a new row inserted. If a concurrent toggle wins the insert,
    the primary key rejects ours and this call removes the like instead.
    Both the post and the liking user must exist.
    """
    post = get_post_or_raise(db, post_id)
    get_user_or_raise(db, user_id)

    removed = _delete_like(db, post_id, user_id)
    if not removed:
        db.add(PostLike(post_id=post_id, user_id=user_id))

    try:
        commit_or_raise(db, "update likes")
    except IntegrityError:
        logger.info(f"Concurrent like toggle detected on post {post_id} by {user_id}")
        _delete_like(db, post_id, user_id)
        commit_or_raise(db, "update likes")
        removed = 1

    logger.info(f"User {user_id} {'unliked' if removed else 'liked'} post {post_id}")
    db.refresh(post)
    return post
