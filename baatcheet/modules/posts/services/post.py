from typing import List, Optional
import uuid
import logging

from fastapi import UploadFile
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from baatcheet.core.exceptions import NotFoundError, ValidationError
from baatcheet.core.storage import LocalAssetStorage
from baatcheet.db.session import commit_or_raise
from baatcheet.modules.posts.models.post import Post
from baatcheet.modules.posts.schemas.post import PostCreate
from baatcheet.modules.user_management.services.user import get_user_or_raise

logger = logging.getLogger(__name__)


def get_post(db: Session, post_id: str) -> Optional[Post]:
    """Get post by ID"""
    return db.query(Post).filter(Post.id == post_id).first()


def get_post_or_raise(db: Session, post_id: str) -> Post:
    """Get post by ID or raise NotFoundError"""
    post = get_post(db, post_id)
    if not post:
        raise NotFoundError("Post not found", context={"post_id": post_id})
    return post


def get_posts(db: Session) -> List[Post]:
    """Get all posts, newest first"""
    logger.info("Getting all posts")
    return db.query(Post).order_by(Post.created_at.desc()).all()


def get_user_posts(db: Session, user_id: str) -> List[Post]:
    """Get posts by user ID, newest first"""
    logger.info(f"Getting posts for user ID: {user_id}")
    return (
        db.query(Post)
        .filter(Post.author_id == user_id)
        .order_by(Post.created_at.desc())
        .all()
    )


async def create_post(
    db: Session,
    storage: LocalAssetStorage,
    author_id: str,
    text: Optional[str],
    picture: Optional[UploadFile] = None,
) -> Post:
    """
    Create new post with an optional picture.

    The author is checked before anything is written, so an unknown author
    leaves neither a post row nor a stored file behind.
    """
    try:
        post_in = PostCreate(text=text or "")
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic(e)

    get_user_or_raise(db, author_id)

    stored = await storage.save(picture) if picture and picture.filename else None

    logger.info(f"Creating post for author ID: {author_id}")
    post = Post(
        id=str(uuid.uuid4()),
        author_id=author_id,
        text=post_in.text,
        picture_path=stored.key if stored else None,
        picture_original_name=stored.original_name if stored else None,
    )
    db.add(post)
    try:
        commit_or_raise(db, "create post")
    except Exception:
        if stored:
            storage.delete(stored.key)
        raise
    db.refresh(post)
    return post
