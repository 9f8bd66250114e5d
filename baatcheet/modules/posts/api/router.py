from typing import Any, List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session

from baatcheet.core.storage import LocalAssetStorage
from baatcheet.deps import get_db, get_storage, verify_token
from baatcheet.modules.posts.comments.schemas.comment import CommentCreate
from baatcheet.modules.posts.comments.services.comment import add_comment
from baatcheet.modules.posts.likes.services.like import toggle_like
from baatcheet.modules.posts.schemas.post import Post as PostSchema
from baatcheet.modules.posts.services.post import create_post, get_posts, get_user_posts

router = APIRouter()


@router.post("", response_model=PostSchema, status_code=status.HTTP_201_CREATED)
async def create_new_post(
    *,
    db: Session = Depends(get_db),
    storage: LocalAssetStorage = Depends(get_storage),
    text: Optional[str] = Form(None),
    picture: Optional[UploadFile] = File(None),
    current_user_id: str = Depends(verify_token),
) -> Any:
    """
    Create new post with optional picture file.
    """
    post = await create_post(db, storage, current_user_id, text, picture)
    return PostSchema.model_validate(post)


@router.get("", response_model=List[PostSchema])
def read_posts(db: Session = Depends(get_db)) -> Any:
    """
    Retrieve the feed: every post, newest first.
    """
    return [PostSchema.model_validate(post) for post in get_posts(db)]


@router.get("/{user_id}", response_model=List[PostSchema])
def read_user_posts(
    user_id: str,
    db: Session = Depends(get_db),
) -> Any:
    """
    Get posts by author ID.
    """
    return [PostSchema.model_validate(post) for post in get_user_posts(db, user_id)]


@router.patch("/{post_id}/like", response_model=PostSchema)
def like_post(
    post_id: str,
    db: Session = Depends(get_db),
    current_user_id: str = Depends(verify_token),
) -> Any:
    return PostSchema.model_validate(toggle_like(db, post_id, current_user_id))


@router.post("/{post_id}/comment", response_model=PostSchema)
def comment_on_post(
    post_id: str,
    comment_in: CommentCreate,
    db: Session = Depends(get_db),
    current_user_id: str = Depends(verify_token),
) -> Any:
    return PostSchema.model_validate(add_comment(db, post_id, comment_in, current_user_id))
