# Import all models here so Alembic and create_all can see them
from baatcheet.db.session import Base

from baatcheet.modules.user_management.models.user import User
from baatcheet.modules.friendships.models.friendship import Friendship
from baatcheet.modules.posts.models.post import Post
from baatcheet.modules.posts.likes.models.like import PostLike
from baatcheet.modules.posts.comments.models.comment import Comment
