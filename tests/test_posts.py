import asyncio
import io

import pytest
from fastapi import UploadFile

from baatcheet.core.exceptions import NotFoundError, ValidationError
from baatcheet.core.security import create_access_token
from baatcheet.modules.posts.comments.models.comment import Comment
from baatcheet.modules.posts.likes.models.like import PostLike
from baatcheet.modules.posts.likes.services import like as like_service
from baatcheet.modules.posts.likes.services.like import toggle_like
from baatcheet.modules.posts.models.post import Post
from baatcheet.modules.posts.services.post import create_post
from tests.conftest import PNG_BYTES, auth_headers


def new_post(client, token, text="hello", files=None):
    response = client.post("/posts", data={"text": text}, files=files, headers=auth_headers(token))
    assert response.status_code == 201, response.text
    return response.json()


class TestCreatePost:
    def test_create_post_with_picture(self, client, alice, storage):
        post = new_post(client, alice["token"], files={"picture": ("beach.png", PNG_BYTES, "image/png")})

        assert post["picture_original_name"] == "beach.png"
        assert storage.path_for(post["picture_path"]).exists()

        asset = client.get(f"/assets/{post['picture_path']}")
        assert asset.status_code == 200
        assert asset.content == PNG_BYTES

    def test_same_filename_twice_keeps_both_files(self, client, alice, storage):
        first = new_post(client, alice["token"], files={"picture": ("photo.png", PNG_BYTES, "image/png")})
        second = new_post(client, alice["token"], files={"picture": ("photo.png", PNG_BYTES + b"2", "image/png")})

        assert first["picture_path"] != second["picture_path"]
        assert storage.path_for(first["picture_path"]).read_bytes() == PNG_BYTES
        assert storage.path_for(second["picture_path"]).read_bytes() == PNG_BYTES + b"2"

    def test_oversized_picture_rejected(self, client, alice):
        response = client.post(
            "/posts",
            data={"text": "big"},
            files={"picture": ("big.png", b"x" * 2048, "image/png")},
            headers=auth_headers(alice["token"]),
        )
        assert response.status_code == 400

    def test_empty_text_rejected(self, client, alice):
        response = client.post("/posts", data={"text": "   "}, headers=auth_headers(alice["token"]))
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    def test_unknown_author_creates_nothing(self, db, storage):
        picture = UploadFile(file=io.BytesIO(PNG_BYTES), filename="ghost.png")

        with pytest.raises(NotFoundError):
            asyncio.run(create_post(db, storage, "ghost", "hello", picture))

        assert db.query(Post).count() == 0
        assert list(storage.directory.iterdir()) == []

    def test_token_for_deleted_author_is_not_found(self, client, settings):
        token = create_access_token("ghost", settings)
        response = client.post("/posts", data={"text": "hello"}, headers=auth_headers(token))
        assert response.status_code == 404


class TestListPosts:
    def test_feed_is_newest_first(self, client, alice, bob):
        first = new_post(client, alice["token"], text="first")
        second = new_post(client, bob["token"], text="second")

        posts = client.get("/posts").json()
        assert [post["id"] for post in posts] == [second["id"], first["id"]]

    def test_user_posts_only_include_author(self, client, alice, bob):
        new_post(client, alice["token"], text="from alice")
        new_post(client, bob["token"], text="from bob")

        posts = client.get(f"/posts/{alice['user']['id']}").json()
        assert [post["text"] for post in posts] == ["from alice"]

    def test_user_without_posts(self, client, alice):
        assert client.get(f"/posts/{alice['user']['id']}").json() == []


class TestLikes:
    def test_like_then_unlike(self, client, alice, bob):
        post = new_post(client, alice["token"])

        liked = client.patch(f"/posts/{post['id']}/like", headers=auth_headers(bob["token"]))
        assert liked.status_code == 200
        assert liked.json()["likes"] == [bob["user"]["id"]]

        unliked = client.patch(f"/posts/{post['id']}/like", headers=auth_headers(bob["token"]))
        assert unliked.json()["likes"] == []

    def test_like_unknown_post(self, client, alice):
        response = client.patch("/posts/missing/like", headers=auth_headers(alice["token"]))
        assert response.status_code == 404

    def test_like_requires_token(self, client, alice):
        post = new_post(client, alice["token"])
        response = client.patch(f"/posts/{post['id']}/like")
        assert response.status_code == 401

    def test_like_with_token_for_unknown_user(self, client, settings, alice, db):
        post = new_post(client, alice["token"])
        token = create_access_token("ghost", settings)

        response = client.patch(f"/posts/{post['id']}/like", headers=auth_headers(token))

        assert response.status_code == 404
        assert db.query(PostLike).count() == 0

    def test_toggle_like_is_self_inverse(self, db, client, alice, bob):
        post = new_post(client, alice["token"])
        user_id = bob["user"]["id"]

        assert toggle_like(db, post["id"], user_id).likes == [user_id]
        assert toggle_like(db, post["id"], user_id).likes == []

    def test_toggle_like_unknown_post_raises(self, db, alice):
        with pytest.raises(NotFoundError):
            toggle_like(db, "missing", alice["user"]["id"])

    def test_lost_insert_race_removes_like(self, app, db, client, alice, bob, monkeypatch):
        post = new_post(client, alice["token"])
        user_id = bob["user"]["id"]
        real_delete = like_service._delete_like
        calls = []

        def racing_delete(session, post_id, liker_id):
            calls.append(post_id)
            if len(calls) == 1:
                # Another toggle commits its like right after our delete ran
                other = app.state.session_factory()
                other.add(PostLike(post_id=post_id, user_id=liker_id))
                other.commit()
                other.close()
                return 0
            return real_delete(session, post_id, liker_id)

        monkeypatch.setattr(like_service, "_delete_like", racing_delete)

        assert toggle_like(db, post["id"], user_id).likes == []
        assert len(calls) == 2


class TestComments:
    def test_comments_keep_order(self, client, alice, bob):
        post = new_post(client, alice["token"])

        client.post(f"/posts/{post['id']}/comment", json={"text": "first!"}, headers=auth_headers(bob["token"]))
        response = client.post(
            f"/posts/{post['id']}/comment", json={"text": "second"}, headers=auth_headers(alice["token"])
        )

        assert response.status_code == 200
        assert response.json()["comments"] == ["first!", "second"]

    def test_comment_on_unknown_post(self, client, alice):
        response = client.post("/posts/missing/comment", json={"text": "hi"}, headers=auth_headers(alice["token"]))
        assert response.status_code == 404

    def test_comment_with_token_for_unknown_user(self, client, settings, alice, db):
        post = new_post(client, alice["token"])
        token = create_access_token("ghost", settings)

        response = client.post(f"/posts/{post['id']}/comment", json={"text": "boo"}, headers=auth_headers(token))

        assert response.status_code == 404
        assert db.query(Comment).count() == 0

    def test_blank_comment_rejected(self, client, alice):
        post = new_post(client, alice["token"])
        response = client.post(f"/posts/{post['id']}/comment", json={"text": "  "}, headers=auth_headers(alice["token"]))
        assert response.status_code == 422


def test_validation_error_from_pydantic_lists_fields():
    from pydantic import BaseModel
    from pydantic import ValidationError as PydanticValidationError

    class Sample(BaseModel):
        name: str

    with pytest.raises(PydanticValidationError) as exc_info:
        Sample()

    error = ValidationError.from_pydantic(exc_info.value)
    assert "name" in error.context
    assert error.status_code == 400
