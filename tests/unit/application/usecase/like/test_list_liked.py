"""Unit tests for ListLikedVideosUseCase and ListLikedCommentsUseCase."""

from uuid import uuid4

import pytest

from vidnest.application.usecase.like.list_liked import (
    ListLikedCommentsUseCase,
    ListLikedRequest,
    ListLikedVideosUseCase,
)
from vidnest.domain.error import ValidationError
from vidnest.domain.model import Comment
from vidnest.domain.repository import CommentRepository
from vidnest.domain.service import LikeService
from vidnest.domain.value import CommentId, CommentRef, UserId, VideoRef
from tests.conftest import make_user, make_video
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def make_comment(env, owner_id: UserId, content: str = "Test comment") -> Comment:
    video = await make_video(env)
    repo = await env.get(CommentRepository)
    return await repo.save(
        Comment(
            id=CommentId(uuid4()),
            content=content,
            parent=VideoRef(id=video.id),
            owner_id=owner_id,
        )
    )


class TestListLikedVideosUseCase:
    """Tests for ListLikedVideosUseCase."""

    @pytest.mark.asyncio
    async def test_videos_joined_with_owner_newest_like_first(self, unit_env):
        # Arrange
        like_service = await unit_env.get(LikeService)
        use_case = await unit_env.get(ListLikedVideosUseCase)
        owner = await make_user(unit_env, username="grace", full_name="Grace H")
        first = await make_video(unit_env, owner_id=owner.id)
        second = await make_video(unit_env, owner_id=owner.id)
        actor_id = UserId(uuid4())
        await like_service.like(actor_id, VideoRef(id=first.id))
        second_like = await like_service.like(actor_id, VideoRef(id=second.id))

        # Act
        response = await use_case.execute(ListLikedRequest(actor_id=str(actor_id)))

        # Assert
        assert response.total_items == 2
        assert [item.video.video_id for item in response.items] == [
            str(second.id),
            str(first.id),
        ]
        newest = response.items[0]
        assert newest.like_id == str(second_like.id)
        assert newest.liked_at == second_like.created_at
        assert newest.video.title == "Test video"
        assert newest.owner.id == str(owner.id)
        assert newest.owner.username == "grace"
        assert newest.owner.full_name == "Grace H"

    @pytest.mark.asyncio
    async def test_only_video_likes_of_the_given_user(self, unit_env):
        # Arrange
        like_service = await unit_env.get(LikeService)
        use_case = await unit_env.get(ListLikedVideosUseCase)
        owner = await make_user(unit_env)
        video = await make_video(unit_env, owner_id=owner.id)
        comment = await make_comment(unit_env, owner.id)
        actor_id = UserId(uuid4())
        await like_service.like(actor_id, VideoRef(id=video.id))
        await like_service.like(actor_id, CommentRef(id=comment.id))
        await like_service.like(UserId(uuid4()), VideoRef(id=video.id))

        # Act
        response = await use_case.execute(ListLikedRequest(actor_id=str(actor_id)))

        # Assert
        assert response.total_items == 1
        assert response.items[0].video.video_id == str(video.id)

    @pytest.mark.asyncio
    async def test_video_without_known_owner_is_left_out(self, unit_env):
        # Arrange
        like_service = await unit_env.get(LikeService)
        use_case = await unit_env.get(ListLikedVideosUseCase)
        orphan = await make_video(unit_env)
        actor_id = UserId(uuid4())
        await like_service.like(actor_id, VideoRef(id=orphan.id))

        # Act
        response = await use_case.execute(ListLikedRequest(actor_id=str(actor_id)))

        # Assert
        assert response.items == []
        assert response.total_items == 0

    @pytest.mark.asyncio
    async def test_pagination_fields(self, unit_env):
        # Arrange
        like_service = await unit_env.get(LikeService)
        use_case = await unit_env.get(ListLikedVideosUseCase)
        owner = await make_user(unit_env)
        actor_id = UserId(uuid4())
        for _ in range(5):
            video = await make_video(unit_env, owner_id=owner.id)
            await like_service.like(actor_id, VideoRef(id=video.id))

        # Act
        response = await use_case.execute(
            ListLikedRequest(actor_id=str(actor_id), page=3, limit=2)
        )

        # Assert
        assert len(response.items) == 1
        assert response.total_items == 5
        assert response.total_pages == 3
        assert response.has_next_page is False

    @pytest.mark.asyncio
    async def test_malformed_user_id(self, unit_env):
        use_case = await unit_env.get(ListLikedVideosUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(ListLikedRequest(actor_id="nobody"))


class TestListLikedCommentsUseCase:
    """Tests for ListLikedCommentsUseCase."""

    @pytest.mark.asyncio
    async def test_comments_joined_with_author(self, unit_env):
        # Arrange
        like_service = await unit_env.get(LikeService)
        use_case = await unit_env.get(ListLikedCommentsUseCase)
        author = await make_user(unit_env, username="ada", avatar_url="https://a/ada.png")
        comment = await make_comment(unit_env, author.id, content="Nice cut")
        actor_id = UserId(uuid4())
        like = await like_service.like(actor_id, CommentRef(id=comment.id))

        # Act
        response = await use_case.execute(ListLikedRequest(actor_id=str(actor_id)))

        # Assert
        assert response.total_items == 1
        item = response.items[0]
        assert item.like_id == str(like.id)
        assert item.comment.comment_id == str(comment.id)
        assert item.comment.content == "Nice cut"
        assert item.owner.username == "ada"
        assert item.owner.avatar_url == "https://a/ada.png"

    @pytest.mark.asyncio
    async def test_like_on_deleted_comment_is_left_out(self, unit_env):
        # Arrange
        like_service = await unit_env.get(LikeService)
        use_case = await unit_env.get(ListLikedCommentsUseCase)
        author = await make_user(unit_env)
        kept = await make_comment(unit_env, author.id)
        removed = await make_comment(unit_env, author.id)
        actor_id = UserId(uuid4())
        await like_service.like(actor_id, CommentRef(id=kept.id))
        await like_service.like(actor_id, CommentRef(id=removed.id))
        await (await unit_env.get(CommentRepository)).delete_many([removed.id])

        # Act
        response = await use_case.execute(ListLikedRequest(actor_id=str(actor_id)))

        # Assert
        assert [item.comment.comment_id for item in response.items] == [str(kept.id)]

