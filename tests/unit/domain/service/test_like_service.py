"""Unit tests for LikeService."""

import asyncio
from uuid import uuid4

import pytest

from vidnest.domain.error import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    OperationTimeoutError,
    TargetNotFoundError,
)
from vidnest.domain.model import Like, Tweet, Video
from vidnest.domain.repository import (
    CommentRepository,
    LikeRepository,
    TweetRepository,
    VideoRepository,
)
from vidnest.domain.service import CommentService, LikeService
from vidnest.domain.value import (
    CommentRef,
    PageRequest,
    TargetKind,
    TweetRef,
    UserId,
    VideoRef,
)
from vidnest.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryLikeRepository,
    InMemoryTweetRepository,
    InMemoryUserRepository,
    InMemoryVideoRepository,
)
from tests.conftest import make_tweet, make_user, make_video
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


class SlowLikeRepository(InMemoryLikeRepository):
    """Like repository whose inserts hang."""

    async def create(self, like: Like) -> Like:
        await asyncio.sleep(10)
        return await super().create(like)


class TestLike:
    """Tests for like method."""

    @pytest.mark.asyncio
    async def test_like_video(self, unit_env):
        """Liking an existing video records one like."""
        # Arrange
        like_service = await unit_env.get(LikeService)
        video = await make_video(unit_env)
        actor_id = UserId(uuid4())
        target = VideoRef(id=video.id)

        # Act
        like = await like_service.like(actor_id, target)

        # Assert
        assert like.liked_by == actor_id
        assert like.target == target
        assert await like_service.is_liked(actor_id, target) is True
        assert await like_service.count_for(target) == 1

    @pytest.mark.asyncio
    async def test_second_like_conflicts(self, unit_env):
        """Liking the same target twice fails with ConflictError, not a system error."""
        # Arrange
        like_service = await unit_env.get(LikeService)
        tweet = await make_tweet(unit_env)
        actor_id = UserId(uuid4())
        target = TweetRef(id=tweet.id)
        await like_service.like(actor_id, target)

        # Act & Assert
        with pytest.raises(ConflictError):
            await like_service.like(actor_id, target)
        assert await like_service.count_for(target) == 1

    @pytest.mark.asyncio
    async def test_concurrent_duplicate_likes_store_one_row(self, unit_env):
        """Two simultaneous likes by one user: one succeeds, one conflicts."""
        # Arrange
        like_service = await unit_env.get(LikeService)
        video = await make_video(unit_env)
        actor_id = UserId(uuid4())
        target = VideoRef(id=video.id)

        # Act
        results = await asyncio.gather(
            like_service.like(actor_id, target),
            like_service.like(actor_id, target),
            return_exceptions=True,
        )

        # Assert
        created = [r for r in results if isinstance(r, Like)]
        conflicts = [r for r in results if isinstance(r, ConflictError)]
        assert len(created) == 1
        assert len(conflicts) == 1
        assert await like_service.count_for(target) == 1

    @pytest.mark.asyncio
    async def test_kinds_are_independent(self, unit_env):
        """A video and a tweet sharing an ID value are liked independently."""
        # Arrange
        like_service = await unit_env.get(LikeService)
        video_repo = await unit_env.get(VideoRepository)
        tweet_repo = await unit_env.get(TweetRepository)
        shared = uuid4()
        await video_repo.save(Video(id=shared, owner_id=uuid4(), title="Same id"))
        await tweet_repo.save(Tweet(id=shared, owner_id=uuid4(), content="Same id"))
        actor_id = UserId(uuid4())

        # Act
        await like_service.like(actor_id, VideoRef(id=shared))
        await like_service.like(actor_id, TweetRef(id=shared))

        # Assert
        assert await like_service.count_for(VideoRef(id=shared)) == 1
        assert await like_service.count_for(TweetRef(id=shared)) == 1
        assert not await like_service.is_liked(actor_id, CommentRef(id=shared))

    @pytest.mark.asyncio
    async def test_missing_target(self, unit_env):
        """Liking a target that does not exist is a not-found error."""
        like_service = await unit_env.get(LikeService)

        with pytest.raises(TargetNotFoundError):
            await like_service.like(UserId(uuid4()), VideoRef(id=uuid4()))

    @pytest.mark.asyncio
    async def test_comment_like_increments_counter(self, unit_env):
        """Liking a comment bumps its like_count."""
        # Arrange
        like_service = await unit_env.get(LikeService)
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        owner = await make_user(unit_env)
        video = await make_video(unit_env)
        comment = await comment_service.create_comment(
            owner.id, VideoRef(id=video.id), "nice"
        )

        # Act
        await like_service.like(UserId(uuid4()), CommentRef(id=comment.id))
        await like_service.like(UserId(uuid4()), CommentRef(id=comment.id))

        # Assert
        stored = await comment_repo.find_by_id(comment.id)
        assert stored.like_count == 2


class TestUnlike:
    """Tests for unlike method."""

    @pytest.mark.asyncio
    async def test_unlike_removes_like(self, unit_env):
        # Arrange
        like_service = await unit_env.get(LikeService)
        video = await make_video(unit_env)
        actor_id = UserId(uuid4())
        target = VideoRef(id=video.id)
        await like_service.like(actor_id, target)

        # Act
        await like_service.unlike(actor_id, target)

        # Assert
        assert await like_service.is_liked(actor_id, target) is False
        assert await like_service.count_for(target) == 0

    @pytest.mark.asyncio
    async def test_unlike_without_like(self, unit_env):
        """Unliking something never liked is a not-found error."""
        like_service = await unit_env.get(LikeService)
        video = await make_video(unit_env)

        with pytest.raises(NotFoundError):
            await like_service.unlike(UserId(uuid4()), VideoRef(id=video.id))

    @pytest.mark.asyncio
    async def test_unlike_only_touches_own_like(self, unit_env):
        """Another user's like on the same target survives."""
        # Arrange
        like_service = await unit_env.get(LikeService)
        video = await make_video(unit_env)
        alice, bob = UserId(uuid4()), UserId(uuid4())
        target = VideoRef(id=video.id)
        await like_service.like(alice, target)
        await like_service.like(bob, target)

        # Act
        await like_service.unlike(alice, target)

        # Assert
        assert await like_service.is_liked(bob, target) is True
        assert await like_service.count_for(target) == 1


class TestRemove:
    """Tests for remove method (delete by like ID)."""

    @pytest.mark.asyncio
    async def test_owner_removes(self, unit_env):
        # Arrange
        like_service = await unit_env.get(LikeService)
        like_repo = await unit_env.get(LikeRepository)
        video = await make_video(unit_env)
        actor_id = UserId(uuid4())
        like = await like_service.like(actor_id, VideoRef(id=video.id))

        # Act
        await like_service.remove(actor_id, like.id)

        # Assert
        assert await like_repo.find_by_id(like.id) is None

    @pytest.mark.asyncio
    async def test_other_user_forbidden(self, unit_env):
        """Deleting someone else's like is forbidden and leaves it in place."""
        # Arrange
        like_service = await unit_env.get(LikeService)
        like_repo = await unit_env.get(LikeRepository)
        video = await make_video(unit_env)
        like = await like_service.like(UserId(uuid4()), VideoRef(id=video.id))

        # Act & Assert
        with pytest.raises(ForbiddenError):
            await like_service.remove(UserId(uuid4()), like.id)
        assert await like_repo.find_by_id(like.id) is not None

    @pytest.mark.asyncio
    async def test_unknown_like(self, unit_env):
        like_service = await unit_env.get(LikeService)

        with pytest.raises(NotFoundError):
            await like_service.remove(UserId(uuid4()), uuid4())


class TestToggle:
    """Tests for toggle method."""

    @pytest.mark.asyncio
    async def test_toggle_on_then_off(self, unit_env):
        # Arrange
        like_service = await unit_env.get(LikeService)
        tweet = await make_tweet(unit_env)
        actor_id = UserId(uuid4())
        target = TweetRef(id=tweet.id)

        # Act
        first = await like_service.toggle(actor_id, target)
        second = await like_service.toggle(actor_id, target)

        # Assert
        assert first is True
        assert second is False
        assert await like_service.count_for(target) == 0

    @pytest.mark.asyncio
    async def test_toggle_off_decrements_comment_counter(self, unit_env):
        # Arrange
        like_service = await unit_env.get(LikeService)
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        owner = await make_user(unit_env)
        tweet = await make_tweet(unit_env)
        comment = await comment_service.create_comment(
            owner.id, TweetRef(id=tweet.id), "hi"
        )
        actor_id = UserId(uuid4())
        target = CommentRef(id=comment.id)

        # Act
        await like_service.toggle(actor_id, target)
        liked = await comment_repo.find_by_id(comment.id)
        await like_service.toggle(actor_id, target)
        unliked = await comment_repo.find_by_id(comment.id)

        # Assert
        assert liked.like_count == 1
        assert unliked.like_count == 0


class TestListing:
    """Tests for list_by_user and liked_states."""

    @pytest.mark.asyncio
    async def test_list_newest_first_and_filtered(self, unit_env):
        # Arrange
        like_service = await unit_env.get(LikeService)
        actor_id = UserId(uuid4())
        videos = [await make_video(unit_env) for _ in range(3)]
        tweet = await make_tweet(unit_env)
        for video in videos:
            await like_service.like(actor_id, VideoRef(id=video.id))
        await like_service.like(actor_id, TweetRef(id=tweet.id))

        # Act
        everything = await like_service.list_by_user(actor_id, PageRequest.of(1, 10))
        only_videos = await like_service.list_by_user(
            actor_id, PageRequest.of(1, 2), kind=TargetKind.VIDEO
        )

        # Assert
        assert everything.total_items == 4
        assert everything.items[0].target == TweetRef(id=tweet.id)
        assert only_videos.total_items == 3
        assert only_videos.total_pages == 2
        assert [like.target.id for like in only_videos.items] == [
            videos[2].id,
            videos[1].id,
        ]

    @pytest.mark.asyncio
    async def test_liked_states(self, unit_env):
        # Arrange
        like_service = await unit_env.get(LikeService)
        comment_service = await unit_env.get(CommentService)
        owner = await make_user(unit_env)
        video = await make_video(unit_env)
        liked = await comment_service.create_comment(
            owner.id, VideoRef(id=video.id), "one"
        )
        not_liked = await comment_service.create_comment(
            owner.id, VideoRef(id=video.id), "two"
        )
        viewer = UserId(uuid4())
        await like_service.like(viewer, CommentRef(id=liked.id))

        # Act
        states = await like_service.liked_states(
            viewer, TargetKind.COMMENT, [liked.id, not_liked.id]
        )

        # Assert
        assert states == {liked.id: True, not_liked.id: False}

    @pytest.mark.asyncio
    async def test_liked_states_empty(self, unit_env):
        like_service = await unit_env.get(LikeService)

        assert await like_service.liked_states(UserId(uuid4()), TargetKind.VIDEO, []) == {}


class TestDeadline:
    """Tests for per-operation deadlines."""

    @pytest.mark.asyncio
    async def test_slow_store_times_out(self):
        """A store that misses the deadline raises the retryable timeout error."""
        # Arrange
        users = InMemoryUserRepository()
        videos = InMemoryVideoRepository()
        comments = InMemoryCommentRepository(users)
        like_service = LikeService(
            like_repository=SlowLikeRepository(videos, comments, users),
            comment_repository=comments,
            video_repository=videos,
            tweet_repository=InMemoryTweetRepository(),
            default_timeout=5.0,
        )
        video = await videos.save(Video(id=uuid4(), owner_id=uuid4(), title="Slow"))

        # Act & Assert
        with pytest.raises(OperationTimeoutError) as exc_info:
            await like_service.like(UserId(uuid4()), VideoRef(id=video.id), timeout=0.01)
        assert exc_info.value.timeout == 0.01
