"""Test configuration and fixtures."""

import os
from uuid import uuid4

import logfire
import pytest

from vidnest.domain.model import Tweet, User, Video
from vidnest.domain.repository import TweetRepository, UserRepository, VideoRepository
from vidnest.domain.value import TweetId, UserId, Username, VideoId

# Keep test runs local: no console spam, nothing sent anywhere
logfire.configure(send_to_logfire=False, console=False)


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless INTEGRATION=1 (they need a migrated postgres)."""
    if os.environ.get("INTEGRATION") == "1":
        return
    skip = pytest.mark.skip(reason="set INTEGRATION=1 to run against postgres")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip)


async def make_user(env, username: str | None = None, **fields) -> User:
    """Store a user in the environment's user repository.

    Args:
        env: Request-scoped test container
        username: Handle (random when omitted)
        **fields: Other User fields (full_name, avatar_url)
    """
    user_id = UserId(uuid4())
    user = User(
        id=user_id,
        username=Username(username or f"user-{str(user_id)[:8]}"),
        **fields,
    )
    repo = await env.get(UserRepository)
    return await repo.save(user)


async def make_video(
    env, owner_id: UserId | None = None, is_published: bool = True
) -> Video:
    """Store a video in the environment's video repository."""
    video = Video(
        id=VideoId(uuid4()),
        owner_id=owner_id or UserId(uuid4()),
        title="Test video",
        is_published=is_published,
    )
    repo = await env.get(VideoRepository)
    return await repo.save(video)


async def make_tweet(env, owner_id: UserId | None = None) -> Tweet:
    """Store a tweet in the environment's tweet repository."""
    tweet = Tweet(
        id=TweetId(uuid4()),
        owner_id=owner_id or UserId(uuid4()),
        content="Test tweet",
    )
    repo = await env.get(TweetRepository)
    return await repo.save(tweet)


def seed(client, maker, **kwargs):
    """Run one of the make_* helpers on a running TestClient's event loop.

    Args:
        client: TestClient opened as a context manager
        maker: make_user, make_video or make_tweet
        **kwargs: Passed through to the helper
    """

    async def _run():
        async with client.app.state.dishka_container() as env:
            return await maker(env, **kwargs)

    return client.portal.call(_run)


def auth(user_id) -> dict[str, str]:
    """Headers identifying the caller to the API."""
    return {"X-User-Id": str(user_id)}
