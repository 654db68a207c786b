"""Route tests for the comment endpoints."""

from uuid import uuid4

from tests.conftest import auth, make_tweet, make_user, make_video, seed

COMMENTS = "/api/v1/comments"


class TestCommentEndpoints:
    """HTTP behaviour of /comments."""

    def test_create_comment_returns_201(self, client):
        # Arrange
        owner = seed(client, make_user)
        video = seed(client, make_video)

        # Act
        response = client.post(
            COMMENTS,
            json={"content": "  First!  ", "videoId": str(video.id)},
            headers=auth(owner.id),
        )

        # Assert
        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Comment added"
        comment = body["data"]["comment"]
        assert comment["content"] == "First!"
        assert comment["videoId"] == str(video.id)
        assert comment["tweetId"] is None
        assert comment["likeCount"] == 0

    def test_create_without_identity_is_401(self, client):
        video = seed(client, make_video)

        response = client.post(
            COMMENTS, json={"content": "Hi", "videoId": str(video.id)}
        )

        assert response.status_code == 401

    def test_content_bounds(self, client):
        owner = seed(client, make_user)
        tweet = seed(client, make_tweet)

        def post(content):
            return client.post(
                COMMENTS,
                json={"content": content, "tweetId": str(tweet.id)},
                headers=auth(owner.id),
            )

        assert post("").status_code == 400
        assert post("x" * 501).status_code == 400
        assert post("x" * 500).status_code == 201

    def test_unpublished_video_is_403(self, client):
        owner = seed(client, make_user)
        draft = seed(client, make_video, is_published=False)

        response = client.post(
            COMMENTS,
            json={"content": "Early", "videoId": str(draft.id)},
            headers=auth(owner.id),
        )

        assert response.status_code == 403

    def test_missing_parent_is_404(self, client):
        owner = seed(client, make_user)

        response = client.post(
            COMMENTS,
            json={"content": "Hello?", "tweetId": str(uuid4())},
            headers=auth(owner.id),
        )

        assert response.status_code == 404

    def test_both_parents_is_400(self, client):
        owner = seed(client, make_user)

        response = client.post(
            COMMENTS,
            json={"content": "Hi", "videoId": str(uuid4()), "tweetId": str(uuid4())},
            headers=auth(owner.id),
        )

        assert response.status_code == 400

    def test_list_with_viewer_and_replies(self, client):
        # Arrange
        owner = seed(client, make_user, username="linus", full_name="Linus T")
        video = seed(client, make_video)
        top = client.post(
            COMMENTS,
            json={"content": "Top", "videoId": str(video.id)},
            headers=auth(owner.id),
        ).json()["data"]["comment"]
        client.post(
            COMMENTS,
            json={
                "content": "Reply",
                "videoId": str(video.id),
                "parentCommentId": top["commentId"],
            },
            headers=auth(owner.id),
        )
        viewer = uuid4()
        client.post(f"/api/v1/likes/comment/{top['commentId']}", headers=auth(viewer))

        # Act
        anonymous = client.get(f"{COMMENTS}/video/{video.id}")
        personal = client.get(f"{COMMENTS}/video/{video.id}", headers=auth(viewer))
        replies = client.get(f"{COMMENTS}/{top['commentId']}/replies")

        # Assert
        assert anonymous.status_code == 200
        items = anonymous.json()["data"]["items"]
        assert [item["content"] for item in items] == ["Top"]
        assert items[0]["owner"]["username"] == "linus"
        assert items[0]["owner"]["fullName"] == "Linus T"
        assert items[0]["likeCount"] == 1
        assert items[0]["isLiked"] is None
        assert personal.json()["data"]["items"][0]["isLiked"] is True
        assert [item["content"] for item in replies.json()["data"]["items"]] == [
            "Reply"
        ]

    def test_list_unknown_parent_kind_is_400(self, client):
        response = client.get(f"{COMMENTS}/playlist/{uuid4()}")

        assert response.status_code == 400

    def test_update_and_delete(self, client):
        # Arrange
        owner = seed(client, make_user)
        tweet = seed(client, make_tweet)
        created = client.post(
            COMMENTS,
            json={"content": "Tpyo", "tweetId": str(tweet.id)},
            headers=auth(owner.id),
        ).json()["data"]["comment"]
        url = f"{COMMENTS}/{created['commentId']}"

        # Act
        stranger_edit = client.patch(url, json={"content": ""}, headers=auth(uuid4()))
        edited = client.patch(url, json={"content": "Typo"}, headers=auth(owner.id))
        fetched = client.get(url)
        stranger_delete = client.delete(url, headers=auth(uuid4()))
        deleted = client.delete(url, headers=auth(owner.id))
        gone = client.get(url)

        # Assert
        assert stranger_edit.status_code == 403
        assert edited.status_code == 200
        assert edited.json()["message"] == "Comment updated"
        assert fetched.json()["data"]["comment"]["content"] == "Typo"
        assert stranger_delete.status_code == 403
        assert deleted.status_code == 200
        assert deleted.json()["data"]["deletedCount"] == 1
        assert gone.status_code == 404
