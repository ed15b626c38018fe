"""Tests for /api/profile endpoints, stats, follows and account deletion."""

from bson import ObjectId
from fastapi.testclient import TestClient

import main


class TestGetProfile:
    def test_profile_has_counts_and_no_password(self, client: TestClient, make_user):
        fan = make_user("fan")
        user = make_user("star", followers=[fan["_id"]], interests=["art"])

        response = client.get(f"/api/profile/{user['_id']}")

        assert response.status_code == 200
        profile = response.json()["user"]
        assert profile["username"] == "star"
        assert profile["followers"] == 1
        assert profile["following"] == 0
        assert profile["interests"] == ["art"]
        assert profile["confessionCount"] == 0
        assert "password_hash" not in profile
        assert "password" not in profile

    def test_unknown_user(self, client: TestClient):
        assert client.get(f"/api/profile/{ObjectId()}").status_code == 404
        assert client.get("/api/profile/not-an-id").status_code == 404


class TestUpdateProfile:
    def test_updates_only_given_fields(self, client: TestClient, make_user):
        user = make_user("star", bio="old bio", interests=["art"])

        response = client.put(f"/api/profile/{user['_id']}", json={"bio": "new bio", "username": "superstar"})

        assert response.status_code == 200
        profile = response.json()["user"]
        assert profile["bio"] == "new bio"
        assert profile["username"] == "superstar"
        assert profile["interests"] == ["art"]

    def test_bio_too_long(self, client: TestClient, make_user):
        user = make_user("star")
        response = client.put(f"/api/profile/{user['_id']}", json={"bio": "x" * 201})
        assert response.status_code == 400

    def test_username_taken(self, client: TestClient, make_user):
        make_user("taken")
        user = make_user("star")

        response = client.put(f"/api/profile/{user['_id']}", json={"username": "taken"})

        assert response.status_code == 400

    def test_unknown_user(self, client: TestClient):
        assert client.put(f"/api/profile/{ObjectId()}", json={"bio": "hi"}).status_code == 404


class TestUserConfessions:
    def test_lists_own_confessions(self, client: TestClient, make_user, make_confession):
        author = make_user("writer")
        make_confession(author, content="one")
        make_confession(author, content="two")
        make_confession(make_user("other"), content="not mine")

        data = client.get(f"/api/profile/{author['_id']}/confessions").json()

        assert data["count"] == 2
        assert {c["content"] for c in data["confessions"]} == {"one", "two"}

    def test_malformed_id_is_empty(self, client: TestClient):
        assert client.get("/api/profile/nope/confessions").json() == {"confessions": [], "count": 0}


class TestStats:
    def test_sums_likes_and_comments(self, client: TestClient, make_user, make_confession):
        author = make_user("writer")
        a, b, c = make_user("a"), make_user("b"), make_user("c")
        make_confession(author, likes=[a, b, c], comments=[(a, "nice")])
        make_confession(author, likes=[], comments=[(b, "wow"), (c, "same")])
        make_confession(a, likes=[author], comments=[(author, "not counted")])

        response = client.get(f"/api/profile/{author['_id']}/stats")

        assert response.status_code == 200
        assert response.json()["stats"] == {
            "confessionCount": 2,
            "likeCount": 3,
            "commentCount": 3,
            "followerCount": 0,
            "followingCount": 0,
        }

    def test_user_without_confessions(self, test_db, make_user):
        user = make_user("quiet")
        stats = main.user_stats(str(user["_id"]))
        assert stats["likeCount"] == 0
        assert stats["commentCount"] == 0

    def test_unknown_user(self, client: TestClient):
        assert client.get(f"/api/profile/{ObjectId()}/stats").status_code == 404


class TestFollow:
    def test_follow_then_unfollow_keeps_mirror_sets(self, client: TestClient, test_db, make_user):
        star = make_user("star")
        fan = make_user("fan")
        url = f"/api/profile/{star['_id']}/follow"

        response = client.post(url, json={"followerId": str(fan["_id"])})

        assert response.status_code == 200
        assert response.json()["following"] is True
        assert response.json()["followerCount"] == 1
        assert test_db["user"].find_one({"_id": star["_id"]})["followers"] == [fan["_id"]]
        assert test_db["user"].find_one({"_id": fan["_id"]})["following"] == [star["_id"]]

        response = client.post(url, json={"followerId": str(fan["_id"])})

        assert response.json()["following"] is False
        assert test_db["user"].find_one({"_id": star["_id"]})["followers"] == []
        assert test_db["user"].find_one({"_id": fan["_id"]})["following"] == []

    def test_cannot_follow_self(self, client: TestClient, make_user):
        star = make_user("star")
        response = client.post(f"/api/profile/{star['_id']}/follow", json={"followerId": str(star["_id"])})
        assert response.status_code == 400

    def test_unknown_follower(self, client: TestClient, make_user):
        star = make_user("star")
        response = client.post(f"/api/profile/{star['_id']}/follow", json={"followerId": str(ObjectId())})
        assert response.status_code == 404

    def test_follower_count_matches_profile_with_dangling_edge(self, client: TestClient, make_user):
        first = make_user("first")
        second = make_user("second")
        star = make_user("star", followers=[second["_id"], ObjectId(), first["_id"]])

        profile = client.get(f"/api/profile/{star['_id']}").json()["user"]
        followers = client.get(f"/api/profile/{star['_id']}/followers").json()

        assert followers["count"] == profile["followers"] == 3
        assert [u["username"] for u in followers["users"]] == ["second", "first"]

    def test_list_followers_and_following(self, client: TestClient, make_user):
        star = make_user("star")
        fan = make_user("fan")
        client.post(f"/api/profile/{star['_id']}/follow", json={"followerId": str(fan["_id"])})

        followers = client.get(f"/api/profile/{star['_id']}/followers").json()
        following = client.get(f"/api/profile/{fan['_id']}/following").json()

        assert [u["username"] for u in followers["users"]] == ["fan"]
        assert [u["username"] for u in following["users"]] == ["star"]


class TestDeleteAccount:
    def test_cascade(self, client: TestClient, test_db, make_user, make_confession):
        leaving = make_user("leaving")
        follower = make_user("follower")
        followed = make_user("followed")
        # follower -> leaving -> followed
        test_db["user"].update_one({"_id": follower["_id"]}, {"$set": {"following": [leaving["_id"]]}})
        test_db["user"].update_one(
            {"_id": leaving["_id"]},
            {"$set": {"followers": [follower["_id"]], "following": [followed["_id"]]}},
        )
        test_db["user"].update_one({"_id": followed["_id"]}, {"$set": {"followers": [leaving["_id"]]}})
        first = make_confession(leaving)
        second = make_confession(leaving)

        response = client.delete(f"/api/profile/{leaving['_id']}")

        assert response.status_code == 200
        assert response.json() == {"message": "Account deleted successfully"}
        assert test_db["confession"].count_documents({"_id": {"$in": [first["_id"], second["_id"]]}}) == 0
        assert test_db["user"].find_one({"_id": follower["_id"]})["following"] == []
        assert test_db["user"].find_one({"_id": followed["_id"]})["followers"] == []
        assert test_db["user"].find_one({"_id": leaving["_id"]}) is None

    def test_likes_and_comments_on_others_are_kept(self, client: TestClient, test_db, make_user, make_confession):
        leaving = make_user("leaving")
        other = make_confession(make_user("other"), likes=[leaving], comments=[(leaving, "bye")])

        client.delete(f"/api/profile/{leaving['_id']}")

        remaining = test_db["confession"].find_one({"_id": other["_id"]})
        assert remaining["likes"] == [leaving["_id"]]
        assert remaining["comments"][0]["user"] == leaving["_id"]

    def test_unknown_user(self, client: TestClient):
        assert client.delete(f"/api/profile/{ObjectId()}").status_code == 404


class TestDeleteAccountOwnership:
    def test_token_not_checked_by_default(self, client: TestClient, make_user):
        user = make_user("leaving")
        response = client.delete(f"/api/profile/{user['_id']}", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 200

    def test_missing_token_when_enforced(self, client: TestClient, monkeypatch, make_user):
        monkeypatch.setattr(main, "ENFORCE_TOKEN_OWNERSHIP", True)
        user = make_user("leaving")

        assert client.delete(f"/api/profile/{user['_id']}").status_code == 401

    def test_foreign_token_when_enforced(self, client: TestClient, test_db, monkeypatch, make_user):
        monkeypatch.setattr(main, "ENFORCE_TOKEN_OWNERSHIP", True)
        user = make_user("leaving")
        intruder = make_user("intruder")
        token = main.create_token(str(intruder["_id"]))

        response = client.delete(f"/api/profile/{user['_id']}", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 403
        assert test_db["user"].find_one({"_id": user["_id"]}) is not None

    def test_own_token_when_enforced(self, client: TestClient, test_db, monkeypatch, make_user):
        monkeypatch.setattr(main, "ENFORCE_TOKEN_OWNERSHIP", True)
        user = make_user("leaving")
        token = main.create_token(str(user["_id"]))

        response = client.delete(f"/api/profile/{user['_id']}", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert test_db["user"].find_one({"_id": user["_id"]}) is None
