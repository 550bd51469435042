"""
HTTP surface tests
"""
from unittest.mock import patch
from sqlalchemy.exc import OperationalError

from herohub.models import Follow


def as_user(user):
    return {"X-User-Id": str(user.user_id)}


def engage(client, user, action, hero_id=659, **payload):
    body = {
        "action": action,
        "username": user.username,
        "hero_id": hero_id,
        "superhero_name": "Thor",
        **payload
    }
    return client.post(f"/api/v1/users/{user.user_id}/engagements", json=body, headers=as_user(user))


class TestHealth:
    
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestAuth:
    
    def test_missing_header(self, client, alice):
        response = client.get("/api/v1/leaderboard")
        assert response.status_code == 401
        assert response.json()["ok"] is False
    
    def test_cannot_act_for_someone_else(self, client, alice, bob):
        body = {"action": "follow", "username": "bob", "hero_id": 1, "superhero_name": "Thor"}
        response = client.post(f"/api/v1/users/{bob.user_id}/engagements", json=body, headers=as_user(alice))
        assert response.status_code == 401


class TestEngagements:
    
    def test_follow_and_unfollow(self, client, alice):
        response = engage(client, alice, "follow")
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["action"] == "follow"
        follow_id = data["event_id"]
        
        response = engage(client, alice, "unfollow")
        assert response.status_code == 201
        assert response.json()["data"]["event_id"] == follow_id
    
    def test_duplicate_follow_conflict(self, client, alice):
        engage(client, alice, "follow")
        response = engage(client, alice, "follow")
        
        assert response.status_code == 409
        assert response.json()["ok"] is False
    
    def test_unfollow_missing_not_found(self, client, alice):
        response = engage(client, alice, "unfollow")
        assert response.status_code == 404
    
    def test_comment_without_text_bad_request(self, client, alice):
        response = engage(client, alice, "comment")
        assert response.status_code == 400
    
    def test_unknown_action_rejected(self, client, alice):
        response = engage(client, alice, "poke")
        assert response.status_code == 422
    
    def test_ledger_failure_reports_server_error(self, client, db, alice):
        error = OperationalError("INSERT INTO recent_activity", {}, Exception("timeout"))
        with patch("herohub.services.engagement_recorder.ActivityLedger.append", side_effect=error):
            response = engage(client, alice, "follow")
        
        assert response.status_code == 500
        assert response.json()["ok"] is False
        assert db.query(Follow).count() == 0


class TestHeroListings:
    
    def test_comments_listing(self, client, alice):
        engage(client, alice, "comment", text="great hero")
        engage(client, alice, "comment", hero_id=1, text="other hero")
        
        response = client.get("/api/v1/heroes/659/comments", headers=as_user(alice))
        assert response.status_code == 200
        body = response.json()
        assert body["meta"]["total"] == 1
        assert body["data"][0]["username"] == "alice"
        assert body["data"][0]["comments"] == "great hero"
    
    def test_images_listing_paginates(self, client, alice):
        for n in range(3):
            engage(client, alice, "upload_image", image_url=f"https://x/{n}.png")
        
        response = client.get("/api/v1/heroes/659/images?per_page=2", headers=as_user(alice))
        body = response.json()
        assert [item["image_url"] for item in body["data"]] == ["https://x/2.png", "https://x/1.png"]
        assert body["meta"]["total"] == 3
        assert body["meta"]["has_next"] is True


class TestUsers:
    
    def test_register(self, client):
        response = client.post("/api/v1/users", json={"username": "diana", "email": "diana@example.com"})
        assert response.status_code == 201
        assert response.json()["data"]["username"] == "diana"
    
    def test_own_view(self, client, alice):
        engage(client, alice, "follow")
        engage(client, alice, "like")
        
        response = client.get("/api/v1/users/alice", headers=as_user(alice))
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["hero_follow_ids"] == [659]
        assert data["hero_like_ids"] == [659]
        assert data["hero_follow_counts"] == {"659": 1}
    
    def test_own_view_lists_liked_comments_and_images(self, client, alice):
        comment_id = engage(client, alice, "comment", text="great hero").json()["data"]["event_id"]
        engage(client, alice, "comment_like", comment_id=comment_id)
        engage(client, alice, "image_like", image_url="https://x/a.png")
        
        data = client.get("/api/v1/users/alice", headers=as_user(alice)).json()["data"]
        assert data["comment_liked_ids"] == [comment_id]
        assert data["image_liked_urls"] == ["https://x/a.png"]
    
    def test_list_users(self, client, alice, bob, carol):
        response = client.get("/api/v1/users", headers=as_user(bob))
        assert response.status_code == 200
        data = response.json()["data"]
        assert [user["username"] for user in data] == ["alice", "bob", "carol"]
        assert "active" not in data[0]
    
    def test_list_users_requires_auth(self, client, alice):
        assert client.get("/api/v1/users").status_code == 401
    
    def test_cannot_read_another_dashboard(self, client, alice, bob):
        response = client.get("/api/v1/users/bob", headers=as_user(alice))
        assert response.status_code == 401
    
    def test_other_view(self, client, alice, bob):
        engage(client, bob, "follow", hero_id=5)
        
        response = client.get(f"/api/v1/users/id/{bob.user_id}", headers=as_user(alice))
        data = response.json()["data"]
        assert data["hero_follow_ids"] == [5]
        assert "hero_follow_counts" not in data
    
    def test_other_view_missing_user(self, client, alice):
        response = client.get("/api/v1/users/id/999", headers=as_user(alice))
        assert response.status_code == 404
    
    def test_update_profile(self, client, alice):
        response = client.patch("/api/v1/users/alice", json={"bio": "Down the hole"}, headers=as_user(alice))
        assert response.status_code == 200
        assert response.json()["data"]["bio"] == "Down the hole"
    
    def test_recent_activity(self, client, alice):
        engage(client, alice, "follow")
        engage(client, alice, "like")
        
        response = client.get(f"/api/v1/users/id/{alice.user_id}/activity", headers=as_user(alice))
        body = response.json()
        assert [item["description"] for item in body["data"]] == ["liked", "followed"]
        assert body["meta"]["total"] == 2
    
    def test_leaderboard(self, client, alice, bob):
        engage(client, alice, "follow", hero_id=1)
        engage(client, bob, "follow", hero_id=1)
        engage(client, alice, "follow", hero_id=2)
        
        response = client.get("/api/v1/leaderboard", headers=as_user(alice))
        data = response.json()["data"]
        assert [(r["superhero_id"], r["follow_count"]) for r in data] == [(1, 2), (2, 1)]


class TestConnections:
    
    def test_request_approve_flow(self, client, alice, bob):
        response = client.post(f"/api/v1/users/{alice.user_id}/connections/{bob.user_id}", headers=as_user(alice))
        assert response.status_code == 201
        
        response = client.post(
            f"/api/v1/users/{bob.user_id}/followers/{alice.user_id}/approve", headers=as_user(bob)
        )
        assert response.status_code == 200
        
        data = client.get("/api/v1/users/alice", headers=as_user(alice)).json()["data"]
        assert data["following_ids"] == [bob.user_id]
        assert data["pending_following_ids"] == []
    
    def test_requester_cannot_approve_own_request(self, client, alice, bob):
        client.post(f"/api/v1/users/{alice.user_id}/connections/{bob.user_id}", headers=as_user(alice))
        
        response = client.post(
            f"/api/v1/users/{bob.user_id}/followers/{alice.user_id}/approve", headers=as_user(alice)
        )
        assert response.status_code == 401
    
    def test_reject_and_remove(self, client, alice, bob):
        client.post(f"/api/v1/users/{alice.user_id}/connections/{bob.user_id}", headers=as_user(alice))
        
        response = client.delete(f"/api/v1/users/{bob.user_id}/followers/{alice.user_id}", headers=as_user(bob))
        assert response.status_code == 200
        
        response = client.delete(f"/api/v1/users/{alice.user_id}/connections/{bob.user_id}", headers=as_user(alice))
        assert response.status_code == 404
    
    def test_duplicate_request_conflict(self, client, alice, bob):
        path = f"/api/v1/users/{alice.user_id}/connections/{bob.user_id}"
        client.post(path, headers=as_user(alice))
        
        response = client.post(path, headers=as_user(alice))
        assert response.status_code == 409
