from datetime import datetime, timedelta, timezone

from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError

import main


def quiz_payload(**overrides):
    payload = {
        "title": "E-Waste Basics",
        "description": "Fundamentals",
        "category": "Basics",
        "points": 100,
        "time_limit": 10,
        "difficulty": "easy",
        "status": "active",
        "questions": [
            {"question": "What is e-waste?", "options": ["Electronic waste", "Energy waste"], "correct_answer": 0},
            {"question": "Is a phone e-waste?", "options": ["Yes", "No"], "correct_answer": 0, "explanation": "It is."},
        ],
    }
    payload.update(overrides)
    return payload


# ---------- Auth ----------
def test_register_login_me_logout(client):
    res = client.post("/auth/register", json={"email": "Carol@EcoMail.com", "password": "secret123"})
    assert res.status_code == 200
    assert res.json()["role"] == "customer"

    res = client.post("/auth/login", json={"email": "carol@ecomail.com", "password": "secret123"})
    assert res.status_code == 200
    headers = {"Authorization": f"Bearer {res.json()['token']}"}

    me = client.get("/me", headers=headers).json()
    assert me["email"] == "carol@ecomail.com"
    assert me["points"] == 0
    assert "password_hash" not in me

    assert client.post("/auth/logout", headers=headers).status_code == 200
    assert client.get("/me", headers=headers).status_code == 401


def test_register_rejects_bad_and_duplicate_email(client):
    res = client.post("/auth/register", json={"email": "not-an-email", "password": "secret123"})
    assert res.status_code == 422
    assert res.json()["detail"]["errors"][0]["field"] == "email"

    client.post("/auth/register", json={"email": "dave@ecomail.com", "password": "secret123"})
    res = client.post("/auth/register", json={"email": "dave@ecomail.com", "password": "other123"})
    assert res.status_code == 400


def test_register_rejects_emails_the_user_store_would_refuse(client, mongo, admin_headers):
    for email in ("a..b@ecomail.com", "alice@school.test", "bob@host.local"):
        res = client.post("/auth/register", json={"email": email, "password": "secret123"})
        assert res.status_code == 422, email
        assert [e["field"] for e in res.json()["detail"]["errors"]] == ["email"]

    res = client.post(
        "/admin/users", json={"email": "ops@host.local", "password": "secret123", "role": "admin"}, headers=admin_headers
    )
    assert res.status_code == 422
    assert mongo["user"].count_documents({}) == 1


def test_login_with_wrong_password(client, make_user):
    make_user()
    res = client.post("/auth/login", json={"email": "alice@ecomail.com", "password": "nope"})
    assert res.status_code == 401


def test_suspended_user_is_locked_out(client, make_user, auth_headers):
    _, user_id = make_user(status="suspended")
    assert client.get("/me", headers=auth_headers(user_id)).status_code == 403
    res = client.post("/auth/login", json={"email": "alice@ecomail.com", "password": "secret123"})
    assert res.status_code == 403


def test_admin_routes_require_admin(client, make_user, auth_headers):
    _, user_id = make_user()
    assert client.get("/admin/users").status_code == 401
    assert client.get("/admin/users", headers=auth_headers(user_id)).status_code == 403


# ---------- Admin content ----------
def test_admin_quiz_crud_and_validation(client, admin_headers):
    res = client.post("/admin/quizzes", json=quiz_payload(questions=[]), headers=admin_headers)
    assert res.status_code == 422
    assert "questions" in [e["field"] for e in res.json()["detail"]["errors"]]

    res = client.post("/admin/quizzes", json=quiz_payload(), headers=admin_headers)
    assert res.status_code == 200
    quiz_id = res.json()["_id"]

    public = client.get(f"/quizzes/{quiz_id}").json()
    assert [q["id"] for q in public["questions"]] == ["1", "2"]
    assert "correct_answer" not in public["questions"][0]

    res = client.put(f"/admin/quizzes/{quiz_id}", json={"time_limit": 0}, headers=admin_headers)
    assert res.status_code == 422
    res = client.put(f"/admin/quizzes/{quiz_id}", json={"status": "inactive"}, headers=admin_headers)
    assert res.json() == {"updated": True}
    assert client.get("/quizzes").json() == []

    assert client.delete(f"/admin/quizzes/{quiz_id}", headers=admin_headers).json() == {"deleted": True}
    assert client.delete(f"/admin/quizzes/{quiz_id}", headers=admin_headers).status_code == 404


def test_admin_reward_validation(client, admin_headers):
    payload = {
        "title": "₹50 Cashback",
        "description": "Instant cashback",
        "type": "cashback",
        "points_cost": 200,
        "value": 50,
        "value_type": "fixed",
        "stock": 3,
        "expiry_date": (datetime.now(timezone.utc) - timedelta(days=2)).isoformat(),
    }
    res = client.post("/admin/rewards", json=payload, headers=admin_headers)
    assert res.status_code == 422
    assert [e["field"] for e in res.json()["detail"]["errors"]] == ["expiry_date"]

    payload.pop("expiry_date")
    assert client.post("/admin/rewards", json=payload, headers=admin_headers).status_code == 200
    assert len(client.get("/rewards").json()) == 1


def test_expired_reward_can_still_be_edited(client, mongo, make_reward, admin_headers):
    reward_id = make_reward(expiry_date=datetime.now(timezone.utc) - timedelta(days=1))

    res = client.put(f"/admin/rewards/{reward_id}", json={"status": "inactive", "stock": 10}, headers=admin_headers)
    assert res.json() == {"updated": True}
    reward = mongo["reward"].find_one({"_id": ObjectId(reward_id)})
    assert (reward["status"], reward["stock"]) == ("inactive", 10)

    past = (datetime.now(timezone.utc) - timedelta(days=2)).isoformat()
    res = client.put(f"/admin/rewards/{reward_id}", json={"expiry_date": past}, headers=admin_headers)
    assert res.status_code == 422
    assert [e["field"] for e in res.json()["detail"]["errors"]] == ["expiry_date"]

    future = (datetime.now(timezone.utc) + timedelta(days=30)).isoformat()
    res = client.put(
        f"/admin/rewards/{reward_id}", json={"expiry_date": future, "status": "active"}, headers=admin_headers
    )
    assert res.json() == {"updated": True}
    assert len(client.get("/rewards").json()) == 1


def test_admin_challenge_defaults_creator(client, mongo, admin_headers):
    payload = {
        "title": "Device Collection Drive",
        "description": "Collect devices",
        "points": 200,
        "status": "active",
        "category": "Collection",
        "difficulty": "medium",
        "requirements": ["Collect 10 devices"],
        "estimated_time": 120,
    }
    challenge_id = client.post("/admin/challenges", json=payload, headers=admin_headers).json()["_id"]
    assert mongo["challenge"].find_one({"_id": ObjectId(challenge_id)})["creator"] == "admin@ecomail.com"


def test_admin_user_management(client, mongo, make_user, admin_headers):
    _, user_id = make_user(points=10)

    res = client.put(f"/admin/users/{user_id}", json={"role": "superuser"}, headers=admin_headers)
    assert res.status_code == 422

    assert client.put(f"/admin/users/{user_id}/points", json={"points": 250}, headers=admin_headers).json() == {
        "points": 250
    }
    assert client.put(f"/admin/users/{user_id}/points", json={"points": -5}, headers=admin_headers).status_code == 400

    client.put(f"/admin/users/{user_id}", json={"status": "suspended"}, headers=admin_headers)
    user = mongo["user"].find_one({"_id": ObjectId(user_id)})
    assert (user["status"], user["points"]) == ("suspended", 250)

    res = client.post(
        "/admin/users",
        json={"email": "erin@ecomail.com", "password": "secret123", "role": "admin"},
        headers=admin_headers,
    )
    assert res.status_code == 200
    emails = [u["email"] for u in client.get("/admin/users", headers=admin_headers).json()]
    assert "erin@ecomail.com" in emails


def test_seed_is_idempotent(client, admin_headers):
    first = client.post("/admin/seed", headers=admin_headers).json()["created"]
    second = client.post("/admin/seed", headers=admin_headers).json()["created"]
    assert first == {"quizzes": 2, "challenges": 3, "rewards": 4}
    assert second == {"quizzes": 0, "challenges": 0, "rewards": 0}
    assert len(client.get("/quizzes").json()) == 2


# ---------- Points flows ----------
def test_report_lifecycle_awards_points(client, mongo, make_user, auth_headers, admin_headers):
    _, user_id = make_user()
    headers = auth_headers(user_id)
    report = {"device_type": "Smartphone", "brand": "Nokia", "condition": "working", "location": "Mumbai"}
    report_id = client.post("/reports", json=report, headers=headers).json()["_id"]

    res = client.post(f"/admin/reports/{report_id}/status", json={"status": "collected"}, headers=admin_headers)
    assert res.json() == {"updated": True, "status": "collected", "points_awarded": 50}
    res = client.post(f"/admin/reports/{report_id}/status", json={"status": "collected"}, headers=admin_headers)
    assert res.json()["points_awarded"] == 0
    res = client.post(f"/admin/reports/{report_id}/status", json={"status": "processed"}, headers=admin_headers)
    assert res.json()["points_awarded"] == 50

    assert client.get("/me", headers=headers).json()["points"] == 100
    assert [r["status"] for r in client.get("/reports/mine", headers=headers).json()] == ["processed"]
    assert len(client.get("/me/transactions", headers=headers).json()) == 2

    res = client.post(f"/admin/reports/{report_id}/status", json={"status": "lost"}, headers=admin_headers)
    assert res.status_code == 400
    res = client.post(f"/admin/reports/{ObjectId()}/status", json={"status": "collected"}, headers=admin_headers)
    assert res.status_code == 404


def test_quiz_submission_flow(client, make_user, auth_headers, admin_headers):
    quiz_id = client.post("/admin/quizzes", json=quiz_payload(), headers=admin_headers).json()["_id"]
    _, user_id = make_user()
    headers = auth_headers(user_id)

    res = client.post(f"/quizzes/{quiz_id}/submit", json={"answers": [0, None]}, headers=headers)
    assert res.status_code == 200
    body = res.json()
    assert body["submission"]["score"] == 50
    assert body["submission"]["points_awarded"] == 50
    assert body["review"][1]["explanation"] == "It is."

    client.post(f"/quizzes/{quiz_id}/submit", json={"answers": [0, 0]}, headers=headers)
    assert client.get("/me", headers=headers).json()["points"] == 50
    assert len(client.get(f"/quizzes/{quiz_id}/submissions/mine", headers=headers).json()) == 2


def test_challenge_participation_flow(client, make_user, auth_headers, admin_headers):
    payload = {
        "title": "Device Collection Drive",
        "description": "Collect devices",
        "points": 200,
        "status": "active",
        "category": "Collection",
        "difficulty": "medium",
        "requirements": ["Collect 10 devices"],
        "estimated_time": 120,
        "creator": "EcoQuest Admin",
    }
    challenge_id = client.post("/admin/challenges", json=payload, headers=admin_headers).json()["_id"]
    _, user_id = make_user()
    headers = auth_headers(user_id)

    res = client.post(f"/challenges/{challenge_id}/participate", json={"description": "Did it"}, headers=headers)
    assert res.status_code == 422

    res = client.post(
        f"/challenges/{challenge_id}/participate",
        json={"description": "Collected 12 phones", "evidence": "https://photos.example.com/drive"},
        headers=headers,
    )
    participation_id = res.json()["_id"]

    res = client.post(
        f"/admin/participations/{participation_id}/status", json={"status": "approved"}, headers=admin_headers
    )
    assert res.json()["points_awarded"] == 200
    assert client.get("/me", headers=headers).json()["points"] == 200
    assert client.get("/participations/mine", headers=headers).json()[0]["status"] == "approved"


def test_redeem_endpoint(client, mongo, make_user, make_reward, auth_headers, admin_headers):
    reward_id = make_reward(points_cost=300, stock=1)
    _, poor_id = make_user(email="poor@ecomail.com", points=299)
    _, rich_id = make_user(email="rich@ecomail.com", points=300)

    res = client.post(f"/rewards/{reward_id}/redeem", headers=auth_headers(poor_id))
    assert res.status_code == 400
    assert "Insufficient points" in res.json()["detail"]

    res = client.post(f"/rewards/{reward_id}/redeem", headers=auth_headers(rich_id))
    assert res.status_code == 200
    redemption = res.json()["redemption"]
    assert redemption["coupon_code"] in res.json()["message"]

    res = client.post(f"/rewards/{reward_id}/redeem", headers=auth_headers(rich_id))
    assert res.status_code == 400  # balance is now 0, reported before stock
    _, third_id = make_user(email="third@ecomail.com", points=1000)
    res = client.post(f"/rewards/{reward_id}/redeem", headers=auth_headers(third_id))
    assert res.status_code == 409
    assert client.get("/rewards").json() == []

    res = client.post(
        f"/admin/redemptions/{redemption['_id']}/status", json={"status": "used"}, headers=admin_headers
    )
    assert res.json() == {"updated": True}
    assert mongo["rewardredemption"].find_one({"_id": ObjectId(redemption["_id"])})["used_at"] is not None
    mine = client.get("/redemptions/mine", headers=auth_headers(rich_id)).json()
    assert [r["status"] for r in mine] == ["used"]


def test_leaderboard_returns_latest_week_by_rank(client, mongo):
    old_week = datetime(2026, 10, 4)
    this_week = datetime(2026, 10, 11)
    for week, rank, email in ((old_week, 1, "old@ecomail.com"), (this_week, 2, "b@ecomail.com"), (this_week, 1, "a@ecomail.com")):
        mongo["leaderboardentry"].insert_one(
            {
                "user_id": email,
                "user_email": email,
                "weekly_points": 100 // rank,
                "devices_reported": 1,
                "week_start_date": week,
                "week_end_date": week + timedelta(days=6),
                "rank": rank,
            }
        )
    board = client.get("/leaderboard").json()
    assert [e["user_email"] for e in board] == ["a@ecomail.com", "b@ecomail.com"]


def test_database_failure_returns_retry_message(client, monkeypatch, make_user, auth_headers):
    _, user_id = make_user()
    headers = auth_headers(user_id)

    class Unreachable:
        def __getitem__(self, name):
            raise ServerSelectionTimeoutError("no servers available")

    monkeypatch.setattr(main, "db", Unreachable())
    res = client.get("/me", headers=headers)
    assert res.status_code == 503
    assert "try again" in res.json()["detail"]
