def _update(client, headers, day):
    return client.post("/api/v1/streak/update", json={"date": day}, headers=headers)


def test_first_update(client, auth_headers):
    resp = _update(client, auth_headers, "2024-03-10")
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Streak updated successfully"
    assert body["currentStreak"] == 1
    assert body["lastEntryDate"] == "2024-03-10"
    assert body["longestStreak"] == 1


def test_consecutive_days(client, auth_headers):
    for day in ("2024-03-10", "2024-03-11", "2024-03-12"):
        _update(client, auth_headers, day)

    resp = client.get("/api/v1/streak", headers=auth_headers)
    assert resp.json() == {"currentStreak": 3, "lastEntryDate": "2024-03-12", "longestStreak": 3}


def test_same_day_already_recorded(client, auth_headers):
    _update(client, auth_headers, "2024-03-10")
    body = _update(client, auth_headers, "2024-03-10").json()
    assert body["message"] == "Today already recorded"
    assert body["alreadyRecordedToday"] is True
    assert body["currentStreak"] == 1


def test_gap_resets_but_keeps_longest(client, auth_headers):
    for day in ("2024-03-10", "2024-03-11", "2024-03-12"):
        _update(client, auth_headers, day)
    body = _update(client, auth_headers, "2024-03-17").json()
    assert body["currentStreak"] == 1
    assert body["longestStreak"] == 3


def test_update_requires_date(client, auth_headers):
    resp = client.post("/api/v1/streak/update", json={}, headers=auth_headers)
    assert resp.status_code == 422


def test_update_rejects_bad_date(client, auth_headers):
    assert _update(client, auth_headers, "not-a-date").status_code == 422


def test_get_streak_creates_missing_row(client, db):
    from auth import create_token
    from models.streak import Streak
    from models.user import User

    user = User(name="No Streak", email="nostreak@example.com", hashed_password="x")
    db.add(user)
    db.commit()
    token = create_token({"user_id": user.id, "email": user.email, "name": user.name})

    resp = client.get("/api/v1/streak", headers={"Authorization": f"Bearer {token}"})
    assert resp.json() == {"currentStreak": 0, "lastEntryDate": None, "longestStreak": 0}
    assert db.query(Streak).filter_by(user_id=user.id).count() == 1


def test_streak_requires_auth(client):
    assert client.get("/api/v1/streak").status_code == 401
