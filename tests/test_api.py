from datetime import timedelta

from sqlmodel import Session

from typerace.models import ContestSession


def _create_session(client, creator_id, **settings):
    response = client.post("/sessions", json={"creator_id": creator_id, **settings})
    assert response.status_code == 200, response.text
    return response.json()


def _rewind_start(engine, session_id, seconds):
    with Session(engine) as db:
        contest = db.get(ContestSession, session_id)
        contest.start_time = contest.start_time - timedelta(seconds=seconds)
        db.add(contest)
        db.commit()


def test_health(client):
    assert client.get("/health").json() == {"ok": True}
    assert client.get("/config").json()["unlimited_edits"] == -1


def test_login_and_me(client):
    response = client.post("/users/login", json={"name": "Omar", "trainingNumber": "77"})
    assert response.status_code == 200
    user = response.json()

    me = client.get("/users/me")
    assert me.status_code == 200
    assert me.json()["id"] == user["id"]

    again = client.post("/users/login", json={"name": "Omar", "training_number": "77"})
    assert again.json()["id"] == user["id"]

    client.post("/users/logout")
    assert client.get("/users/me").status_code == 404


def test_login_validation(client):
    response = client.post("/users/login", json={"name": " ", "training_number": "1"})
    assert response.status_code == 400
    assert "required" in response.json()["detail"]


def test_session_flow(client, login, engine):
    creator = login("Creator", "C-1")
    alice = login("Alice", "A-1")
    bob = login("Bob", "B-1")

    created = _create_session(client, creator, word_count=3, allow_editing=True, max_edits=2)
    code = created["code"]
    assert len(code) == 7 and code.isdigit()

    for user_id in (alice, bob, creator):
        response = client.post("/sessions/join", json={"code": code, "user_id": user_id})
        assert response.status_code == 200
        assert response.json()["session_id"] == created["session_id"]

    session_id = created["session_id"]
    participants = client.get(f"/sessions/{session_id}/participants").json()
    assert sorted(p["user"]["name"] for p in participants) == ["Alice", "Bob"]

    forbidden = client.post(f"/sessions/{session_id}/start", json={"user_id": alice})
    assert forbidden.status_code == 409

    started = client.post(
        f"/sessions/{session_id}/start",
        json={"user_id": creator, "challenge_text": "the quick fox"},
    )
    assert started.status_code == 200
    assert started.json()["challenge_started"] is True
    _rewind_start(engine, session_id, 60)

    partial = client.post(
        f"/sessions/{session_id}/attempt", json={"user_id": bob, "typed": "the qu"}
    ).json()
    assert partial["state"] == "in_progress"
    assert partial["current_position"] == 6
    assert partial["edits_remaining"] == 2

    done = client.post(
        f"/sessions/{session_id}/attempt", json={"user_id": alice, "typed": "the quick fox"}
    ).json()
    assert done["is_finished"] is True
    assert done["accuracy"] == 100
    assert done["wpm"] == 3
    assert done["score"] == 100

    board = client.get(f"/leaderboard/session/{session_id}").json()["entries"]
    assert [(e["rank"], e["user"]["name"]) for e in board] == [(1, "Alice"), (2, "Bob")]

    global_board = client.get("/leaderboard/global").json()["entries"]
    assert [e["user"]["name"] for e in global_board] == ["Alice"]
    assert global_board[0]["session_code"] == code


def test_edit_allowance_enforced_over_http(client, login):
    creator = login("Creator")
    typist = login("Typist")
    created = _create_session(client, creator, allow_editing=True, max_edits=1)
    session_id = created["session_id"]
    client.post("/sessions/join", json={"code": created["code"], "user_id": typist})
    client.post(
        f"/sessions/{session_id}/start", json={"user_id": creator, "challenge_text": "abcdef"}
    )

    url = f"/sessions/{session_id}/attempt"
    assert client.post(url, json={"user_id": typist, "typed": "abx"}).status_code == 200
    first_edit = client.post(url, json={"user_id": typist, "typed": "ab"})
    assert first_edit.json()["edits_used"] == 1
    assert first_edit.json()["edits_remaining"] == 0

    refused = client.post(url, json={"user_id": typist, "typed": "a"})
    assert refused.status_code == 409
    assert "edits" in refused.json()["detail"]


def test_progress_overwrite_and_sticky_finish(client, login):
    creator = login("Creator")
    typist = login("Typist")
    created = _create_session(client, creator)
    session_id = created["session_id"]
    client.post("/sessions/join", json={"code": created["code"], "user_id": typist})

    url = f"/sessions/{session_id}/progress"
    finished = client.post(
        url,
        json={
            "user_id": typist,
            "score": 130,
            "current_position": 40,
            "is_finished": True,
            "wpm": 45,
            "accuracy": 97,
            "edits_used": 1,
        },
    )
    assert finished.status_code == 200
    later = client.post(
        url,
        json={"user_id": typist, "score": 20, "current_position": 2, "is_finished": False},
    ).json()
    assert later["is_finished"] is True
    assert later["score"] == 130


def test_join_errors(client, login):
    user = login("Someone")
    bad = client.post("/sessions/join", json={"code": "12", "user_id": user})
    assert bad.status_code == 400
    missing = client.post("/sessions/join", json={"code": "7654321", "user_id": user})
    assert missing.status_code == 404
    no_user = client.post("/sessions/join", json={"code": "7654321"})
    assert no_user.status_code == 400


def test_closed_session_cannot_be_joined(client, login):
    creator = login("Creator")
    late = login("Late")
    created = _create_session(client, creator)
    closed = client.post(f"/sessions/{created['session_id']}/close", json={"user_id": creator})
    assert closed.json()["is_active"] is False

    response = client.post("/sessions/join", json={"code": created["code"], "user_id": late})
    assert response.status_code == 404


def test_session_lookup(client, login):
    creator = login("Creator")
    created = _create_session(client, creator)
    by_code = client.get(f"/sessions/code/{created['code']}").json()
    assert by_code["id"] == created["session_id"]

    detail = client.get(f"/sessions/{created['session_id']}").json()
    assert detail["elapsed_seconds"] == 0
    assert client.get("/sessions/999").status_code == 404


def test_challenge_text_preview(client):
    text = client.get("/challenge-text", params={"word_count": 6}).json()["text"]
    assert len(text.split(" ")) == 6
    assert client.get("/challenge-text", params={"word_count": 0}).status_code == 422


def test_progress_post_cannot_restore_spent_edits(client, login):
    creator = login("Creator")
    typist = login("Typist")
    created = _create_session(client, creator, allow_editing=True, max_edits=1)
    session_id = created["session_id"]
    client.post("/sessions/join", json={"code": created["code"], "user_id": typist})
    client.post(
        f"/sessions/{session_id}/start", json={"user_id": creator, "challenge_text": "abcdef"}
    )

    attempt_url = f"/sessions/{session_id}/attempt"
    client.post(attempt_url, json={"user_id": typist, "typed": "abx"})
    client.post(attempt_url, json={"user_id": typist, "typed": "ab"})
    assert client.post(attempt_url, json={"user_id": typist, "typed": "a"}).status_code == 409

    progress_url = f"/sessions/{session_id}/progress"
    without_edits = client.post(
        progress_url, json={"user_id": typist, "score": 95, "current_position": 2}
    )
    assert without_edits.json()["edits_used"] == 1
    lowered = client.post(
        progress_url,
        json={"user_id": typist, "score": 95, "current_position": 2, "edits_used": 0},
    )
    assert lowered.json()["edits_used"] == 1

    assert client.post(attempt_url, json={"user_id": typist, "typed": "a"}).status_code == 409


def test_boolean_fields_must_be_json_booleans(client, login):
    creator = login("Creator")
    typist = login("Typist")
    response = client.post(
        "/sessions", json={"creator_id": creator, "allow_editing": "false", "max_edits": 5}
    )
    assert response.status_code == 400
    assert "allow_editing" in response.json()["detail"]

    disabled = _create_session(client, creator, allow_editing=False, max_edits=5)
    assert disabled["session"]["allow_editing"] is False
    assert disabled["session"]["max_edits"] == 0

    session_id = disabled["session_id"]
    client.post("/sessions/join", json={"code": disabled["code"], "user_id": typist})
    url = f"/sessions/{session_id}/progress"
    bad = client.post(
        url,
        json={"user_id": typist, "score": 100, "current_position": 1, "is_finished": "false"},
    )
    assert bad.status_code == 400

    ok = client.post(
        url,
        json={"user_id": typist, "score": 100, "current_position": 1, "is_finished": False},
    )
    assert ok.json()["is_finished"] is False
