import asyncio

from .conftest import poison


def send(client, username, message, **kwargs):
    return client.post(
        "/send",
        data={"username": username, "message": message},
        follow_redirects=False,
        **kwargs,
    )


def test_board_renders_empty(client):
    resp = client.get("/")

    assert resp.status_code == 200
    assert "text/html" in resp.headers["content-type"]
    assert "No messages yet." in resp.text
    assert 'http-equiv="refresh" content="10"' in resp.text


def test_board_prefills_username(client):
    resp = client.get("/", params={"username": "alice"})

    assert 'name="username" required value="alice"' in resp.text


def test_send_redirects_back_to_board(client, coordinator):
    resp = send(client, "alice smith", "hi")

    assert resp.status_code == 303
    assert resp.headers["location"] == "/?username=alice%20smith"

    board = client.get(resp.headers["location"])
    assert "<strong>alice smith</strong>: hi" in board.text


def test_duplicate_is_refused(client):
    send(client, "alice", "hi")
    resp = send(client, "bob", "hi")

    assert resp.status_code == 400
    assert "Message is either too long or has already been sent." in resp.text


def test_overlong_message_is_refused(client):
    resp = send(client, "alice", "x" * 201)

    assert resp.status_code == 400


def test_multibyte_message_over_byte_limit_is_refused(client):
    resp = send(client, "alice", "\u00e9" * 150)

    assert resp.status_code == 400


def test_rate_limit_is_enforced(client):
    for i in range(5):
        assert send(client, "alice", f"message {i}").status_code == 303

    resp = send(client, "alice", "one too many")

    assert resp.status_code == 429
    assert "Too many requests. Please wait and try again." in resp.text


def test_window_expiry_allows_sender_again(client, clock):
    for i in range(5):
        send(client, "alice", f"message {i}")
    assert send(client, "alice", "blocked").status_code == 429

    clock.advance(61)

    assert send(client, "alice", "allowed").status_code == 303


def test_missing_form_field_is_unprocessable(client):
    resp = client.post("/send", data={"username": "alice"})

    assert resp.status_code == 422


def test_board_escapes_user_input(client):
    send(client, "<b>mallory</b>", "<script>alert(1)</script>")

    resp = client.get("/")

    assert "<script>alert(1)</script>" not in resp.text
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in resp.text
    assert "&lt;b&gt;mallory&lt;/b&gt;" in resp.text


def test_api_lists_raw_messages(client):
    send(client, "alice", "<i>hi</i>")
    send(client, "bob", "yo")

    resp = client.get("/api/messages")

    assert resp.status_code == 200
    assert resp.json() == [
        {"sender": "alice", "content": "<i>hi</i>"},
        {"sender": "bob", "content": "yo"},
    ]


def test_api_submission_outcomes(client):
    accepted = client.post("/api/messages", json={"sender": "alice", "content": "hi"})
    assert accepted.status_code == 201
    assert accepted.json()["status"] == "accepted"

    rejected = client.post("/api/messages", json={"sender": "bob", "content": "hi"})
    assert rejected.status_code == 400
    assert rejected.json()["status"] == "rejected"

    for i in range(4):
        client.post("/api/messages", json={"sender": "bob", "content": f"bob {i}"})
    limited = client.post("/api/messages", json={"sender": "bob", "content": "late"})
    assert limited.status_code == 429
    assert limited.json() == {
        "status": "rate_limited",
        "detail": "Too many requests. Please wait and try again.",
    }


def test_api_rejects_unknown_fields(client):
    resp = client.post("/api/messages", json={"sender": "a", "content": "b", "extra": 1})

    assert resp.status_code == 422


def test_health_reports_message_count(client):
    send(client, "alice", "hi")

    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {
        "status": "ok",
        "state": "ok",
        "messages": 1,
        "senders": 1,
        "recent_contents": 1,
    }


def test_health_reports_poisoned_state(client, coordinator):
    asyncio.run(poison(coordinator.rate_limiter._guard))

    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json()["state"] == "poisoned"


def test_security_headers_and_request_id(client):
    resp = client.get("/", headers={"X-Request-ID": "abc123"})

    assert resp.headers["X-Request-ID"] == "abc123"
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
    assert "default-src 'self'" in resp.headers["Content-Security-Policy"]


def test_stylesheet_is_served(client):
    resp = client.get("/static/css/chat.css")

    assert resp.status_code == 200
    assert "#chat-container" in resp.text


def test_poisoned_state_fails_request(client, coordinator):
    asyncio.run(poison(coordinator.log._guard))

    resp = client.get("/")

    assert resp.status_code == 500
    assert resp.json() == {"detail": "The message board is unavailable."}
