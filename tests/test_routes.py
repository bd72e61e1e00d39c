import json
import time

import pytest
from fastapi.testclient import TestClient

from conftest import FakeLLM
from pathfinder.constants import CAREER_PATH_NAMES, CHAT_GREETING
from pathfinder.errors import GenerationFailed
from pathfinder.main import create_app
from pathfinder.session.registry import CLIENT_COOKIE_NAME

ROLE = "Full Stack Developer"


def make_client(settings, store, llm=None):
    app = create_app(settings, llm=llm or FakeLLM(), store=store)
    return TestClient(app)


def wait_until_settled(client, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        state = client.get("/roadmap/state").json()
        if state["status"] != "loading":
            return state
        time.sleep(0.02)
    raise AssertionError("roadmap never left the loading state")


def sign_up(client, email="ada@example.com"):
    return client.post(
        "/signup",
        data={"name": "Ada", "email": email, "password": "secret1"},
        follow_redirects=False,
    )


@pytest.fixture
def client(settings, store):
    with make_client(settings, store) as c:
        yield c


class TestRoadmapRoutes:
    def test_home_lists_roles(self, client):
        resp = client.get("/")

        assert resp.status_code == 200
        for name in CAREER_PATH_NAMES:
            assert name in resp.text
        assert CLIENT_COOKIE_NAME in resp.cookies

    def test_unknown_role(self, client):
        resp = client.post("/roadmap", data={"role": "Astronaut"}, follow_redirects=False)

        assert resp.status_code == 303
        assert resp.headers["location"] == "/?error=unknown_role"

    def test_roadmap_page_without_selection_goes_home(self, client):
        resp = client.get("/roadmap", follow_redirects=False)
        assert resp.headers["location"] == "/"

    def test_generate_and_display(self, client):
        resp = client.post("/roadmap", data={"role": ROLE}, follow_redirects=False)
        assert resp.headers["location"] == "/roadmap"

        state = wait_until_settled(client)
        assert state["status"] == "displayed"
        assert state["roadmap"]["careerPath"] == ROLE

        page = client.get("/roadmap").text
        assert '<pre class="code-block"><code class="language-html">' in page
        assert 'class="language-javascript"' in page
        assert "<strong>Flexbox</strong>" in page
        assert "&lt;main&gt;" in page
        assert "icon-html" in page
        assert "icon-code" in page
        assert "Free" in page

    def test_failure_then_start_over(self, settings, store):
        with make_client(settings, store, FakeLLM([GenerationFailed("quota")])) as client:
            client.post("/roadmap", data={"role": ROLE})
            assert wait_until_settled(client)["status"] == "error"

            page = client.get("/roadmap").text
            assert "Failed to generate roadmap" in page
            assert "Retry" in page

            resp = client.post("/reset", follow_redirects=False)
            assert resp.headers["location"] == "/"
            assert client.get("/roadmap/state").json()["status"] == "idle"

    def test_retry_after_failure(self, settings, store, sample_payload):
        llm = FakeLLM([GenerationFailed("quota"), json.dumps(sample_payload)])
        with make_client(settings, store, llm) as client:
            client.post("/roadmap", data={"role": ROLE})
            assert wait_until_settled(client)["status"] == "error"

            resp = client.post("/roadmap/retry", follow_redirects=False)
            assert resp.headers["location"] == "/roadmap"
            assert wait_until_settled(client)["status"] == "displayed"

    def test_each_browser_has_its_own_state(self, settings, store):
        app = create_app(settings, llm=FakeLLM(), store=store)
        with TestClient(app) as first, TestClient(app) as second:
            first.post("/roadmap", data={"role": ROLE})
            wait_until_settled(first)

            assert second.get("/roadmap/state").json()["status"] == "idle"


class TestSavedRoutes:
    def test_save_requires_login(self, client):
        resp = client.post("/roadmap/save", follow_redirects=False)

        assert resp.status_code == 303
        assert resp.headers["location"] == "/login?next=/roadmap"

    def test_saved_page_requires_login(self, client):
        resp = client.get("/saved", follow_redirects=False)
        assert resp.headers["location"] == "/login?next=/saved"

    def test_save_list_view_delete(self, client):
        sign_up(client)
        client.post("/roadmap", data={"role": ROLE})
        wait_until_settled(client)

        resp = client.post("/roadmap/save", follow_redirects=False)
        assert resp.headers["location"] == "/roadmap?saved=1"

        page = client.get("/saved").text
        assert "1 saved roadmap" in page
        assert ROLE in page

        saved = client.app.state.saved
        user = client.app.state.auth.login("ada@example.com", "secret1")
        (item,) = saved.list_for_owner(user.id)

        client.post("/reset")
        resp = client.post(f"/saved/{item.id}/view", follow_redirects=False)
        assert resp.headers["location"] == "/roadmap"
        assert client.get("/roadmap/state").json()["status"] == "displayed"
        assert saved.get(item.id, user.id).last_viewed is not None

        resp = client.post(f"/saved/{item.id}/delete", follow_redirects=False)
        assert resp.headers["location"] == "/saved?deleted=1"
        assert saved.list_for_owner(user.id) == []

    def test_nothing_to_save(self, client):
        sign_up(client)

        resp = client.post("/roadmap/save", follow_redirects=False)

        assert resp.headers["location"] == "/roadmap?error=nothing_to_save"

    def test_cannot_touch_someone_elses_roadmap(self, settings, store, sample_roadmap):
        app = create_app(settings, llm=FakeLLM(), store=store)
        alice = app.state.auth.signup("Alice", "alice@example.com", "secret1")
        theirs = app.state.saved.save(alice.id, sample_roadmap)

        with TestClient(app) as client:
            sign_up(client, "mallory@example.com")

            resp = client.post(f"/saved/{theirs.id}/delete", follow_redirects=False)
            assert resp.headers["location"] == "/saved?error=not_found"

            resp = client.post(f"/saved/{theirs.id}/view", follow_redirects=False)
            assert resp.headers["location"] == "/saved?error=not_found"

        assert app.state.saved.get(theirs.id, alice.id) is not None


class TestAuthRoutes:
    def test_signup_sets_session_cookie(self, client):
        resp = sign_up(client)

        assert resp.status_code == 303
        assert "pf_session" in resp.cookies
        assert "Log out" in client.get("/").text

    def test_signup_error_is_shown(self, client):
        resp = client.post(
            "/signup",
            data={"name": "Ada", "email": "ada@example.com", "password": "123"},
            follow_redirects=False,
        )

        assert resp.headers["location"].startswith("/signup?error=")
        assert "at least 6 characters" in client.get(resp.headers["location"]).text

    def test_login_redirects_to_next(self, client):
        sign_up(client)
        client.post("/logout")

        resp = client.post(
            "/login",
            data={"email": "ada@example.com", "password": "secret1", "next": "/saved"},
            follow_redirects=False,
        )

        assert resp.headers["location"] == "/saved"

    def test_login_ignores_offsite_next(self, client):
        sign_up(client)

        resp = client.post(
            "/login",
            data={"email": "ada@example.com", "password": "secret1", "next": "//evil.example"},
            follow_redirects=False,
        )

        assert resp.headers["location"] == "/"

    def test_bad_password(self, client):
        sign_up(client)

        resp = client.post(
            "/login",
            data={"email": "ada@example.com", "password": "nope-nope"},
            follow_redirects=False,
        )

        assert resp.headers["location"].startswith("/login?error=")

    def test_logout_ends_session(self, client):
        sign_up(client)

        client.post("/logout")

        assert client.get("/saved", follow_redirects=False).status_code == 303


class TestChatRoutes:
    def test_initial_greeting(self, client):
        data = client.get("/chat").json()

        assert data["awaiting"] is False
        assert [m["content"] for m in data["messages"]] == [CHAT_GREETING]

    def test_send_and_clear(self, settings, store):
        llm = FakeLLM(["Try `print()`:\n```\nprint(1)\n```"])
        with make_client(settings, store, llm) as client:
            data = client.post("/chat", json={"message": "<script>x</script> how do I print?"}).json()

            assert data["accepted"] is True
            user_msg, reply = data["messages"][1:]
            assert "<script>" not in user_msg["html"]
            assert "&lt;script&gt;" in user_msg["html"]
            assert '<code class="inline-code">print()</code>' in reply["html"]
            assert 'class="language-text"' in reply["html"]

            cleared = client.post("/chat/clear").json()
            assert [m["content"] for m in cleared["messages"]] == [CHAT_GREETING]

    def test_blank_message_not_accepted(self, client):
        data = client.post("/chat", json={"message": "   "}).json()

        assert data["accepted"] is False
        assert len(data["messages"]) == 1
