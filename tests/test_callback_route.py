from fastapi.testclient import TestClient

from vlctwitch.api.app import create_callback_app
from vlctwitch.api.state import CallbackState
from vlctwitch.errors import AuthorizationError


def make(exchange=None, expected_state="s1"):
    codes = []

    def default_exchange(code):
        codes.append(code)

    callback = CallbackState(exchange or default_exchange, expected_state=expected_state)
    return TestClient(create_callback_app(callback)), callback, codes


def test_code_is_exchanged_once():
    client, callback, codes = make()
    resp = client.get("/", params={"code": "abc", "state": "s1", "scope": "channel:manage:broadcast"})
    assert resp.status_code == 200
    assert "Connected to Twitch" in resp.text
    assert codes == ["abc"]
    assert callback.done
    assert callback.error is None


def test_second_request_is_rejected():
    client, callback, codes = make()
    client.get("/", params={"code": "abc", "state": "s1"})
    resp = client.get("/", params={"code": "again", "state": "s1"})
    assert resp.status_code == 409
    assert codes == ["abc"]


def test_missing_code():
    client, callback, codes = make()
    resp = client.get("/", params={"state": "s1"})
    assert resp.status_code == 400
    assert callback.done
    assert isinstance(callback.error, AuthorizationError)
    assert codes == []


def test_user_denied():
    client, callback, codes = make()
    resp = client.get(
        "/",
        params={
            "error": "access_denied",
            "error_description": "The user denied you access",
            "state": "s1",
        },
    )
    assert resp.status_code == 400
    assert "denied" in str(callback.error)
    assert codes == []


def test_state_mismatch():
    client, callback, codes = make()
    resp = client.get("/", params={"code": "abc", "state": "forged"})
    assert resp.status_code == 400
    assert isinstance(callback.error, AuthorizationError)
    assert codes == []


def test_exchange_failure_is_reported():
    def failing_exchange(code):
        raise RuntimeError("token endpoint down")

    client, callback, _ = make(exchange=failing_exchange)
    resp = client.get("/", params={"code": "abc", "state": "s1"})
    assert resp.status_code == 500
    assert isinstance(callback.error, AuthorizationError)
    assert isinstance(callback.error.__cause__, RuntimeError)


def test_other_paths_do_not_end_the_flow():
    client, callback, _ = make()
    assert client.get("/favicon.ico").status_code == 404
    assert not callback.done
