from datetime import datetime, timezone

import pytest
import requests
from urllib3.exceptions import InsecureRequestWarning

from hyper_graph import api
from hyper_graph.config import GraphConfig
from hyper_graph.exceptions import (
    AuthenticationError,
    GraphAPIError,
    RequestError,
    UnexpectedResponseError,
)

GRAPH = "https://graph.facebook.com"


class RecordingSession:
    def __init__(self, text="{}", status_code=200):
        self.calls = []
        self._text = text
        self._status_code = status_code

    def request(self, **kwargs):
        self.calls.append(kwargs)
        response = requests.Response()
        response.status_code = self._status_code
        response._content = self._text.encode("utf-8")
        response.encoding = "utf-8"
        return response


def test_fetch_builds_sorted_query_and_normalizes(requests_mock):
    matcher = requests_mock.get(
        f"{GRAPH}/me",
        json={"id": "4", "name": "Mark", "updated_time": "2011-01-01T00:00:00+0000"},
    )

    result = api.fetch("me", {"fields": "id,name", "access_token": "tok"})

    assert matcher.last_request.url == f"{GRAPH}/me?access_token=tok&fields=id,name"
    assert result == {
        "id": 4,
        "name": "Mark",
        "updated_time": datetime(2011, 1, 1, tzinfo=timezone.utc),
    }


def test_fetch_without_options_has_no_query(requests_mock):
    matcher = requests_mock.get(f"{GRAPH}/19292868552", json={"id": "19292868552"})

    assert api.fetch("19292868552") == {"id": 19292868552}
    assert matcher.last_request.url == f"{GRAPH}/19292868552"


def test_fetch_unwraps_top_level_data_envelope(requests_mock):
    requests_mock.get(
        f"{GRAPH}/me/friends",
        json={"data": [{"id": "1"}, {"id": "2"}], "paging": {"next": "x"}},
    )

    assert api.fetch("me/friends") == [{"id": 1}, {"id": 2}]


def test_fetch_raises_domain_error(requests_mock):
    requests_mock.get(
        f"{GRAPH}/me",
        status_code=400,
        json={"error": {"type": "OAuthException", "message": "Invalid token"}},
    )

    with pytest.raises(GraphAPIError, match="OAuthException - Invalid token"):
        api.fetch("me")


def test_fetch_ignores_status_code_for_json_bodies(requests_mock):
    requests_mock.get(f"{GRAPH}/me", status_code=404, json={"message": "not here"})

    assert api.fetch("me") == {"message": "not here"}


def test_fetch_non_json_body_is_a_parse_error(requests_mock):
    requests_mock.get(f"{GRAPH}/me", status_code=500, text="Internal Server Error")

    with pytest.raises(UnexpectedResponseError) as excinfo:
        api.fetch("me")

    assert excinfo.value.status_code == 500
    assert not isinstance(excinfo.value, GraphAPIError)


def test_fetch_requotes_unsafe_characters_only(requests_mock):
    matcher = requests_mock.get(f"{GRAPH}/search", json={"data": []})

    api.fetch("search", {"q": "coffee shop", "type": "place"})

    assert matcher.last_request.url == f"{GRAPH}/search?q=coffee%20shop&type=place"


def test_submit_returns_true_for_bare_true_body(requests_mock):
    matcher = requests_mock.post(f"{GRAPH}/123/likes", text="true")

    assert api.submit("123/likes", {"access_token": "tok"}) is True
    assert matcher.last_request.body == "access_token=tok"


def test_submit_sends_form_encoded_sorted_body(requests_mock):
    matcher = requests_mock.post(f"{GRAPH}/me/feed", json={"id": "1_2"})

    result = api.submit("me/feed", {"message": "Hello world", "access_token": "tok"})

    assert result == {"id": "1_2"}
    assert matcher.last_request.body == "access_token=tok&message=Hello world"
    assert matcher.last_request.headers["Content-Type"] == "application/x-www-form-urlencoded"


def test_submit_normalizes_json_body(requests_mock):
    requests_mock.post(f"{GRAPH}/me/photos", json={"data": {"id": "99"}})

    assert api.submit("me/photos") == {"id": 99}


def test_remove_posts_method_override(requests_mock):
    matcher = requests_mock.post(f"{GRAPH}/1_2", text="true")

    assert api.remove("1_2", {"access_token": "tok"}) is True
    assert matcher.last_request.method == "POST"
    assert matcher.last_request.body == "access_token=tok&method=delete"


def test_search_adds_q_parameter(requests_mock):
    matcher = requests_mock.get(f"{GRAPH}/search", json={"data": [{"id": "3", "name": "Cafe"}]})

    result = api.search("cafe", {"type": "page"})

    assert result == [{"id": 3, "name": "Cafe"}]
    assert matcher.last_request.url == f"{GRAPH}/search?q=cafe&type=page"


def test_exchange_authorization_code_extracts_token(requests_mock):
    matcher = requests_mock.get(
        f"{GRAPH}/oauth/access_token",
        text="access_token=AAAB|xyz&expires=5183",
    )

    token = api.exchange_authorization_code("app", "secret", "http://cb", "CODE")

    assert token == "AAAB|xyz"
    assert matcher.last_request.url == (
        f"{GRAPH}/oauth/access_token"
        "?client_id=app&client_secret=secret&code=CODE&redirect_uri=http://cb"
    )


def test_exchange_authorization_code_raises_json_error(requests_mock):
    requests_mock.get(
        f"{GRAPH}/oauth/access_token",
        status_code=400,
        json={"error": {"type": "OAuthException", "message": "Code was invalid"}},
    )

    with pytest.raises(GraphAPIError, match="Code was invalid"):
        api.exchange_authorization_code("app", "secret", "http://cb", "BAD")


def test_exchange_authorization_code_without_token(requests_mock):
    requests_mock.get(f"{GRAPH}/oauth/access_token", text="")

    with pytest.raises(AuthenticationError):
        api.exchange_authorization_code("app", "secret", "http://cb", "CODE")


def test_build_authorization_url_is_pure_string():
    url = api.build_authorization_url("app", "http://cb", {"scope": "email"})

    assert url == f"{GRAPH}/oauth/authorize?client_id=app&redirect_uri=http://cb&scope=email"


def test_build_authorization_url_uses_configured_host():
    config = GraphConfig(host="graph.example.test", port=8443)

    url = api.build_authorization_url("app", "http://cb", config=config)

    assert url == "https://graph.example.test:8443/oauth/authorize?client_id=app&redirect_uri=http://cb"


def test_certificates_are_verified_by_default():
    session = RecordingSession(text='{"id": "1"}')

    api.fetch("me", session=session)

    assert session.calls[0]["verify"] is True
    assert session.calls[0]["url"] == f"{GRAPH}/me"
    assert session.calls[0]["timeout"] is None


def test_verification_can_be_disabled_explicitly(monkeypatch):
    captured: list[object] = []
    monkeypatch.setattr("hyper_graph.api.urllib3.disable_warnings", captured.append)
    session = RecordingSession(text="true")

    api.submit("me/feed", config=GraphConfig(verify_ssl=False), session=session)

    assert session.calls[0]["verify"] is False
    assert captured and captured[0] is InsecureRequestWarning


def test_transport_error_includes_root_cause():
    class ExplodingSession:
        def request(self, *args, **kwargs):  # pragma: no cover - helper
            raise requests.exceptions.SSLError("CERTIFICATE_VERIFY_FAILED")

    with pytest.raises(RequestError) as excinfo:
        api.fetch("me", session=ExplodingSession())

    assert "CERTIFICATE_VERIFY_FAILED" in str(excinfo.value)
    assert not isinstance(excinfo.value, GraphAPIError)


def test_request_logging_omits_query_string(caplog, requests_mock):
    requests_mock.get(f"{GRAPH}/me", json={})

    with caplog.at_level("INFO", logger="hyper_graph.api"):
        api.fetch("me", {"access_token": "secret-token"})

    assert "Graph API request GET /me" in caplog.text
    assert "secret-token" not in caplog.text
