import base64

import pytest
import requests

from jenkins_mcp.utils.client import JenkinsAuthConfig, JenkinsClient, basic_auth_header

from .conftest import BASE_URL, make_response, requested


def test_basic_auth_header():
    expected = "Basic " + base64.b64encode(b"bob:s3cret").decode()
    assert basic_auth_header("bob", "s3cret") == expected


def test_static_headers_and_tls_verification_off(client, session):
    client.do_fetch(BASE_URL)

    kwargs = session.request.call_args.kwargs
    assert kwargs["headers"]["Authorization"] == basic_auth_header("bob", "s3cret")
    assert kwargs["headers"]["Content-Type"] == "application/x-www-form-urlencoded"
    assert kwargs["verify"] is False
    assert kwargs["timeout"] is None


def test_base_url_trailing_slash_is_stripped(session):
    c = JenkinsClient(JenkinsAuthConfig(base_url="http://j/"), session=session)
    assert c.base_url == "http://j"


def test_do_fetch_decodes_json(client, session):
    session.request.return_value = make_response(200, {"mode": "NORMAL"})

    resp = client.do_fetch(f"{BASE_URL}/api/json", {"depth": "1"})

    assert resp.status == 200
    assert resp.data == {"mode": "NORMAL"}
    assert requested(session) == ("GET", f"{BASE_URL}/api/json", {"depth": "1"})


def test_non_json_body_is_returned_as_text(client, session):
    session.request.return_value = make_response(200, text="Started by user bob")

    resp = client.do_fetch(f"{BASE_URL}/job/a/1/consoleText")

    assert resp.data == "Started by user bob"
    assert resp.text == "Started by user bob"


def test_do_request_uses_given_verb(client, session):
    session.request.return_value = make_response(201)

    resp = client.do_request(f"{BASE_URL}/job/a/build", "post", {"X": "1"})

    assert resp.status == 201
    assert resp.data == ""
    assert requested(session) == ("POST", f"{BASE_URL}/job/a/build", {"X": "1"})


@pytest.mark.parametrize(
    "url, expected",
    [
        (f"{BASE_URL}/job/a", f"{BASE_URL}/job/a/api/json"),
        (f"{BASE_URL}/job/a/api/json", f"{BASE_URL}/job/a/api/json"),
    ],
)
def test_fetch_json_data_appends_api_json_once(client, session, url, expected):
    client.fetch_json_data(url)
    assert requested(session)[1] == expected


def test_error_status_raises(client, session):
    session.request.return_value = make_response(404)

    with pytest.raises(requests.HTTPError):
        client.do_fetch(f"{BASE_URL}/job/missing")


def test_timeout_and_verify_are_configurable(session):
    c = JenkinsClient(
        JenkinsAuthConfig(base_url="https://j", verify_ssl=True, timeout_seconds=5.0),
        session=session,
    )
    c.do_fetch("https://j")

    kwargs = session.request.call_args.kwargs
    assert kwargs["verify"] is True
    assert kwargs["timeout"] == 5.0
