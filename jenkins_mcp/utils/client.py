from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
import urllib3


@dataclass
class JenkinsAuthConfig:
    base_url: str
    username: Optional[str] = None
    password: Optional[str] = None
    verify_ssl: bool = False
    timeout_seconds: Optional[float] = None


@dataclass(frozen=True)
class JenkinsResponse:
    status: int
    url: str
    data: Any = None
    text: str = ""


def basic_auth_header(username: Optional[str], password: Optional[str]) -> str:
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


class JenkinsClient:
    """Thin Jenkins HTTP client with a fixed Basic-Auth header.

    Every call raises on transport failures and non-2xx statuses so callers
    can classify the exception; nothing is retried.
    """

    def __init__(self, config: JenkinsAuthConfig, session: Optional[requests.Session] = None) -> None:
        self.config = config
        self.base_url = config.base_url.rstrip("/")
        self.headers: Dict[str, str] = {
            "Authorization": basic_auth_header(config.username, config.password),
            "Content-Type": "application/x-www-form-urlencoded",
        }
        self._session = session or requests.Session()
        if not config.verify_ssl:
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    def _request(self, method: str, url: str, params: Optional[Dict[str, Any]] = None) -> JenkinsResponse:
        resp = self._session.request(
            method.upper(),
            url,
            params=params or None,
            headers=self.headers,
            verify=self.config.verify_ssl,
            timeout=self.config.timeout_seconds,
        )
        resp.raise_for_status()

        data: Any
        try:
            data = resp.json()
        except ValueError:
            data = resp.text

        return JenkinsResponse(status=resp.status_code, url=url, data=data, text=resp.text)

    def do_fetch(self, url: str, params: Optional[Dict[str, Any]] = None) -> JenkinsResponse:
        return self._request("GET", url, params)

    def do_request(self, url: str, method: str, params: Optional[Dict[str, Any]] = None) -> JenkinsResponse:
        return self._request(method, url, params)

    def fetch_json_data(self, url: str) -> JenkinsResponse:
        if url.endswith("/api/json"):
            return self.do_fetch(url)
        return self.do_fetch(f"{url}/api/json")
