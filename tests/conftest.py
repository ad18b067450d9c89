import json
from typing import Callable, Dict, List, Optional
from urllib.parse import parse_qs

import httpx
import pytest

from poeditor_importer.api.client import create_http_client
from poeditor_importer.resources.post_processor import iter_entries

DOWNLOAD_HOST = "cdn.poeditor.test"

SAMPLE_XML = """<?xml version="1.0" encoding="utf-8"?>
<resources>
  <string name="app_name">Sample</string>
  <string name="welcome_title">Welcome {{user}}</string>
  <string name="welcome_title_tablet">Welcome to the big screen, {{user}}</string>
  <plurals name="songs">
    <item quantity="one">%d song</item>
    <item quantity="other">%d songs</item>
  </plurals>
  <plurals name="songs_tablet">
    <item quantity="one">%d song on tablet</item>
    <item quantity="other">%d songs on tablet</item>
  </plurals>
  <string-array name="planets">
    <item>Mercury</item>
    <item>Venus</item>
  </string-array>
</resources>
"""


def entry_keys(document) -> List[str]:
    """Keys of the entries in a partition document, in order."""
    return [entry.get('name') for entry in iter_entries(document)]


def form_data(request: httpx.Request) -> Dict[str, str]:
    """Decode a form-encoded request body into a flat dict."""
    return {key: values[0] for key, values in parse_qs(request.content.decode('utf-8')).items()}


def success_body(result: dict) -> dict:
    return {
        "response": {"status": "success", "code": "200", "message": "OK"},
        "result": result,
    }


def language_json(code: str, name: str = None) -> dict:
    return {
        "name": name or code.upper(),
        "code": code,
        "translations": 10,
        "percentage": 100,
        "updated": "2020-01-31T10:00:00+0000",
    }


class FakePoEditor:
    """In-memory PoEditor API and file host served through httpx.MockTransport."""

    def __init__(self, files: Dict[str, str], language_list_error: Optional[dict] = None):
        self.files = files
        self.language_list_error = language_list_error
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.url.host == DOWNLOAD_HOST:
            code = request.url.path.rsplit('/', 1)[-1].replace('.xml', '')
            return httpx.Response(200, text=self.files[code])

        data = form_data(request)
        if request.url.path.endswith('/languages/list'):
            if self.language_list_error:
                return httpx.Response(200, json={"response": self.language_list_error})
            return httpx.Response(200, json=success_body(
                {"languages": [language_json(code) for code in self.files]}))

        if request.url.path.endswith('/projects/export'):
            url = f"https://{DOWNLOAD_HOST}/export/{data['language']}.xml"
            return httpx.Response(200, json=success_body({"url": url}))

        return httpx.Response(404, json={"response": {"status": "fail", "code": "404", "message": "Not found"}})

    def paths(self) -> List[str]:
        return [request.url.path for request in self.requests]


@pytest.fixture
def make_http_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.Client]:
    clients = []

    def factory(handler):
        client = create_http_client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.close()


@pytest.fixture
def json_response() -> Callable[..., httpx.Response]:
    def build(body, status_code: int = 200):
        return httpx.Response(status_code, content=json.dumps(body).encode('utf-8'),
                              headers={"Content-Type": "application/json"})
    return build
