"""
PoEditor API Client

This module contains the calls the importer makes to the PoEditor v2 API:
- languages/list: languages available in a project
- projects/export: signed URL of one language's exported file

Every call is a form-encoded POST. Failures are raised as ApiError; nothing
is retried.
"""

from typing import Any, Dict, List

import httpx

from poeditor_importer.api.models import ApiResponseStatus, ProjectLanguage, TranslationFileReference
from poeditor_importer.config import ANDROID_STRINGS_EXPORT_TYPE, HTTP_DEFAULTS, POEDITOR_API_URL
from poeditor_importer.exceptions import ApiError
from poeditor_importer.logger import get_logger

logger = get_logger(__name__)


def get_httpx_timeout(timeout_config: Any) -> httpx.Timeout:
    """
    Convert timeout configuration to httpx.Timeout object.

    Args:
        timeout_config: Either a number (read timeout) or a dict with
            connect, write, read, pool keys

    Returns:
        httpx.Timeout object
    """
    if isinstance(timeout_config, dict):
        return httpx.Timeout(
            connect=timeout_config.get('connect', 10.0),
            write=timeout_config.get('write', 30.0),
            read=timeout_config.get('read', 60.0),
            pool=timeout_config.get('pool', 10.0),
        )
    else:
        timeout_value = float(timeout_config) if timeout_config else float(HTTP_DEFAULTS['timeout'])
        return httpx.Timeout(
            connect=10.0,
            write=30.0,
            read=timeout_value,
            pool=10.0,
        )


def _log_request(request: httpx.Request):
    logger.debug(f"--> {request.method} {request.url}")
    for name, value in request.headers.items():
        logger.debug(f"{name}: {value}")
    logger.debug(f"--> END {request.method}")


def _log_response(response: httpx.Response):
    logger.debug(f"<-- {response.status_code} {response.reason_phrase} {response.request.url}")
    for name, value in response.headers.items():
        logger.debug(f"{name}: {value}")
    logger.debug("<-- END HTTP")


def create_http_client(timeout: Any = None, transport: httpx.BaseTransport = None) -> httpx.Client:
    """
    Build the HTTP client shared by the API client and the file downloader.

    Request and response headers are traced at DEBUG level. The API token is
    sent in the form body, so it never appears in the trace.
    """
    return httpx.Client(
        base_url=POEDITOR_API_URL,
        timeout=get_httpx_timeout(timeout),
        transport=transport,
        event_hooks={
            'request': [_log_request],
            'response': [_log_response],
        },
    )


def handle_http_error(e: httpx.HTTPStatusError, endpoint: str):
    """Raise ApiError with the most detailed message the error response offers."""
    status_code = e.response.status_code
    error_text = e.response.reason_phrase or "Unknown error"

    try:
        error_json = e.response.json()
        if isinstance(error_json, dict) and isinstance(error_json.get('response'), dict):
            error_text = error_json['response'].get('message', error_text)
    except ValueError:
        error_text = e.response.text[:500] or error_text

    raise ApiError(f"PoEditor API error on {endpoint} ({status_code}): {error_text}",
                   status_code=status_code) from e


class PoEditorApiClient:
    """Authenticated access to the PoEditor endpoints the importer needs."""

    def __init__(self, api_token: str, http_client: httpx.Client):
        self.api_token = api_token
        self.http_client = http_client

    def _post(self, endpoint: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """POST to an endpoint and return the 'result' object of a successful reply."""
        form = {'api_token': self.api_token}
        form.update({key: str(value) for key, value in data.items()})

        try:
            response = self.http_client.post(endpoint, data=form)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            handle_http_error(e, endpoint)
        except httpx.HTTPError as e:
            raise ApiError(f"PoEditor API request to {endpoint} failed: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise ApiError(f"PoEditor API returned malformed JSON on {endpoint}",
                           status_code=response.status_code, code="malformed_response") from e

        if not isinstance(body, dict) or not isinstance(body.get('response'), dict):
            raise ApiError(f"Unexpected PoEditor API response format on {endpoint}: {body!r}",
                           status_code=response.status_code, code="malformed_response")

        status = ApiResponseStatus.from_json(body['response'])
        if not status.is_success:
            raise ApiError(
                f"PoEditor API error on {endpoint} ({status.code}): {status.message}",
                status_code=response.status_code,
                code=status.code,
                details={'endpoint': endpoint, 'message': status.message},
            )

        result = body.get('result')
        if not isinstance(result, dict):
            raise ApiError(f"PoEditor API response on {endpoint} has no result",
                           status_code=response.status_code, code="malformed_response")
        return result

    def get_project_languages(self, project_id: int) -> List[ProjectLanguage]:
        """Retrieve the languages of a project, in the order PoEditor returns them."""
        result = self._post('languages/list', {'id': project_id})

        languages = result.get('languages')
        if not isinstance(languages, list):
            raise ApiError("PoEditor languages/list response has no language list",
                           code="malformed_response")

        return [ProjectLanguage.from_json(language) for language in languages]

    def get_translation_file_url(self, project_id: int, code: str,
                                 export_type: str = ANDROID_STRINGS_EXPORT_TYPE) -> TranslationFileReference:
        """Request an export of one language and return its download URL."""
        result = self._post('projects/export', {
            'id': project_id,
            'language': code,
            'type': export_type,
        })

        url = result.get('url')
        if not url:
            raise ApiError(f"PoEditor projects/export response has no URL for language {code}",
                           code="malformed_response")

        return TranslationFileReference(url=url)
