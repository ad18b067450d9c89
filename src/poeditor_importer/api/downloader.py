import httpx

from poeditor_importer.exceptions import NetworkError
from poeditor_importer.logger import get_logger

logger = get_logger(__name__)


def download_url_to_string(client: httpx.Client, url) -> str:
    """Download the file at url and return its whole body as text."""
    url = str(url)
    try:
        response = client.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise NetworkError(f"Download failed with status {e.response.status_code}: {url}",
                           url=url, status_code=e.response.status_code) from e
    except httpx.HTTPError as e:
        raise NetworkError(f"Download failed: {e}", url=url) from e

    logger.debug(f"Downloaded {len(response.content)} bytes from {url}")
    return response.text
