"""
Company knowledge provisioning: download the knowledge file, upload it, index it.

Responsibility: Produce the vector store id that grounds every reply. Provisioning
runs once per process; later calls return the cached id without network I/O.
"""

import logging
import os
import tempfile
from pathlib import Path
from urllib.parse import urlparse

import httpx

from app.core.config import (
    DOWNLOAD_TIMEOUT,
    KNOWLEDGE_FILE_PURPOSE,
    KNOWLEDGE_FILE_URL,
    VECTOR_STORE_NAME,
)
from app.core.errors import DownloadError
from app.core.resource_cache import vector_store_cell
from app.services.platform import get_platform

logger = logging.getLogger(__name__)


def _temp_suffix(url: str) -> str:
    suffix = Path(urlparse(url).path).suffix
    return suffix if suffix else ".json"


async def download_knowledge_file(
    url: str = KNOWLEDGE_FILE_URL,
    http_client: httpx.AsyncClient | None = None,
) -> Path:
    """
    Fetch the knowledge file into a uniquely named temporary file.

    Args:
        url: Location of the company knowledge document.
        http_client: Client to use; a short-lived one is created when omitted.

    Returns:
        Path of the temporary file. The caller removes it.

    Raises:
        DownloadError: On a non-2xx response or a transport failure.
    """
    logger.info("[knowledge:download] IN  url=%s", url)
    try:
        if http_client is None:
            async with httpx.AsyncClient(timeout=DOWNLOAD_TIMEOUT, follow_redirects=True) as client:
                response = await client.get(url)
        else:
            response = await http_client.get(url)
    except httpx.HTTPError as e:
        raise DownloadError(url, reason=str(e)) from e

    if not response.is_success:
        raise DownloadError(url, status_code=response.status_code, reason=response.reason_phrase)

    fd, name = tempfile.mkstemp(prefix="knowledge_", suffix=_temp_suffix(url))
    path = Path(name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(response.content)
    except OSError:
        path.unlink(missing_ok=True)
        raise
    logger.info("[knowledge:download] OUT path=%s bytes=%d", path, len(response.content))
    return path


async def provision_vector_store() -> str:
    """Download, upload and index the knowledge file. Returns the new vector store id."""
    path = await download_knowledge_file()
    platform = get_platform()
    try:
        file_id = await platform.upload_file(path, purpose=KNOWLEDGE_FILE_PURPOSE)
    finally:
        path.unlink(missing_ok=True)
    logger.info("[knowledge:provision] uploaded file_id=%s", file_id)
    vector_store_id = await platform.create_vector_store(VECTOR_STORE_NAME, [file_id])
    logger.info("[knowledge:provision] OUT vector_store_id=%s", vector_store_id)
    return vector_store_id


async def ensure_vector_store() -> str:
    """Return the cached vector store id, provisioning it on first use."""
    return await vector_store_cell.get_or_create(provision_vector_store)
