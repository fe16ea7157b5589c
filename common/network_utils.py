# common/network_utils.py
# -*- coding: utf-8 -*-
"""
Network-related utility functions: downloading installer payloads and
fetching small text resources such as published checksums.
"""

import logging
from pathlib import Path
from typing import Optional, Union

import requests

from .errors import DownloadError

module_logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT: int = 120
CHUNK_SIZE: int = 8192


def download_file(
    url: str,
    download_to_path: Union[str, Path],
    timeout: int = DEFAULT_TIMEOUT,
    current_logger: Optional[logging.Logger] = None,
) -> Path:
    """
    Download a file from a given URL to a specified path.

    A partially written file is removed when the download fails.

    Args:
        url: The URL to download.
        download_to_path: The file path where the download will be saved.
        timeout: Request timeout in seconds.
        current_logger: Optional logger instance.

    Returns:
        The path of the downloaded file.

    Raises:
        DownloadError: On any HTTP, connection, timeout or file I/O error.
    """
    logger_to_use = current_logger if current_logger else module_logger
    download_path = Path(download_to_path)
    logger_to_use.debug(f"Downloading {url} to {download_path}")
    response: Optional[requests.Response] = None

    try:
        download_path.parent.mkdir(parents=True, exist_ok=True)
        response = requests.get(url, stream=True, timeout=timeout)
        response.raise_for_status()

        with open(download_path, "wb") as f:
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if chunk:
                    f.write(chunk)
        logger_to_use.debug(f"Downloaded {url} to {download_path}")
        return download_path
    except requests.exceptions.HTTPError as http_err:
        status_code = response.status_code if response is not None else "Unknown"
        download_path.unlink(missing_ok=True)
        raise DownloadError(
            f"HTTP error downloading {url}: {http_err} - Status code: {status_code}",
            url=url,
            original_error=http_err,
        ) from http_err
    except requests.exceptions.RequestException as req_err:
        download_path.unlink(missing_ok=True)
        raise DownloadError(
            f"Could not download {url}: {req_err}",
            url=url,
            original_error=req_err,
        ) from req_err
    except IOError as io_err:
        download_path.unlink(missing_ok=True)
        raise DownloadError(
            f"File I/O error when saving {url} to {download_path}: {io_err}",
            url=url,
            original_error=io_err,
        ) from io_err
    finally:
        if response is not None:
            response.close()


def fetch_text(
    url: str,
    timeout: int = DEFAULT_TIMEOUT,
    current_logger: Optional[logging.Logger] = None,
) -> str:
    """
    Fetch a small text resource and return its body with surrounding
    whitespace stripped.

    Raises:
        DownloadError: On any HTTP, connection or timeout error.
    """
    logger_to_use = current_logger if current_logger else module_logger
    logger_to_use.debug(f"Fetching {url}")
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.RequestException as req_err:
        raise DownloadError(
            f"Could not fetch {url}: {req_err}",
            url=url,
            original_error=req_err,
        ) from req_err
    return response.text.strip()
