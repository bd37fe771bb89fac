"""
Index download infrastructure for stackrepo.

Fetches repository index documents over HTTP(S) or from the local
filesystem:
- requests Session, so HTTP(S)_PROXY / NO_PROXY from the environment apply
- file:// URLs served by FileAdapter from the filesystem root
- Non-2xx responses and decode failures raised as distinct error types
"""

import io
import os
import logging
from typing import BinaryIO, Optional
from urllib.parse import urlparse, unquote
from urllib.request import getproxies

import requests
import yaml
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

from ..domain import RepoIndex
from ..exit_codes import TransportError, IndexFormatError
from .codec import load_document

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


def file_root() -> str:
    """Base directory file:// paths are resolved against."""
    # On Windows the URL path already carries the drive (file:///C:/...).
    if os.name == 'nt':
        return ''
    return '/'


class FileBody(io.BufferedReader):
    """Response body for a local file; closed when the response is."""

    def release_conn(self):
        self.close()


class FileAdapter(BaseAdapter):
    """
    Transport adapter answering GET requests for file:// URLs.

    Missing files and directories answer 404, unreadable files 403,
    so callers handle them exactly like HTTP failures.
    """

    def __init__(self, root: Optional[str] = None):
        super().__init__()
        self.root = file_root() if root is None else root

    def local_path(self, url: str) -> str:
        path = unquote(urlparse(url).path).lstrip('/')
        return os.path.join(self.root, path) if self.root else path

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        response = requests.Response()
        response.request = request
        response.url = request.url
        response.headers = CaseInsensitiveDict()

        if request.method not in ('GET', 'HEAD'):
            response.status_code = 405
            response.reason = 'Method Not Allowed'
            response.raw = io.BytesIO(b'')
            return response

        path = self.local_path(request.url)
        try:
            if os.path.isdir(path):
                raise IsADirectoryError(path)
            raw = FileBody(io.FileIO(path, 'rb'))
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError) as e:
            response.status_code = 404
            response.reason = 'Not Found'
            response.raw = io.BytesIO(str(e).encode('utf-8'))
            return response
        except PermissionError as e:
            response.status_code = 403
            response.reason = 'Forbidden'
            response.raw = io.BytesIO(str(e).encode('utf-8'))
            return response

        response.status_code = 200
        response.reason = 'OK'
        response.headers['Content-Length'] = str(os.fstat(raw.fileno()).st_size)
        response.raw = raw
        return response

    def close(self):
        pass


def create_session() -> requests.Session:
    """Session that honours proxy environment variables and serves file:// URLs."""
    session = requests.Session()
    session.trust_env = True
    session.mount('file://', FileAdapter())
    logger.debug(f"Proxy settings for HTTP transport taken from environment: {getproxies()}")
    return session


class IndexDownloader:
    """
    Downloads repository indexes.

    Example:
        downloader = IndexDownloader()
        index = downloader.download_index("https://example.com/index.yaml")
        for name in index.projects:
            print(name)
    """

    def __init__(self, session: Optional[requests.Session] = None):
        self.session = session or create_session()

    def download(self, url: str, writer: BinaryIO) -> None:
        """
        Stream the document at `url` into `writer`.

        Raises:
            TransportError: connection failure, non-2xx status, or the
                body could not be copied into `writer`
        """
        try:
            with self.session.get(url, stream=True) as response:
                if not 200 <= response.status_code < 300:
                    self._log_failed_body(response)
                    status = f"{response.status_code} {response.reason or ''}".strip()
                    raise TransportError(
                        f"{status} response trying to download {url}",
                        url=url,
                        status_code=response.status_code,
                    )

                try:
                    for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                        writer.write(chunk)
                except (requests.RequestException, OSError) as e:
                    raise TransportError(
                        f"Could not copy http response body to writer: {e}", url=url
                    ) from e
        except requests.RequestException as e:
            raise TransportError(f"Failed to download {url}: {e}", url=url) from e

    def _log_failed_body(self, response: requests.Response) -> None:
        try:
            body = response.content
        except (requests.RequestException, OSError) as e:
            logger.debug(f"Could not read contents of response body: {e}")
            return
        logger.debug("Contents http response:\n%s", body.decode('utf-8', errors='replace'))

    def download_index(self, url: str) -> RepoIndex:
        """
        Download and decode the index document at `url`.

        Raises:
            TransportError: the document could not be downloaded
            IndexFormatError: the document is not a valid index
        """
        logger.debug(f"Downloading repository index from {url}")
        buffer = io.BytesIO()
        self.download(url, buffer)
        content = buffer.getvalue()

        try:
            data = load_document(content) or {}
            if not isinstance(data, dict):
                raise ValueError("top level must be a mapping")
            return RepoIndex.from_dict(data)
        except (yaml.YAMLError, ValueError) as e:
            logger.debug("Contents of downloaded index from %s\n%s", url,
                         content.decode('utf-8', errors='replace'))
            raise IndexFormatError(url, str(e)) from e
