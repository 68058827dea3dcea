"""
Remote content retrieval for Claude Workflows.

This is the only module that touches the network. Raw file content comes from
{repo_url}/{branch}/{path}; directory listings come from the GitHub contents
API. Request timeouts are enforced by the underlying httpx client.
"""

import time
from typing import Dict, List, Optional

import httpx

from .exceptions import FetchError

GITHUB_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 30.0


class ContentFetcher:
    """Fetches workflow files and directory listings over HTTP."""

    def __init__(self, client: Optional[httpx.Client] = None, timeout: float = DEFAULT_TIMEOUT,
                 api_url: str = GITHUB_API_URL):
        """Initialize the fetcher.

        Args:
            client: Optional preconfigured httpx client (owned by the caller)
            timeout: Transport timeout in seconds for a client created here
            api_url: Base URL of the contents API
        """
        self._owns_client = client is None
        self.client = client or httpx.Client(timeout=timeout, follow_redirects=True)
        self.api_url = api_url.rstrip('/')

    def __enter__(self) -> 'ContentFetcher':
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        """Close the HTTP client if this fetcher created it."""
        if self._owns_client:
            self.client.close()

    def _get(self, url: str, label: str, params: Optional[Dict] = None) -> httpx.Response:
        try:
            response = self.client.get(url, params=params)
        except httpx.HTTPError as e:
            raise FetchError(f"Failed to fetch {label}: {e}") from e

        if response.is_error:
            raise FetchError(
                f"Failed to fetch {label}: HTTP {response.status_code} {response.reason_phrase}"
            )
        return response

    def fetch_file(self, repo_url: str, branch: str, file_path: str) -> str:
        """Fetch the raw content of a workflow file.

        Args:
            repo_url: Raw content base URL of the repository
            branch: Branch to read from
            file_path: Path of the file relative to the repository root

        Returns:
            File content as text

        Raises:
            FetchError: On any transport failure or non-2xx response
        """
        url = f"{repo_url.rstrip('/')}/{branch}/{file_path.lstrip('/')}"
        # Cache buster: raw.githubusercontent.com serves stale content for a few minutes
        params = {'t': str(int(time.time() * 1000))}
        return self._get(url, file_path, params=params).text

    def list_directory(self, owner: str, repo: str, path: str, branch: str) -> List[Dict]:
        """List a remote directory through the contents API.

        Returns:
            Entries of the shape {'name', 'path', 'type'} where type is 'file' or 'dir'

        Raises:
            FetchError: On transport failure, non-2xx response or an unexpected payload
        """
        url = f"{self.api_url}/repos/{owner}/{repo}/contents/{path.strip('/')}"
        response = self._get(url, path, params={'ref': branch})

        try:
            items = response.json()
        except ValueError as e:
            raise FetchError(f"Failed to fetch {path}: invalid JSON response") from e

        if not isinstance(items, list):
            raise FetchError(f"Failed to fetch {path}: expected a directory listing")

        return [
            {'name': item.get('name', ''), 'path': item.get('path', ''), 'type': item.get('type', '')}
            for item in items
            if isinstance(item, dict)
        ]
