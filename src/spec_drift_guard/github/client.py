"""
GitHub API Client

Handles GitHub API authentication and communication for listing the
files changed by a pull request.
"""

import time
import logging
from typing import Dict, List, Optional
from datetime import datetime
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .. import __version__


logger = logging.getLogger(__name__)


class RetrievalError(Exception):
    """Transport failure or non-success response from the GitHub API"""
    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class RateLimitExceeded(RetrievalError):
    """GitHub API rate limit exceeded"""
    def __init__(self, reset_time: datetime, status_code: int = 429, body: Optional[str] = None):
        super().__init__(f"Rate limit exceeded. Resets at {reset_time}", status_code=status_code, body=body)
        self.reset_time = reset_time


class GitHubClient:
    """
    GitHub API client for the pull request files endpoint.

    Requests are plain blocking round-trips on one session. Failures
    are raised, never retried unless max_retries is configured.
    """

    def __init__(
        self,
        token: str,
        base_url: str = "https://api.github.com",
        timeout_seconds: Optional[int] = None,
        max_retries: int = 0
    ):
        """
        Initialize GitHub client.

        Args:
            token: GitHub token (GITHUB_TOKEN or a personal access token)
            base_url: GitHub API base URL (default: https://api.github.com)
            timeout_seconds: Per-request timeout; None waits indefinitely
            max_retries: Transport-level retries for 5xx/429 responses
        """
        self.token = token
        self.base_url = base_url.rstrip('/')
        self.timeout_seconds = timeout_seconds
        self.max_retries = max_retries
        self.session = self._create_session()
        self.rate_limit_remaining: Optional[int] = None
        self.rate_limit_reset: Optional[datetime] = None

    def _create_session(self) -> requests.Session:
        """Create requests session with retry strategy and authentication."""
        session = requests.Session()

        retry_strategy = Retry(
            total=self.max_retries,
            backoff_factor=1,
            status_forcelist=[429, 500, 502, 503, 504],
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        session.headers.update({
            'Authorization': f'Bearer {self.token}',
            'Accept': 'application/vnd.github+json',
            'User-Agent': f'spec-drift-guard/{__version__}'
        })

        return session

    def _header_int(self, response: requests.Response, name: str) -> Optional[int]:
        """Integer value of a rate-limit header, or None when absent or malformed."""
        value = response.headers.get(name)
        if value is None:
            return None
        try:
            return int(float(value))
        except (TypeError, ValueError, OverflowError):
            logger.warning(f"Ignoring malformed {name} header: {value!r}")
            return None

    def _reset_time(self, response: requests.Response) -> Optional[datetime]:
        reset_timestamp = self._header_int(response, 'X-RateLimit-Reset')
        if reset_timestamp is None:
            return None
        try:
            return datetime.fromtimestamp(reset_timestamp)
        except (OverflowError, OSError, ValueError):
            logger.warning(f"Ignoring out-of-range X-RateLimit-Reset header: {reset_timestamp}")
            return None

    def _update_rate_limit(self, response: requests.Response) -> None:
        """Update rate limit information from response headers."""
        remaining = self._header_int(response, 'X-RateLimit-Remaining')
        if remaining is not None:
            self.rate_limit_remaining = remaining
            if self.rate_limit_remaining <= 10:
                logger.warning(f"GitHub rate limit low: {self.rate_limit_remaining} requests remaining")

        reset_time = self._reset_time(response)
        if reset_time is not None:
            self.rate_limit_reset = reset_time

    def _is_rate_limited(self, response: requests.Response) -> bool:
        if response.status_code == 429:
            return True
        return response.status_code == 403 and response.headers.get('X-RateLimit-Remaining') == '0'

    def _make_request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        """
        Make authenticated request to GitHub API.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint (without base URL)
            **kwargs: Additional arguments for requests

        Returns:
            Response object

        Raises:
            RetrievalError: For transport failures and non-success responses
            RateLimitExceeded: When rate limit is exceeded
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        kwargs.setdefault('timeout', self.timeout_seconds)

        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            logger.error(f"Request failed: {e}")
            raise RetrievalError(f"Request failed: {e}") from e

        self._update_rate_limit(response)

        if self._is_rate_limited(response):
            reset_time = self._reset_time(response) or datetime.fromtimestamp(time.time() + 3600)
            raise RateLimitExceeded(
                reset_time,
                status_code=response.status_code,
                body=response.text,
            )

        if not response.ok:
            raise RetrievalError(
                f"GitHub API error {response.status_code}: {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        return response

    def list_pull_request_files(
        self,
        owner: str,
        repo: str,
        pr_number: int,
        page: int,
        per_page: int = 100
    ) -> List[Dict]:
        """
        Get one page of files changed in a pull request.

        Args:
            owner: Repository owner
            repo: Repository name
            pr_number: Pull request number
            page: 1-based page number
            per_page: Page size (GitHub caps this at 100)

        Returns:
            Raw file records for the page
        """
        logger.debug(f"Fetching PR files for {owner}/{repo}#{pr_number} page {page}")

        response = self._make_request(
            'GET',
            f'/repos/{owner}/{repo}/pulls/{pr_number}/files',
            params={'per_page': per_page, 'page': page}
        )

        try:
            page_files = response.json() if response.content else []
        except ValueError as e:
            raise RetrievalError(
                f"GitHub API returned invalid JSON for page {page}",
                status_code=response.status_code,
                body=response.text,
            ) from e

        if not isinstance(page_files, list):
            raise RetrievalError(
                f"GitHub API returned {type(page_files).__name__} instead of a file list for page {page}",
                status_code=response.status_code,
                body=response.text,
            )

        return page_files
