"""
GitHub API client for IssueSmith.

This module wraps a requests session for the GitHub REST API and translates
HTTP failures into IssueSmith's error types. Clients are built per tool
invocation and passed to the handlers that need them.
"""

import logging
import re
from typing import Optional, Dict, Any, Tuple

import requests

from .config import config
from .exceptions import AuthenticationError, InvalidRequestError, NotFoundError, RemoteApiError

logger = logging.getLogger(__name__)

_GITHUB_URL_RE = re.compile(
    r"^(?:https?://)?(?:www\.)?github\.com/(?P<owner>[^/\s]+)/(?P<repo>[^/\s]+?)(?:\.git)?(?:/.*)?$"
)
_SHORT_REPO_RE = re.compile(r"^(?P<owner>[\w.-]+)/(?P<repo>[\w.-]+?)(?:\.git)?$")


def parse_repo_url(repo_url: str) -> Tuple[str, str]:
    """
    Split a repository reference into owner and name.

    Args:
        repo_url: 'https://github.com/owner/repo' (optionally with '.git' or
            extra path segments) or 'owner/repo'

    Returns:
        (owner, repo) tuple

    Raises:
        InvalidRequestError: If the reference is not a GitHub repository
    """
    candidate = repo_url.strip().rstrip("/")
    match = _GITHUB_URL_RE.match(candidate) or _SHORT_REPO_RE.match(candidate)
    if not match:
        raise InvalidRequestError(
            f"Invalid repository URL '{repo_url}' (expected https://github.com/owner/repo)"
        )
    return match.group("owner"), match.group("repo")


def _error_message(response: requests.Response, fallback: str) -> str:
    """Pull the 'message' field out of a GitHub error body when there is one."""
    try:
        body = response.json()
    except ValueError:
        return response.text or fallback
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return fallback


class GitHubAPI:
    """GitHub API wrapper with session management and utility functions."""

    def __init__(
        self,
        token: str = "",
        base_url: str = "https://api.github.com",
        api_version: str = "2022-11-28",
        timeout: Optional[int] = 30,
    ):
        """Initialize GitHub API client with session."""
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": api_version,
            }
        )
        if token:
            self.session.headers.update({"Authorization": f"Bearer {token}"})
        logger.debug("GitHub API client initialized")

    @classmethod
    def from_config(cls) -> "GitHubAPI":
        """Build a client from the current environment."""
        return cls(
            token=config.github_token,
            base_url=config.github_api_base_url,
            api_version=config.github_api_version,
            timeout=config.api_timeout,
        )

    def require_auth(self) -> None:
        """Fail fast when no token is configured."""
        if not self.token:
            raise AuthenticationError(
                "GITHUB_TOKEN environment variable is required for GitHub operations"
            )

    def repo_url(self, owner: str, repo: str, *parts: Any) -> str:
        """Build a '/repos/{owner}/{repo}/...' URL."""
        url = f"{self.base_url}/repos/{owner}/{repo}"
        for part in parts:
            url += f"/{str(part).strip('/')}"
        return url

    def make_request(
        self,
        method: str,
        url: str,
        data: Optional[Dict[Any, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        session: Optional[requests.Session] = None,
    ) -> requests.Response:
        """
        Make an HTTP request to the GitHub API.

        Args:
            method: HTTP method (GET, POST, PUT, PATCH, DELETE)
            url: Full URL for the request
            data: JSON data for POST/PUT/PATCH requests
            params: Query parameters
            session: Session to send on (defaults to the shared one)

        Returns:
            Response object

        Raises:
            NotFoundError: For 404 responses
            RemoteApiError: For any other non-2xx response or transport failure
        """
        try:
            response = (session or self.session).request(
                method=method, url=url, json=data, params=params, timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"GitHub API request failed: {method} {url} - {str(e)}")
            raise RemoteApiError(str(e)) from e

        # Log rate limit information
        if "x-ratelimit-remaining" in response.headers:
            remaining = response.headers["x-ratelimit-remaining"]
            logger.debug(f"GitHub API rate limit remaining: {remaining}")

            if remaining.isdigit() and int(remaining) < 100:
                logger.warning(
                    f"GitHub API rate limit running low: {remaining} requests remaining"
                )

        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            message = _error_message(response, str(e))
            if response.status_code == 404:
                logger.debug(f"GitHub API returned 404: {method} {url}")
                raise NotFoundError(message, status_code=404) from e
            logger.error(f"GitHub API request failed: {method} {url} - {message}")
            raise RemoteApiError(message, status_code=response.status_code) from e

        return response

    def get_paginated_results(
        self, url: str, params: Optional[Dict[str, Any]] = None, max_pages: int = 100
    ) -> list:
        """
        Get all results from a paginated GitHub API endpoint.

        Args:
            url: Base URL for the API endpoint
            params: Query parameters
            max_pages: Maximum number of pages to fetch

        Returns:
            List of all items from all pages
        """
        all_items = []
        page = 1
        per_page = 100

        params = dict(params or {})
        params["per_page"] = per_page

        while page <= max_pages:
            params["page"] = page
            page_items = self.make_request("GET", url, params=params).json()

            if not page_items:
                break

            all_items.extend(page_items)

            if len(page_items) < per_page:
                break

            page += 1

        logger.debug(f"Retrieved {len(all_items)} items from {url}")
        return all_items

    def get_raw_content(self, download_url: str) -> str:
        """
        Fetch a file body from its raw download URL.

        Raw fetches run on worker threads, so each one uses a short-lived
        session carrying the client's headers instead of the shared one.

        Args:
            download_url: The 'download_url' of a contents API entry

        Returns:
            File content decoded as UTF-8
        """
        with requests.Session() as session:
            session.headers.update(self.session.headers)
            response = self.make_request("GET", download_url, session=session)
        return response.content.decode("utf-8", errors="replace")

    def close(self):
        """Close the session."""
        self.session.close()
        logger.debug("GitHub API session closed")
