"""GitHub REST API client"""

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import aiohttp

from ..config import DEFAULT_API_TIMEOUT, DEFAULT_API_URL

logger = logging.getLogger(__name__)

USER_AGENT = "MCP-GitHub-Server/1.0"


class GitHubError(Exception):
    """Base class for GitHub API client failures"""


class GitHubAPIError(GitHubError):
    """The API answered with an HTTP error status."""

    def __init__(self, status: int, body: str):
        self.status = status
        self.body = body
        super().__init__(f"GitHub API error {status}: {body}")


class GitHubResponseError(GitHubError):
    """The API could not be reached or its answer could not be parsed."""


@dataclass(frozen=True)
class GitHubClient:
    """GitHub API client. Anonymous when ``token`` is empty."""

    token: Optional[str] = None
    base_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_API_TIMEOUT

    def get_headers(self) -> dict:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": USER_AGENT,
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def request(
        self,
        path: str,
        method: str = "GET",
        body: Optional[Mapping[str, Any]] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """Make a single request and return the parsed JSON body.

        Raises:
            GitHubAPIError: the response status is 400 or above
            GitHubResponseError: network failure, timeout or a body that is not JSON
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        kwargs: dict[str, Any] = {"headers": self.get_headers()}
        if body is not None:
            kwargs["json"] = body
        if params:
            kwargs["params"] = dict(params)

        logger.debug(f"GitHub API {method} {path}")
        try:
            async with aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            ) as session:
                async with session.request(method, url, **kwargs) as response:
                    text = await response.text()
                    status = response.status
        except asyncio.TimeoutError as e:
            raise GitHubResponseError(
                f"GitHub API request timed out after {self.timeout:g}s"
            ) from e
        except aiohttp.ClientError as e:
            raise GitHubResponseError(f"GitHub API request failed: {e}") from e

        if status >= 400:
            logger.info(f"GitHub API {method} {path} returned {status}")
            raise GitHubAPIError(status, text)

        try:
            return json.loads(text)
        except ValueError as e:
            raise GitHubResponseError(f"Invalid JSON in GitHub API response: {e}") from e

    async def get(self, path: str, **params) -> Any:
        """Make GET request to GitHub API"""
        return await self.request(path, "GET", params=params or None)

    async def post(self, path: str, body: Mapping[str, Any]) -> Any:
        """Make POST request to GitHub API"""
        return await self.request(path, "POST", body=body)
