"""
Jira API Client - Low-level HTTP client for the Jira REST API.

This handles the raw HTTP communication with Jira. The application services
(query engine, sprint resolver, comment gateway) use it to reach both the
platform API (``/rest/api/3``) and the agile API (``/rest/agile/1.0``).

The client never retries and applies no timeout unless one is configured:
a transport failure surfaces immediately as TransportError.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import requests

from ...core.exceptions import (
    AccessDeniedError,
    AuthenticationError,
    MalformedResponse,
    NotFound,
    TrackerError,
    TransportError,
)


@dataclass(frozen=True)
class ApiResponse:
    """Status code and decoded body of a completed HTTP exchange."""

    status_code: int
    body: Any
    text: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class JiraApiClient:
    """
    Low-level Jira REST API client.

    Handles basic authentication, JSON encoding, and mapping of error
    statuses to typed exceptions. One instance is created per CLI invocation
    and passed to every service that needs it.
    """

    API_VERSION = "3"
    AGILE_VERSION = "1.0"

    def __init__(
        self,
        base_url: str,
        email: str,
        api_token: str,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ):
        """
        Initialize the Jira client.

        Args:
            base_url: Jira instance URL (e.g., https://company.atlassian.net)
            email: User email for authentication
            api_token: API token
            timeout: Optional per-request timeout in seconds (None = no limit)
            session: Optional pre-built session (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.api_url = f"{self.base_url}/rest/api/{self.API_VERSION}"
        self.agile_url = f"{self.base_url}/rest/agile/{self.AGILE_VERSION}"
        self.auth = (email, api_token)
        self.timeout = timeout
        self.logger = logging.getLogger("JiraApiClient")

        self.headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

        self._session = session or requests.Session()
        self._session.auth = self.auth
        self._session.headers.update(self.headers)

        self._current_user: dict[str, Any] | None = None

    def __enter__(self) -> JiraApiClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Release the underlying HTTP session."""
        self._session.close()

    # -------------------------------------------------------------------------
    # Core Request Methods
    # -------------------------------------------------------------------------

    def url_for(self, endpoint: str, agile: bool = False) -> str:
        """Build the absolute URL for an endpoint."""
        if endpoint.startswith("http"):
            return endpoint
        root = self.agile_url if agile else self.api_url
        return f"{root}/{endpoint.lstrip('/')}"

    def send(
        self,
        method: str,
        endpoint: str,
        agile: bool = False,
        **kwargs: Any,
    ) -> ApiResponse:
        """
        Perform a request and return the raw outcome, whatever the status.

        Used by write operations that check the exact status code themselves.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            endpoint: API endpoint (e.g., 'issue/PROJ-123/comment')
            agile: Route to the agile API instead of the platform API
            **kwargs: Additional arguments for requests

        Returns:
            ApiResponse with status code and decoded JSON body (None if empty)

        Raises:
            TransportError: On connection, DNS, TLS or timeout failures
        """
        url = self.url_for(endpoint, agile=agile)
        kwargs.setdefault("timeout", self.timeout)
        self.logger.debug(f"{method} {url} params={kwargs.get('params')}")

        try:
            response = self._session.request(method, url, **kwargs)
        except requests.exceptions.RequestException as e:
            raise TransportError(f"{method} {endpoint} failed", cause=e) from e

        self.logger.debug(f"{method} {endpoint} -> {response.status_code}")
        return ApiResponse(
            status_code=response.status_code,
            body=self._decode(response, endpoint),
            text=response.text[:500] if response.text else "",
        )

    def request(
        self,
        method: str,
        endpoint: str,
        agile: bool = False,
        **kwargs: Any,
    ) -> Any:
        """
        Make an authenticated request and return the decoded body.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            endpoint: API endpoint
            agile: Route to the agile API instead of the platform API
            **kwargs: Additional arguments for requests

        Returns:
            Decoded JSON body ({} for empty bodies)

        Raises:
            TransportError: On network failures
            AuthenticationError: On 401
            AccessDeniedError: On 403
            NotFound: On 404
            TrackerError: On any other non-2xx status
        """
        response = self.send(method, endpoint, agile=agile, **kwargs)
        return self._handle_response(response, endpoint)

    def get(self, endpoint: str, agile: bool = False, **kwargs: Any) -> Any:
        """
        Perform a GET request to the Jira API.

        Args:
            endpoint: API endpoint (e.g., 'issue/PROJ-123').
            agile: Route to the agile API.
            **kwargs: Additional arguments passed to requests.

        Returns:
            Decoded JSON response.
        """
        return self.request("GET", endpoint, agile=agile, **kwargs)

    def post(self, endpoint: str, json: Any = None, **kwargs: Any) -> ApiResponse:
        """Perform a POST request; the caller checks the status."""
        return self.send("POST", endpoint, json=json, **kwargs)

    def put(self, endpoint: str, json: Any = None, **kwargs: Any) -> ApiResponse:
        """Perform a PUT request; the caller checks the status."""
        return self.send("PUT", endpoint, json=json, **kwargs)

    def delete(self, endpoint: str, **kwargs: Any) -> ApiResponse:
        """Perform a DELETE request; the caller checks the status."""
        return self.send("DELETE", endpoint, **kwargs)

    # -------------------------------------------------------------------------
    # Response Handling
    # -------------------------------------------------------------------------

    def _decode(self, response: requests.Response, endpoint: str) -> Any:
        if not response.text:
            return None
        try:
            return response.json()
        except ValueError as e:
            if not response.ok:
                # Error pages are often HTML; keep the status-based error.
                return None
            raise MalformedResponse(
                f"Response from {endpoint} is not valid JSON",
                cause=e,
            ) from e

    def _handle_response(self, response: ApiResponse, endpoint: str) -> Any:
        """
        Convert error statuses to typed exceptions.

        Args:
            response: The completed exchange.
            endpoint: The endpoint that was called (for error messages).

        Returns:
            Decoded JSON body, or {} when the body was empty.
        """
        if response.ok:
            return response.body if response.body is not None else {}

        status = response.status_code

        if status == 401:
            raise AuthenticationError(
                "Authentication failed. Check JIRA_EMAIL and JIRA_API_TOKEN.",
                status_code=status,
            )

        if status == 403:
            raise AccessDeniedError(
                f"Permission denied for {endpoint}",
                issue_key=endpoint,
                status_code=status,
            )

        if status == 404:
            raise NotFound(
                f"Not found: {endpoint}",
                issue_key=endpoint,
                status_code=status,
            )

        raise TrackerError(
            f"API error {status} for {endpoint}: {response.text}",
            issue_key=endpoint,
            status_code=status,
        )

    # -------------------------------------------------------------------------
    # Convenience Methods
    # -------------------------------------------------------------------------

    def get_myself(self) -> dict[str, Any]:
        """
        Get the current authenticated user's information.

        Results are cached for the lifetime of the client.

        Returns:
            Dictionary with user details (accountId, emailAddress, ...).
        """
        if self._current_user is None:
            self._current_user = self.get("myself")
        return self._current_user

    def search_jql(
        self,
        jql: str,
        expand: str | None = None,
        fields: list[str] | None = None,
    ) -> dict[str, Any]:
        """
        Execute a JQL search query.

        The page size is left to the server default.

        Args:
            jql: The JQL query string.
            expand: Optional expand parameter (e.g. renderedFields).
            fields: Optional list of field names to include.

        Returns:
            Dictionary with 'issues' list and pagination info.
        """
        params: dict[str, Any] = {"jql": jql}
        if expand:
            params["expand"] = expand
        if fields:
            params["fields"] = ",".join(fields)
        return self.get("search/jql", params=params)
