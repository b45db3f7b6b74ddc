"""
Platform Manager SDK - Python client for the platform management API.
"""

import logging
import re
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar
from urllib.parse import quote, unquote

import requests
from pydantic import BaseModel, ValidationError

from platform_manager_sdk.models import (
    ServiceBroker,
    ServiceBrokerRequest,
    User,
)

logger = logging.getLogger(__name__)

# Response header carrying non-fatal advisory messages
WARNINGS_HEADER = "X-Platform-Warnings"

Warnings = List[str]

M = TypeVar("M", bound=BaseModel)


class PlatformError(Exception):
    """Base exception for the platform SDK."""

    def __init__(self, message: str, warnings: Optional[Warnings] = None):
        super().__init__(message)
        self.warnings: Warnings = list(warnings or [])


class AuthenticationError(PlatformError):
    """Authentication related errors."""

    pass


class APIError(PlatformError):
    """API request errors."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response: Optional[Dict] = None,
        warnings: Optional[Warnings] = None,
    ):
        super().__init__(message, warnings)
        self.status_code = status_code
        self.response = response


class ResourceNotFoundError(APIError):
    """The requested resource does not exist."""

    pass


def parse_warnings(response: requests.Response) -> Warnings:
    """Extract the ordered warning list from a response."""
    raw = response.headers.get(WARNINGS_HEADER)
    if not raw:
        return []
    return [unquote(part.strip()) for part in raw.split(",") if part.strip()]


def _error_message(response: requests.Response) -> Tuple[str, Optional[Dict]]:
    try:
        body = response.json()
    except ValueError:
        return f"API error: {response.status_code}", None

    if isinstance(body, dict):
        errors = body.get("errors")
        if isinstance(errors, list) and errors and isinstance(errors[0], dict):
            detail = errors[0].get("detail") or errors[0].get("title")
            if detail:
                return str(detail), body
        if body.get("detail"):
            return str(body["detail"]), body
    return f"API error: {response.status_code}", body if isinstance(body, dict) else None


class PlatformClient:
    """Client for interacting with the platform management API."""

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the platform client.

        Args:
            base_url: Base URL for the platform API
            token: Bearer token for the logged-in user
            timeout: Optional per-request timeout in seconds (None blocks until done)
            session: Optional pre-built requests session
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()
        if self.token:
            self.session.headers["Authorization"] = f"Bearer {self.token}"

    def _validate_guid(self, guid: str) -> None:
        """Validate GUID format to prevent path injection."""
        if not re.match(r"^[a-zA-Z0-9_-]+$", guid):
            raise APIError(f"Invalid GUID format: {guid}")

    def _request(
        self, method: str, endpoint: str, **kwargs: Any
    ) -> Tuple[requests.Response, Warnings]:
        """Make an authenticated request and collect its warnings."""
        if not self.token:
            raise AuthenticationError("No authentication token available. Please login first.")

        if not endpoint.startswith("/"):
            raise ValueError("Endpoint must start with /")

        url = f"{self.base_url}{endpoint}"
        logger.debug("%s %s", method, url)
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise APIError(f"Request to {url} failed: {e}") from e

        warnings = parse_warnings(response)

        if response.status_code == 401:
            raise AuthenticationError(
                "Authentication failed. Token may be expired.", warnings=warnings
            )
        if response.status_code == 404:
            message, body = _error_message(response)
            raise ResourceNotFoundError(message, 404, body, warnings=warnings)
        if response.status_code >= 400:
            message, body = _error_message(response)
            raise APIError(message, response.status_code, body, warnings=warnings)

        return response, warnings

    def _find_one(
        self, endpoint: str, params: Dict[str, str], description: str, model: Type[M]
    ) -> Tuple[M, Warnings]:
        """
        GET a filtered list and parse its first resource into ``model``.

        Malformed bodies raise APIError carrying the response's warnings.
        """
        response, warnings = self._request("GET", endpoint, params=params)
        try:
            body = response.json()
        except ValueError as e:
            raise APIError(
                f"Invalid response from {endpoint}: {e}", response.status_code, warnings=warnings
            ) from e

        resources = body.get("resources") if isinstance(body, dict) else None
        if not isinstance(resources, list):
            raise APIError(
                f"Invalid response from {endpoint}: missing resources",
                response.status_code,
                warnings=warnings,
            )
        if not resources:
            raise ResourceNotFoundError(f"{description} not found", 404, warnings=warnings)

        try:
            return model.model_validate(resources[0]), warnings
        except ValidationError as e:
            raise APIError(
                f"Invalid {description} in response: {e}",
                response.status_code,
                warnings=warnings,
            ) from e

    # Users

    def find_user_by_name(self, username: str) -> Tuple[User, Warnings]:
        """Look up a user by login name."""
        return self._find_one("/v3/users", {"usernames": username}, f"User '{username}'", User)

    def delete_user(self, guid: str) -> Warnings:
        """Delete a user."""
        self._validate_guid(guid)
        _, warnings = self._request("DELETE", f"/v3/users/{quote(guid, safe='')}")
        return warnings

    # Service Brokers

    def find_service_broker_by_name(self, name: str) -> Tuple[ServiceBroker, Warnings]:
        """Look up a service broker by name."""
        return self._find_one(
            "/v3/service_brokers", {"names": name}, f"Service broker '{name}'", ServiceBroker
        )

    def create_service_broker(self, request: ServiceBrokerRequest) -> Warnings:
        """Register a new service broker."""
        _, warnings = self._request("POST", "/v3/service_brokers", json=request.to_payload())
        return warnings

    def update_service_broker(self, guid: str, request: ServiceBrokerRequest) -> Warnings:
        """Update name, URL or credentials of a service broker."""
        self._validate_guid(guid)
        _, warnings = self._request(
            "PATCH",
            f"/v3/service_brokers/{quote(guid, safe='')}",
            json=request.to_payload(),
        )
        return warnings

    def delete_service_broker(self, guid: str) -> Warnings:
        """Delete a service broker."""
        self._validate_guid(guid)
        _, warnings = self._request("DELETE", f"/v3/service_brokers/{quote(guid, safe='')}")
        return warnings


__all__ = [
    "APIError",
    "AuthenticationError",
    "PlatformClient",
    "PlatformError",
    "ResourceNotFoundError",
    "ServiceBroker",
    "ServiceBrokerRequest",
    "User",
    "WARNINGS_HEADER",
    "Warnings",
    "parse_warnings",
]
