"""
Canvas REST client for the planner endpoint.

Performs the single authenticated GET the viewer needs, following
Canvas' Link-header pagination, and maps failures onto a small
exception hierarchy the UI can report.

Usage:
    with CanvasClient(settings.canvas_url, settings.canvas_access_token) as client:
        calendar = client.fetch_calendar()
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

import httpx
from loguru import logger

from canvastui.config import normalize_base_url
from canvastui.core.calendar import Calendar, build_calendar

PLANNER_ENDPOINT = "/api/v1/planner/items"
DEFAULT_TIMEOUT_SECONDS = 20.0
PAGE_SIZE = 100
USER_AGENT = "canvas-tui"


class CanvasApiError(RuntimeError):
    """Raised when Canvas API requests fail or return malformed payloads."""


class CanvasAuthError(CanvasApiError):
    """Raised when Canvas rejects the access token (401/403)."""


class CanvasClient:
    """HTTP client for the Canvas planner API."""

    def __init__(
        self,
        base_url: str,
        access_token: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize Canvas client.

        Args:
            base_url: Institution root URL (an /api/v1 suffix is tolerated)
            access_token: Canvas personal access token, sent as a bearer token
            timeout: Request timeout in seconds
            transport: Optional httpx transport, used by tests
        """
        if not access_token.isascii():
            raise CanvasAuthError(
                "CANVAS_ACCESS_TOKEN contains non-ASCII characters; copy the token again."
            )
        self.base_url = normalize_base_url(base_url)
        self.client = httpx.Client(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {access_token}",
                "Accept": "application/json",
                "User-Agent": USER_AGENT,
            },
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
            transport=transport,
        )

    def __enter__(self) -> CanvasClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP client."""
        self.client.close()

    def _get(self, url: str, params: dict[str, Any] | None = None) -> httpx.Response:
        try:
            response = self.client.get(url, params=params)
        except httpx.TimeoutException as e:
            raise CanvasApiError(f"Timed out contacting {self.base_url}") from e
        except httpx.RequestError as e:
            raise CanvasApiError(f"Could not reach {self.base_url}: {e}") from e

        if response.status_code in (401, 403):
            raise CanvasAuthError(
                f"Canvas rejected the access token ({response.status_code}). "
                "Check CANVAS_ACCESS_TOKEN."
            )
        if response.is_error:
            raise CanvasApiError(
                f"Canvas request failed ({response.status_code}) for {response.url}"
            )
        return response

    def fetch_planner_items(self, start_date: date | None = None) -> list[dict[str, Any]]:
        """
        Fetch every planner item due on or after start_date.

        Args:
            start_date: First day to include (defaults to today, local time)

        Returns:
            Raw planner item dicts, concatenated across pages in API order
        """
        start_date = start_date or datetime.now().date()
        params: dict[str, Any] | None = {
            "start_date": start_date.strftime("%Y-%m-%d"),
            "per_page": PAGE_SIZE,
        }
        items: list[dict[str, Any]] = []
        next_url: str | None = PLANNER_ENDPOINT

        while next_url:
            response = self._get(next_url, params=params)
            try:
                payload = response.json()
            except ValueError as e:
                raise CanvasApiError(
                    f"Canvas response was not valid JSON for {response.url}"
                ) from e
            if not isinstance(payload, list):
                raise CanvasApiError(f"Canvas response expected list for {response.url}")

            items.extend(row for row in payload if isinstance(row, dict))
            # The next link already carries the query string
            next_url = response.links.get("next", {}).get("url")
            params = None

        logger.debug("Fetched {} planner items from {}", len(items), self.base_url)
        return items

    def fetch_calendar(self, start_date: date | None = None) -> Calendar:
        """Fetch planner items and bucket them into a Calendar."""
        items = self.fetch_planner_items(start_date)
        return build_calendar(items, base_url=self.base_url)
