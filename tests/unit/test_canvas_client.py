"""
Unit tests for the Canvas planner client.

HTTP is served by httpx.MockTransport; no network access is needed.
"""

from datetime import date

import httpx
import pytest

from canvastui.canvas.client import (
    PLANNER_ENDPOINT,
    CanvasApiError,
    CanvasAuthError,
    CanvasClient,
)

BASE_URL = "https://school.instructure.com"


def make_client(handler, base_url=BASE_URL):
    return CanvasClient(base_url, "secret-token", transport=httpx.MockTransport(handler))


class TestCanvasClientInit:
    """Tests for client construction."""

    def test_strips_api_suffix(self):
        client = CanvasClient(f"{BASE_URL}/api/v1/", "t")
        try:
            assert client.base_url == BASE_URL
        finally:
            client.close()

    def test_non_ascii_token_is_rejected_up_front(self):
        with pytest.raises(CanvasAuthError, match="non-ASCII"):
            CanvasClient(BASE_URL, "t\u00f6k\u00e9n")

    def test_sends_bearer_token(self):
        client = CanvasClient(BASE_URL, "secret-token")
        try:
            assert client.client.headers["Authorization"] == "Bearer secret-token"
        finally:
            client.close()


class TestFetchPlannerItems:
    """Tests for fetch_planner_items."""

    def test_request_shape(self, sample_items):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=sample_items)

        with make_client(handler) as client:
            items = client.fetch_planner_items(date(2025, 3, 1))

        assert items == sample_items
        request = seen[0]
        assert request.url.path == PLANNER_ENDPOINT
        assert request.url.params["start_date"] == "2025-03-01"
        assert request.url.params["per_page"] == "100"
        assert request.headers["Authorization"] == "Bearer secret-token"

    def test_follows_pagination(self, sample_items):
        page_two = f"{BASE_URL}{PLANNER_ENDPOINT}?start_date=2025-03-01&page=2&per_page=100"
        calls = []

        def handler(request):
            calls.append(str(request.url))
            if request.url.params.get("page") == "2":
                return httpx.Response(200, json=sample_items[2:])
            return httpx.Response(
                200,
                json=sample_items[:2],
                headers={"Link": f'<{page_two}>; rel="next"'},
            )

        with make_client(handler) as client:
            items = client.fetch_planner_items(date(2025, 3, 1))

        assert len(calls) == 2
        assert calls[1] == page_two
        assert [i["plannable"]["title"] for i in items] == [
            "Lab 1",
            "Essay Draft",
            "Quiz 2",
            "Problem Set 4",
        ]

    @pytest.mark.parametrize(
        "link_template",
        [
            '<{url}>; rel="next"',
            "<{url}>; rel=next",
            '<{first}>; rel="current", <{url}>; rel="next", <{first}>; rel="first"',
        ],
    )
    def test_link_header_variants(self, sample_items, link_template):
        """Quoted, unquoted and multi-relation Link headers all paginate."""
        first = f"{BASE_URL}{PLANNER_ENDPOINT}?page=1"
        page_two = f"{BASE_URL}{PLANNER_ENDPOINT}?page=2"

        def handler(request):
            if request.url.params.get("page") == "2":
                return httpx.Response(200, json=sample_items[2:])
            return httpx.Response(
                200,
                json=sample_items[:2],
                headers={"Link": link_template.format(url=page_two, first=first)},
            )

        with make_client(handler) as client:
            items = client.fetch_planner_items(date(2025, 3, 1))

        assert len(items) == 4

    def test_stops_without_next_relation(self, sample_items):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(
                200,
                json=sample_items,
                headers={"Link": f'<{BASE_URL}{PLANNER_ENDPOINT}?page=1>; rel="current"'},
            )

        with make_client(handler) as client:
            client.fetch_planner_items(date(2025, 3, 1))

        assert len(calls) == 1

    def test_drops_non_object_rows(self, sample_items):
        def handler(request):
            return httpx.Response(200, json=[sample_items[0], "junk", 3])

        with make_client(handler) as client:
            assert client.fetch_planner_items(date(2025, 3, 1)) == [sample_items[0]]

    @pytest.mark.parametrize("status", [401, 403])
    def test_auth_errors(self, status):
        def handler(request):
            return httpx.Response(status, json={"errors": [{"message": "Invalid access token."}]})

        with make_client(handler) as client:
            with pytest.raises(CanvasAuthError, match="CANVAS_ACCESS_TOKEN"):
                client.fetch_planner_items()

    def test_server_error(self):
        def handler(request):
            return httpx.Response(500, text="oops")

        with make_client(handler) as client:
            with pytest.raises(CanvasApiError, match="500"):
                client.fetch_planner_items()

    def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("Name or service not known", request=request)

        with make_client(handler) as client:
            with pytest.raises(CanvasApiError, match="Could not reach"):
                client.fetch_planner_items()

    def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with make_client(handler) as client:
            with pytest.raises(CanvasApiError, match="Timed out"):
                client.fetch_planner_items()

    def test_invalid_json(self):
        def handler(request):
            return httpx.Response(200, text="<html>login</html>")

        with make_client(handler) as client:
            with pytest.raises(CanvasApiError, match="not valid JSON"):
                client.fetch_planner_items()

    def test_non_list_payload(self):
        def handler(request):
            return httpx.Response(200, json={"errors": []})

        with make_client(handler) as client:
            with pytest.raises(CanvasApiError, match="expected list"):
                client.fetch_planner_items()

    def test_auth_error_is_api_error(self):
        assert issubclass(CanvasAuthError, CanvasApiError)


class TestFetchCalendar:
    """Tests for fetch_calendar."""

    def test_builds_calendar_with_absolute_urls(self, sample_items):
        def handler(request):
            return httpx.Response(200, json=sample_items)

        with make_client(handler) as client:
            calendar = client.fetch_calendar(date(2025, 3, 1))

        assert calendar.event_count == 4
        urls = {e.html_url for d in calendar.dates for e in d.events}
        assert all(url.startswith(BASE_URL) for url in urls)
