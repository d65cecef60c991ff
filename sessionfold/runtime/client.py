"""HTTP client for a remote session event store."""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from typing import Any
from urllib.parse import quote

import httpx

from ..types.types import Event
from ..utils.config import is_localhost_url

logger = logging.getLogger(__name__)


class SessionStoreClient:
    """Loads and stores session events over HTTP.

    GET /api/v1/sessions/{session_id}/events
    PUT /api/v1/sessions/{session_id}/events

    Compaction events travel like any other event; readers identify them by
    ``actions.compaction``.
    """

    def __init__(
        self,
        api_url: str | None = None,
        api_key: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ):
        """
        Args:
            api_url: Base URL of the store. Falls back to SESSIONFOLD_API_URL.
            api_key: API key. Falls back to SESSIONFOLD_API_KEY; required unless
                api_url is localhost.
            http_client: Optional shared AsyncClient. A short-lived client is
                opened per request when omitted.
            timeout: Request timeout in seconds for short-lived clients

        Raises:
            ValueError: If no API key is available for a non-localhost URL
        """
        api_url = api_url or os.getenv("SESSIONFOLD_API_URL", "http://localhost:8080")
        self.api_url = api_url.rstrip("/")
        self.api_key = api_key or os.getenv("SESSIONFOLD_API_KEY")
        if not self.api_key and not is_localhost_url(self.api_url):
            raise ValueError(
                "api_key is required. Pass api_key=... or set the SESSIONFOLD_API_KEY "
                "environment variable (only localhost URLs may omit it)."
            )
        self._http_client = http_client
        self.timeout = timeout

    def _get_headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _events_url(self, session_id: str) -> str:
        return f"{self.api_url}/api/v1/sessions/{quote(session_id, safe='')}/events"

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        if self._http_client is not None:
            response = await self._http_client.request(
                method, url, headers=self._get_headers(), **kwargs
            )
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.request(method, url, headers=self._get_headers(), **kwargs)
        response.raise_for_status()
        return response

    async def get_session_events(self, session_id: str) -> list[Event]:
        """Get a session's events, oldest first.

        Args:
            session_id: Session identifier

        Returns:
            List of events
        """
        response = await self._request("GET", self._events_url(session_id))
        data = response.json()
        events = [Event.from_dict(item) for item in data.get("events", [])]
        logger.debug("Loaded %d events for session %s", len(events), session_id)
        return events

    async def put_session_events(self, session_id: str, events: Sequence[Event]) -> None:
        """Store a session's full event sequence.

        Args:
            session_id: Session identifier
            events: Events to store, oldest first
        """
        request_json = {"events": [event.to_dict() for event in events]}
        await self._request("PUT", self._events_url(session_id), json=request_json)
        logger.debug("Stored %d events for session %s", len(events), session_id)
