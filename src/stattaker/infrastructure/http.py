"""
HTTP event store.

Talks to the breakdown REST API (``/api/breakdowns/{id}/...``) with a
bearer token. Every response wraps its payload in ``{"data": ...}``.
"""

import os
from dataclasses import dataclass, field
from typing import Any

import requests

from stattaker.domain.exceptions import StoreError
from stattaker.domain.interfaces import EventStoreInterface
from stattaker.domain.models import Event, EventGroup, Period
from stattaker.domain.payloads import EventCreate, EventGroupCreate, PeriodCreate

DEFAULT_API_URL = "http://localhost:8000"


def _default_base_url() -> str:
    return os.environ.get("STATTAKER_API_URL", DEFAULT_API_URL)


@dataclass
class HttpEventStoreConfig:
    """Configuration for HttpEventStore.

    This typed config ensures unknown fields are rejected at construction time.
    """

    base_url: str = field(default_factory=_default_base_url)
    token: str | None = None
    timeout: float = 30.0


class HttpEventStore(EventStoreInterface):
    """Event store backed by the remote REST API."""

    config_class = HttpEventStoreConfig

    def __init__(
        self,
        config: HttpEventStoreConfig | None = None,
        session: requests.Session | None = None,
        **kwargs: Any,
    ):
        """
        Args:
            config: Typed configuration object (preferred)
            session: Pre-built session (tests, connection reuse)
            **kwargs: Fields of HttpEventStoreConfig when config is omitted
        """
        if config is None:
            config = HttpEventStoreConfig(**kwargs)

        self._base_url = config.base_url.rstrip("/")
        self._timeout = config.timeout
        self._session = session if session is not None else requests.Session()
        self._session.headers.update(
            {"Content-Type": "application/json", "Accept": "application/json"}
        )
        if config.token:
            self._session.headers["Authorization"] = f"Bearer {config.token}"

    # =========================================================================
    # PORT
    # =========================================================================

    def create_event_group(self, breakdown_id: str, request: EventGroupCreate) -> str:
        return self._create(f"/breakdowns/{breakdown_id}/event-groups", request.to_payload())

    def create_event(self, breakdown_id: str, group_id: str, request: EventCreate) -> str:
        return self._create(
            f"/breakdowns/{breakdown_id}/event-groups/{group_id}/events", request.to_payload()
        )

    def create_period(self, breakdown_id: str, request: PeriodCreate) -> str:
        return self._create(f"/breakdowns/{breakdown_id}/periods", request.to_payload())

    def list_event_groups(self, breakdown_id: str) -> list[EventGroup]:
        path = f"/breakdowns/{breakdown_id}/event-groups"
        data = self._request("GET", path)
        try:
            return [self._dict_to_event_group(g) for g in _as_list(data)]
        except (KeyError, TypeError, ValueError) as e:
            raise StoreError(f"Malformed response from GET {path}") from e

    def list_periods(self, breakdown_id: str) -> list[Period]:
        path = f"/breakdowns/{breakdown_id}/periods"
        data = self._request("GET", path)
        try:
            periods = [
                Period(
                    id=str(p["id"]),
                    order=int(p["order"]),
                    duration_seconds=p.get("duration_seconds"),
                )
                for p in _as_list(data)
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise StoreError(f"Malformed response from GET {path}") from e
        return sorted(periods, key=lambda p: p.order)

    def delete_event_group(self, breakdown_id: str, group_id: str) -> None:
        self._request("DELETE", f"/breakdowns/{breakdown_id}/event-groups/{group_id}")

    # =========================================================================
    # TRANSPORT
    # =========================================================================

    def _request(self, method: str, path: str, body: dict[str, Any] | None = None) -> Any:
        """Send a request and unwrap its ``data`` field.

        Raises:
            StoreError: On connection failure, non-2xx status or a malformed body
        """
        url = f"{self._base_url}/api{path}"
        try:
            response = self._session.request(method, url, json=body, timeout=self._timeout)
        except requests.RequestException as e:
            raise StoreError(f"{method} {path} failed: {e}") from e

        if not response.ok:
            try:
                error = response.json()
            except ValueError:
                error = {}
            if not isinstance(error, dict):
                error = {}
            raise StoreError(
                error.get("message", "Request failed"),
                status_code=response.status_code,
                errors=error.get("errors"),
            )

        if response.status_code == 204:
            return None
        try:
            return response.json()["data"]
        except (ValueError, KeyError, TypeError) as e:
            raise StoreError(f"Malformed response from {method} {path}") from e

    def _create(self, path: str, body: dict[str, Any]) -> str:
        """POST a create request and return the id the store assigned."""
        data = self._request("POST", path, body)
        if not isinstance(data, dict) or data.get("id") is None:
            raise StoreError(f"Malformed response from POST {path}")
        return str(data["id"])

    def _dict_to_event_group(self, data: dict[str, Any]) -> EventGroup:
        """Deserialize an event group from the API's JSON."""
        return EventGroup(
            id=str(data["id"]),
            workflow_id=data.get("workflow_id"),
            video_timestamp=float(data["video_timestamp"]),
            game_clock_timestamp=data.get("game_clock_timestamp"),
            events=tuple(
                Event(
                    id=e.get("id"),
                    event_type_id=e["event_type_id"],
                    breakdown_player_id=e.get("breakdown_player_id"),
                    breakdown_team_id=e.get("breakdown_team_id"),
                    deleted_at=e.get("deleted_at"),
                    metadata=e.get("metadata"),
                )
                for e in data.get("events", [])
            ),
        )


def _as_list(data: Any) -> list[Any]:
    if not isinstance(data, list):
        raise TypeError(f"expected a list, got {type(data).__name__}")
    return data
