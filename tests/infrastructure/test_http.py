"""Tests for HttpEventStore (no network; the session is mocked)."""

from unittest.mock import MagicMock

import pytest
import requests

from stattaker.application.engine import TaggingEngine
from stattaker.application.submission import SubmissionService
from stattaker.domain.exceptions import StoreError, SubmissionFailed
from stattaker.domain.models import Phase, WorkflowDefinition
from stattaker.domain.payloads import EventCreate, EventGroupCreate, PeriodCreate
from stattaker.infrastructure.http import HttpEventStore, HttpEventStoreConfig


def _response(status_code: int = 200, body=None, json_error: bool = False) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    if json_error:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = body
    return response


@pytest.fixture
def session() -> requests.Session:
    session = requests.Session()
    session.request = MagicMock()
    return session


@pytest.fixture
def store(session: requests.Session) -> HttpEventStore:
    return HttpEventStore(
        HttpEventStoreConfig(base_url="http://api.test/", token="secret", timeout=5.0),
        session=session,
    )


class TestHttpEventStoreConfig:
    """Tests for configuration."""

    def test_base_url_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STATTAKER_API_URL", "http://env.test")

        assert HttpEventStoreConfig().base_url == "http://env.test"

    def test_default_base_url(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("STATTAKER_API_URL", raising=False)

        assert HttpEventStoreConfig().base_url == "http://localhost:8000"

    def test_unknown_kwarg_rejected(self) -> None:
        with pytest.raises(TypeError):
            HttpEventStore(bogus=True)

    def test_headers(self, store: HttpEventStore, session: requests.Session) -> None:
        assert session.headers["Authorization"] == "Bearer secret"
        assert session.headers["Accept"] == "application/json"


class TestCreateRequests:
    """Tests for the create operations."""

    def test_create_event_group(self, store: HttpEventStore, session: requests.Session) -> None:
        session.request.return_value = _response(201, {"data": {"id": 17}})

        group_id = store.create_event_group(
            "bd-1", EventGroupCreate(video_timestamp=12.0, workflow_id="wf")
        )

        assert group_id == "17"
        session.request.assert_called_once_with(
            "POST",
            "http://api.test/api/breakdowns/bd-1/event-groups",
            json={"video_timestamp": 12.0, "game_clock_timestamp": None, "workflow_id": "wf"},
            timeout=5.0,
        )

    def test_create_event(self, store: HttpEventStore, session: requests.Session) -> None:
        session.request.return_value = _response(201, {"data": {"id": "e-1"}})

        event_id = store.create_event("bd-1", "g-1", EventCreate(event_type_id="et", metadata=2.0))

        assert event_id == "e-1"
        args, kwargs = session.request.call_args
        assert args == ("POST", "http://api.test/api/breakdowns/bd-1/event-groups/g-1/events")
        assert kwargs["json"]["metadata"] == 2.0

    def test_create_period(self, store: HttpEventStore, session: requests.Session) -> None:
        session.request.return_value = _response(201, {"data": {"id": "p-5"}})

        assert store.create_period("bd-1", PeriodCreate(order=5)) == "p-5"
        args, _ = session.request.call_args
        assert args[1] == "http://api.test/api/breakdowns/bd-1/periods"


class TestListRequests:
    """Tests for the fetch operations."""

    def test_list_event_groups(self, store: HttpEventStore, session: requests.Session) -> None:
        session.request.return_value = _response(
            200,
            {
                "data": [
                    {
                        "id": "g1",
                        "workflow_id": "wf-lineup",
                        "video_timestamp": "30.5",
                        "game_clock_timestamp": None,
                        "events": [
                            {"id": "e1", "event_type_id": "sub", "breakdown_player_id": "a"},
                            {
                                "id": "e2",
                                "event_type_id": "sub",
                                "breakdown_player_id": "b",
                                "deleted_at": "2024-05-01T12:00:00Z",
                            },
                        ],
                    }
                ]
            },
        )

        (group,) = store.list_event_groups("bd-1")

        assert group.video_timestamp == 30.5
        assert group.workflow_id == "wf-lineup"
        assert [e.id for e in group.active_events()] == ["e1"]
        assert group.events[1].is_deleted is True

    def test_list_periods_sorted(self, store: HttpEventStore, session: requests.Session) -> None:
        session.request.return_value = _response(
            200,
            {"data": [{"id": "b", "order": 2}, {"id": "a", "order": 1, "duration_seconds": 600}]},
        )

        periods = store.list_periods("bd-1")

        assert [p.id for p in periods] == ["a", "b"]
        assert periods[0].duration_seconds == 600


class TestErrors:
    """Failures surface as StoreError."""

    def test_validation_error(self, store: HttpEventStore, session: requests.Session) -> None:
        session.request.return_value = _response(
            422,
            {
                "message": "The given data was invalid.",
                "errors": {"video_timestamp": ["The video timestamp field is required."]},
            },
        )

        with pytest.raises(StoreError, match="The given data was invalid.") as exc_info:
            store.create_event_group("bd-1", EventGroupCreate(video_timestamp=0))

        assert exc_info.value.status_code == 422
        assert "video_timestamp" in exc_info.value.errors

    def test_error_without_json_body(self, store: HttpEventStore, session: requests.Session) -> None:
        session.request.return_value = _response(500, json_error=True)

        with pytest.raises(StoreError, match="Request failed") as exc_info:
            store.list_periods("bd-1")

        assert exc_info.value.status_code == 500
        assert exc_info.value.errors == {}

    def test_connection_error(self, store: HttpEventStore, session: requests.Session) -> None:
        session.request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(StoreError, match="refused"):
            store.list_event_groups("bd-1")

    def test_malformed_body(self, store: HttpEventStore, session: requests.Session) -> None:
        session.request.return_value = _response(200, {"items": []})

        with pytest.raises(StoreError, match="Malformed response"):
            store.list_event_groups("bd-1")


class TestMalformedCreateResponses:
    """Create calls must yield an id or raise StoreError."""

    def test_no_content_on_create(self, store: HttpEventStore, session: requests.Session) -> None:
        session.request.return_value = _response(204)

        with pytest.raises(StoreError, match="Malformed response from POST"):
            store.create_event_group("bd-1", EventGroupCreate(video_timestamp=0))

    def test_create_without_id(self, store: HttpEventStore, session: requests.Session) -> None:
        session.request.return_value = _response(201, {"data": {}})

        with pytest.raises(StoreError, match="Malformed response from POST"):
            store.create_event("bd-1", "g-1", EventCreate(event_type_id="et"))

    def test_period_create_with_list_body(
        self, store: HttpEventStore, session: requests.Session
    ) -> None:
        session.request.return_value = _response(201, {"data": []})

        with pytest.raises(StoreError):
            store.create_period("bd-1", PeriodCreate(order=1))

    def test_list_with_object_body(self, store: HttpEventStore, session: requests.Session) -> None:
        session.request.return_value = _response(200, {"data": {"id": "g1"}})

        with pytest.raises(StoreError, match="Malformed response from GET"):
            store.list_event_groups("bd-1")

    def test_period_missing_order(self, store: HttpEventStore, session: requests.Session) -> None:
        session.request.return_value = _response(200, {"data": [{"id": "p1"}]})

        with pytest.raises(StoreError, match="Malformed response from GET"):
            store.list_periods("bd-1")

    def test_submission_reports_failure_and_keeps_queue(
        self,
        store: HttpEventStore,
        session: requests.Session,
        engine: TaggingEngine,
        chain_workflow: WorkflowDefinition,
    ) -> None:
        """An id-less create surfaces as SubmissionFailed with the engine untouched."""
        engine.start_workflow(chain_workflow, 0.0)
        engine.select_option(engine.find_option("c4-steal"))
        queued = engine.queued_events
        session.request.return_value = _response(204)

        with pytest.raises(SubmissionFailed):
            SubmissionService(store).submit_workflow(engine, "bd-1")

        assert engine.phase is Phase.CONFIRMATION
        assert engine.queued_events == queued


class TestDeleteEventGroup:
    """Tests for delete_event_group."""

    def test_sends_delete(self, store: HttpEventStore, session: requests.Session) -> None:
        session.request.return_value = _response(204)

        store.delete_event_group("bd-1", "g-9")

        session.request.assert_called_once_with(
            "DELETE",
            "http://api.test/api/breakdowns/bd-1/event-groups/g-9",
            json=None,
            timeout=5.0,
        )

    def test_not_found(self, store: HttpEventStore, session: requests.Session) -> None:
        session.request.return_value = _response(404, {"message": "Not found."})

        with pytest.raises(StoreError, match="Not found.") as exc_info:
            store.delete_event_group("bd-1", "g-9")

        assert exc_info.value.status_code == 404
