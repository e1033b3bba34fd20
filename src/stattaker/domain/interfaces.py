"""
Domain interfaces (Ports) for the tagging workflow engine.

The engine performs no I/O; the submission service talks to the remote
store only through this port.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from stattaker.domain.models import EventGroup, Period
    from stattaker.domain.payloads import EventCreate, EventGroupCreate, PeriodCreate


class EventStoreInterface(ABC):
    """
    Port for the remote store holding event groups, events and periods.

    Implementations raise StoreError on any failure.
    """

    @abstractmethod
    def create_event_group(self, breakdown_id: str, request: "EventGroupCreate") -> str:
        """
        Create an event group.

        Args:
            breakdown_id: Breakdown the group belongs to
            request: Group fields

        Returns:
            The new group's id
        """
        pass

    @abstractmethod
    def create_event(
        self, breakdown_id: str, group_id: str, request: "EventCreate"
    ) -> str:
        """
        Create an event inside an existing group.

        Returns:
            The new event's id
        """
        pass

    @abstractmethod
    def create_period(self, breakdown_id: str, request: "PeriodCreate") -> str:
        """
        Create a period on the breakdown.

        Returns:
            The new period's id
        """
        pass

    @abstractmethod
    def list_event_groups(self, breakdown_id: str) -> list["EventGroup"]:
        """
        Fetch every event group of a breakdown, in creation order.

        Soft-deleted events are included.
        """
        pass

    @abstractmethod
    def list_periods(self, breakdown_id: str) -> list["Period"]:
        """Fetch the configured periods of a breakdown."""
        pass

    @abstractmethod
    def delete_event_group(self, breakdown_id: str, group_id: str) -> None:
        """
        Remove an event group and its events.

        Used to take back a submitted lineup or period end. The group no
        longer appears in list_event_groups.
        """
        pass
