"""Interface to the backing reminders store."""

from abc import ABC, abstractmethod
from threading import Event
from typing import Callable, Iterable, List, Optional, Tuple

from .errors import StoreTimeout
from .models import CalendarRecord, ReminderRecord


def wait_for_callback(
    start: Callable[[Callable[..., None]], None],
    timeout: Optional[float] = None,
) -> Tuple:
    """
    Run an asynchronous call and block until its completion callback fires.

    ``start`` receives a ``complete`` function and must arrange for the
    asynchronous API to call it exactly once. The positional arguments
    the callback was invoked with are returned as a tuple.

    Args:
        start: Function that kicks off the asynchronous call
        timeout: Seconds to wait; None blocks until the callback fires

    Raises:
        StoreTimeout: If ``timeout`` elapses first
    """
    done = Event()
    result = {}

    def complete(*args) -> None:
        if done.is_set():
            return
        result["args"] = args
        done.set()

    start(complete)

    if not done.wait(timeout):
        raise StoreTimeout(f"no response from the reminders store after {timeout}s")

    return result["args"]


class RemindersStore(ABC):
    """Operations the CLI needs from a reminders backend."""

    @abstractmethod
    def request_permission(self) -> bool:
        """Ask for access to reminders. Blocks until the user answers."""

    @abstractmethod
    def default_list_id(self) -> str:
        """Identifier of the list new reminders go to."""

    @abstractmethod
    def list_all_lists(self) -> List[CalendarRecord]:
        pass

    @abstractmethod
    def fetch_incomplete_reminders(self, list_ids: Iterable[str]) -> List[ReminderRecord]:
        pass

    @abstractmethod
    def save(self, reminder: ReminderRecord) -> ReminderRecord:
        """
        Persist a new reminder.

        Returns:
            The reminder as stored, with its identifier assigned

        Raises:
            SaveError: If the store rejects the write
        """

    def find_list(self, title: str) -> Optional[CalendarRecord]:
        """Return the first list with the given title, if any."""
        for calendar in self.list_all_lists():
            if calendar.title == title:
                return calendar
        return None
