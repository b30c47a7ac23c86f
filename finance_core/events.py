from datetime import datetime
from typing import Callable, Dict, List, NamedTuple

from finance_core.domain import Notification

__all__ = [
    'Event', 'EventBus', 'notifier', 'notification_from_event',
    'NOTIFICATION', 'TRANSACTION_ADDED', 'TRANSACTION_UPDATED', 'TRANSACTION_DELETED',
    'BUDGET_ADDED', 'BUDGET_UPDATED',
]

NOTIFICATION = "NOTIFICATION"
TRANSACTION_ADDED = "TRANSACTION_ADDED"
TRANSACTION_UPDATED = "TRANSACTION_UPDATED"
TRANSACTION_DELETED = "TRANSACTION_DELETED"
BUDGET_ADDED = "BUDGET_ADDED"
BUDGET_UPDATED = "BUDGET_UPDATED"


class Event(NamedTuple):
    name: str
    ts: str
    payload: dict


Handler = Callable[[Event, dict], dict]


class EventBus:
    def __init__(self):
        self._subscribers: Dict[str, List[Handler]] = {}

    def subscribe(self, name: str, handler: Handler) -> None:
        self._subscribers.setdefault(name, []).append(handler)

    def unsubscribe(self, name: str, handler: Handler) -> None:
        if handler in self._subscribers.get(name, []):
            self._subscribers[name].remove(handler)

    def publish(self, name: str, payload: dict) -> List[dict]:
        handlers = list(self._subscribers.get(name, []))
        if not handlers:
            return []

        event = Event(name=name, ts=datetime.now().isoformat(), payload=payload)
        return [handler(event, payload) for handler in handlers]

    def clear(self, name: str = None) -> None:
        if name is None:
            self._subscribers.clear()
        else:
            self._subscribers.pop(name, None)


def notifier(bus: EventBus) -> Callable[[Notification], None]:
    """A notification sink that publishes each notification on ``bus``."""
    def _notify(notification: Notification) -> None:
        bus.publish(NOTIFICATION, {
            "title": notification.title,
            "message": notification.message,
            "severity": notification.severity,
        })

    return _notify


def notification_from_event(event: Event) -> Notification:
    return Notification(**event.payload)
