import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Type

from crawler.domain.events import DOMAIN_EVENT_TYPES

EventHandler = Callable[[object], None]


logger = logging.getLogger(__name__)


@dataclass(order=True)
class _Subscription:
    priority: int
    order: int
    handler: EventHandler = field(compare=False)


class EventBus:
    """Synchronous publish/subscribe for the crawler's turn events.

    Handlers run in (priority, subscription order). A failing handler is logged
    and isolated so the turn that published the event still completes.
    """

    def __init__(self) -> None:
        self._subscriptions: Dict[Type[object], List[_Subscription]] = {}
        self._order = 0
        self._errors: List[Exception] = []

    def subscribe(self, event_type: Type[object], handler: EventHandler, *, priority: int = 100) -> None:
        rows = self._subscriptions.setdefault(event_type, [])
        rows.append(_Subscription(int(priority), self._order, handler))
        rows.sort()
        self._order += 1

    def subscribe_all(self, handler: EventHandler, *, priority: int = 100) -> None:
        """Subscribe ``handler`` to every event the engine publishes."""
        for event_type in DOMAIN_EVENT_TYPES:
            self.subscribe(event_type, handler, priority=priority)

    def publish(self, event: object) -> None:
        self._errors = []
        event_type = type(event)
        for row in list(self._subscriptions.get(event_type, [])):
            try:
                row.handler(event)
            except Exception as exc:
                self._errors.append(exc)
                logger.exception(
                    "Event handler failed and was isolated",
                    extra={
                        "event_type": event_type.__name__,
                        "handler": getattr(row.handler, "__qualname__", repr(row.handler)),
                        "priority": row.priority,
                    },
                )

    def last_publish_errors(self) -> List[Exception]:
        return list(self._errors)
