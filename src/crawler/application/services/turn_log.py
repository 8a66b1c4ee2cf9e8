from __future__ import annotations

import logging
from dataclasses import asdict

from crawler.application.services.event_bus import EventBus
from crawler.domain.events import MILESTONE_EVENT_TYPES


class TurnLogService:
    """Writes every domain event to the ``crawler.turns`` logger."""

    def __init__(self, event_bus: EventBus, logger: logging.Logger | None = None) -> None:
        self.event_bus = event_bus
        self.logger = logger or logging.getLogger("crawler.turns")
        self.entries: list[tuple[str, dict]] = []

    def register_handlers(self) -> None:
        self.event_bus.subscribe_all(self.on_event, priority=200)

    def on_event(self, event: object) -> None:
        name = type(event).__name__
        payload = asdict(event)
        self.entries.append((name, payload))
        level = logging.INFO if isinstance(event, MILESTONE_EVENT_TYPES) else logging.DEBUG
        self.logger.log(level, "%s %s", name, payload)


def register_turn_log_handlers(event_bus: EventBus, logger: logging.Logger | None = None) -> TurnLogService:
    service = TurnLogService(event_bus=event_bus, logger=logger)
    service.register_handlers()
    return service
