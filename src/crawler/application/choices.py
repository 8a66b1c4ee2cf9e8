from __future__ import annotations

from typing import List, Optional, Protocol

from crawler.application.dtos import MenuView


class ChoiceSource(Protocol):
    """Where the state machine gets its numbered selections from.

    ``choose`` returns ``None`` for input that could not be read as a number;
    the caller treats that exactly like an out-of-range selection.
    """

    def choose(self, menu: MenuView) -> Optional[int]:
        ...

    def notify(self, lines: List[str]) -> None:
        ...
