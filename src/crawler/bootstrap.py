import logging
import os
import random

from crawler.application.choices import ChoiceSource
from crawler.application.services.combat_service import CombatService
from crawler.application.services.event_bus import EventBus
from crawler.application.services.inventory_service import InventoryService
from crawler.application.services.navigation_service import NavigationService
from crawler.application.services.player_state_machine import PlayerStateMachine
from crawler.application.services.turn_log import register_turn_log_handlers
from crawler.domain.models.inventory import Inventory
from crawler.domain.models.location import Location
from crawler.domain.models.move import MoveRegistry, default_moveset
from crawler.domain.models.player import Player
from crawler.infrastructure.inmemory.starter_dungeon import STARTING_LOCATION, build_starter_dungeon


logger = logging.getLogger(__name__)


def _is_truthy(value: str | None, *, default: str = "0") -> bool:
    normalized = str(value if value is not None else default).strip().lower()
    return normalized in {"1", "true", "yes"}


def _seed_from_env() -> int | None:
    raw = os.getenv("CRAWLER_SEED", "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer CRAWLER_SEED=%r", raw)
        return None


def create_state_machine(choices: ChoiceSource) -> PlayerStateMachine:
    cheats_enabled = _is_truthy(os.getenv("CRAWLER_CHEATS_ENABLED"), default="0")
    debug_mode = _is_truthy(os.getenv("CRAWLER_DEBUG_MODE"), default="0")
    seed = _seed_from_env()

    rng = random.Random(seed)
    event_bus = EventBus()
    register_turn_log_handlers(event_bus)

    grid = build_starter_dungeon()
    location = Location(*STARTING_LOCATION)
    room = grid.room_at(location)
    if room is None:
        raise RuntimeError(f"starting location {STARTING_LOCATION} is outside the dungeon")

    registry = MoveRegistry()
    player = Player(location=location, current_room=room, inventory=Inventory(), moves=default_moveset(registry))

    combat_service = CombatService(rng=rng, event_bus=event_bus)
    navigation_service = NavigationService(grid, event_bus=event_bus, debug_mode=debug_mode)
    inventory_service = InventoryService(combat_service, event_bus=event_bus)

    logger.debug("Session created", extra={"seed": seed, "cheats_enabled": cheats_enabled, "debug_mode": debug_mode})
    return PlayerStateMachine(
        player,
        grid,
        choices,
        rng=rng,
        event_bus=event_bus,
        combat_service=combat_service,
        navigation_service=navigation_service,
        inventory_service=inventory_service,
        cheats_enabled=cheats_enabled,
        debug_mode=debug_mode,
    )
