from dataclasses import dataclass


@dataclass
class RoomEntered:
    room_id: int
    x: int
    y: int
    fled: bool = False


@dataclass
class ChestsLooted:
    room_id: int
    count: int


@dataclass
class ChestsUnlocked:
    room_id: int
    count: int
    key_effect_remaining: float


@dataclass
class ItemUsed:
    item_type: str
    effect_applied: float
    consumed: bool


@dataclass
class EscapeAttempted:
    from_room_id: int
    to_room_id: int
    from_sample: float
    to_sample: float
    succeeded: bool


@dataclass
class EnemyDefeated:
    enemy_type: str
    room_id: int
    turn: int


@dataclass
class PlayerDefeated:
    room_id: int
    enemy_type: str
    turn: int


# Low-volume events that close out a fight; everything else is routine turn traffic.
MILESTONE_EVENT_TYPES = (EnemyDefeated, PlayerDefeated)
ROUTINE_EVENT_TYPES = (RoomEntered, ChestsLooted, ChestsUnlocked, ItemUsed, EscapeAttempted)
DOMAIN_EVENT_TYPES = ROUTINE_EVENT_TYPES + MILESTONE_EVENT_TYPES
