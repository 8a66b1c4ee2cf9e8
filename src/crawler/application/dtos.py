from dataclasses import dataclass, field
from typing import List


@dataclass
class ActionResult:
    messages: List[str] = field(default_factory=list)
    turn_consumed: bool = False
    game_over: bool = False


@dataclass
class MenuView:
    title: str
    options: List[str] = field(default_factory=list)
    hint: str = ""
    lines: List[str] = field(default_factory=list)


@dataclass
class MoveView:
    index: int
    name: str
    min_damage: float
    max_damage: float
    cooldown: int
    max_cooldown: int

    def label(self) -> str:
        if self.cooldown > 0:
            return f"{self.name:<15} On {self.cooldown} turn cooldown"
        damage = f"{self.min_damage:6.2f} -{self.max_damage:6.2f} Damage"
        if self.max_cooldown > 0:
            return f"{self.name:<15} {damage} (Has Cooldown: {self.max_cooldown} Turns)"
        return f"{self.name:<15} {damage}"


@dataclass
class InventorySlotView:
    index: int
    item_name: str = ""
    item_type: str = ""
    effect: float = 0.0
    description: str = ""
    useable: bool = False
    equipable: bool = False

    @property
    def empty(self) -> bool:
        return not self.item_type


@dataclass
class RoomView:
    room_id: int
    room_name: str
    x: int
    y: int
    total_chests: int
    lootable_chests: int
    locked_chests: int
    enemies_alive: int
    exits: List[str] = field(default_factory=list)


@dataclass
class PlayerStatsView:
    health: float
    max_health: float
    defense: float
    strength: float
    state: str
    x: int
    y: int
    armor: str = ""


@dataclass
class CombatRoundView:
    turn: int
    player_health: float
    enemy_name: str
    enemy_health: float
    moves: List[MoveView] = field(default_factory=list)
