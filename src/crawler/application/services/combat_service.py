import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional

from crawler.application.dtos import ActionResult
from crawler.application.services.event_bus import EventBus
from crawler.domain.events import EnemyDefeated, EscapeAttempted, PlayerDefeated
from crawler.domain.models.enemy import Enemy
from crawler.domain.models.grid import RoomGrid
from crawler.domain.models.location import Direction
from crawler.domain.models.player import Player, PlayerState


logger = logging.getLogger(__name__)


@dataclass
class EscapeResult:
    succeeded: bool
    messages: List[str] = field(default_factory=list)
    from_sample: float = 0.0
    to_sample: float = 0.0


def damage_taken(raw_damage: float, defense: float) -> float:
    """Health lost from one enemy attack.

    Defense is subtracted twice: once from the raw roll and once more when
    the result is applied to health.
    """
    damage = raw_damage - defense
    return damage - defense


class CombatService:
    def __init__(
        self,
        rng: Optional[random.Random] = None,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self.rng = rng or random.Random()
        self.event_bus = event_bus

    def set_seed(self, seed: int) -> None:
        self.rng.seed(seed)

    def _publish(self, event: object) -> None:
        if self.event_bus is not None:
            self.event_bus.publish(event)

    def use_move(
        self,
        player: Player,
        enemy: Enemy,
        move_index: int,
        room_id: int = 0,
        sample: Optional[float] = None,
    ) -> ActionResult:
        move = player.moves[move_index]
        if not move.is_ready:
            return ActionResult(
                messages=[f"Move {move.name:<15} is on {move.cooldown} turn cooldown"],
                turn_consumed=False,
            )

        roll = self.rng.random() if sample is None else float(sample)
        damage = move.roll_damage(roll)
        enemy.take_damage(damage)
        messages = [f"Your {move.name} did {damage:.2f} damage."]

        for other in player.moves:
            other.tick_cooldown()
        move.start_cooldown()

        if enemy.is_defeated:
            messages.extend(self.resolve_defeat(player, enemy, room_id))
        return ActionResult(messages=messages, turn_consumed=True)

    def resolve_defeat(self, player: Player, enemy: Enemy, room_id: int = 0) -> List[str]:
        player.state = PlayerState.EXPLORING
        player.reset_cooldowns()
        logger.info("Enemy defeated", extra={"enemy_type": enemy.enemy_type.value, "room_id": room_id})
        self._publish(EnemyDefeated(enemy_type=enemy.enemy_type.value, room_id=room_id, turn=enemy.turn_counter))
        return [f"You defeated the {enemy.name}"]

    def enemy_attack(self, player: Player, enemy: Enemy, room_id: int = 0) -> ActionResult:
        raw_damage = enemy.get_damage_from_attack(self.rng)
        lost = damage_taken(raw_damage, player.defense)
        player.health -= lost
        messages = [f"The {enemy.name} attacked and did {lost:.2f} damage."]

        if player.health <= 0:
            messages.append("It appears that the enemy killed you.")
            logger.info("Player defeated", extra={"enemy_type": enemy.enemy_type.value, "room_id": room_id})
            self._publish(PlayerDefeated(room_id=room_id, enemy_type=enemy.enemy_type.value, turn=enemy.turn_counter))
            return ActionResult(messages=messages, turn_consumed=True, game_over=True)
        return ActionResult(messages=messages, turn_consumed=True)

    def attempt_escape(
        self,
        player: Player,
        grid: RoomGrid,
        direction: Direction,
        from_sample: Optional[float] = None,
        to_sample: Optional[float] = None,
    ) -> EscapeResult:
        """Roll the origin and destination escape gates; the run succeeds only if both pass."""
        origin = player.current_room
        destination = grid.neighbor(player.location, direction)
        if destination is None:
            return EscapeResult(succeeded=False, messages=["Invalid Input, try again"])

        from_sample = self.rng.random() if from_sample is None else float(from_sample)
        to_sample = self.rng.random() if to_sample is None else float(to_sample)
        succeeded = origin.can_run_from(from_sample) and destination.can_run_to(to_sample)

        logger.debug(
            "Escape attempt",
            extra={"direction": direction.value, "from_sample": from_sample, "to_sample": to_sample, "succeeded": succeeded},
        )
        self._publish(
            EscapeAttempted(
                from_room_id=origin.id,
                to_room_id=destination.id,
                from_sample=from_sample,
                to_sample=to_sample,
                succeeded=succeeded,
            )
        )
        if not succeeded:
            return EscapeResult(
                succeeded=False,
                messages=["Couldn't get away!"],
                from_sample=from_sample,
                to_sample=to_sample,
            )
        return EscapeResult(
            succeeded=True,
            messages=["Got away safely"],
            from_sample=from_sample,
            to_sample=to_sample,
        )
