import logging
import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from crawler.application.services.event_bus import EventBus
from crawler.application.services.turn_log import register_turn_log_handlers
from crawler.domain.events import ChestsLooted, EnemyDefeated, PlayerDefeated, RoomEntered


class TurnLogTests(unittest.TestCase):
    def test_events_are_recorded_in_publish_order(self) -> None:
        bus = EventBus()
        service = register_turn_log_handlers(bus)

        bus.publish(RoomEntered(room_id=1, x=1, y=0))
        bus.publish(ChestsLooted(room_id=1, count=2))

        self.assertEqual(["RoomEntered", "ChestsLooted"], [name for name, _ in service.entries])
        self.assertEqual({"room_id": 1, "count": 2}, service.entries[1][1])

    def test_milestones_are_logged_at_info(self) -> None:
        bus = EventBus()
        register_turn_log_handlers(bus, logger=logging.getLogger("crawler.turns.test"))

        with self.assertLogs("crawler.turns.test", level="INFO") as captured:
            bus.publish(EnemyDefeated(enemy_type="rat", room_id=1, turn=2))
            bus.publish(PlayerDefeated(room_id=1, enemy_type="troll", turn=5))

        self.assertEqual(2, len(captured.records))
        self.assertTrue(all(record.levelno == logging.INFO for record in captured.records))

    def test_routine_events_are_logged_at_debug(self) -> None:
        bus = EventBus()
        register_turn_log_handlers(bus)

        with self.assertLogs("crawler.turns", level="DEBUG") as captured:
            bus.publish(RoomEntered(room_id=3, x=0, y=1, fled=True))

        self.assertEqual(logging.DEBUG, captured.records[0].levelno)
        self.assertIn("fled", captured.records[0].getMessage())

    def test_turn_log_runs_after_default_priority_handlers(self) -> None:
        bus = EventBus()
        order: list[str] = []
        service = register_turn_log_handlers(bus)
        bus.subscribe(RoomEntered, lambda evt: order.append(f"handler:{len(service.entries)}"))

        bus.publish(RoomEntered(room_id=1, x=1, y=0))

        self.assertEqual(["handler:0"], order)
        self.assertEqual(1, len(service.entries))


if __name__ == "__main__":
    unittest.main()
