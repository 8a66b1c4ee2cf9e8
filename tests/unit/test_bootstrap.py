import os
import sys
from pathlib import Path
import unittest
from unittest import mock

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from crawler.bootstrap import _is_truthy, create_state_machine
from crawler.domain.models.location import Location
from crawler.domain.models.player import PlayerState
from crawler.infrastructure.inmemory.starter_dungeon import STARTING_LOCATION
from scripted_choices import ScriptedChoiceSource


class BootstrapTests(unittest.TestCase):
    def test_truthy_values(self) -> None:
        for raw in ("1", "true", "YES", " True "):
            self.assertTrue(_is_truthy(raw))
        for raw in ("0", "false", "", "off"):
            self.assertFalse(_is_truthy(raw))
        self.assertFalse(_is_truthy(None))
        self.assertTrue(_is_truthy(None, default="1"))

    def test_fresh_session_starts_in_entrance_hall(self) -> None:
        engine = create_state_machine(ScriptedChoiceSource([]))

        self.assertEqual(Location(*STARTING_LOCATION), engine.player.location)
        self.assertIs(engine.grid.room_at(Location(*STARTING_LOCATION)), engine.player.current_room)
        self.assertEqual(PlayerState.EXPLORING, engine.player.state)
        self.assertEqual([0, 1, 2, 3], [move.id for move in engine.player.moves])
        self.assertFalse(engine.cheats_enabled)

    def test_player_location_is_not_shared_with_room(self) -> None:
        engine = create_state_machine(ScriptedChoiceSource([]))

        self.assertIsNot(engine.player.current_room.location, engine.player.location)

    def test_env_flags_are_read(self) -> None:
        with mock.patch.dict(os.environ, {"CRAWLER_CHEATS_ENABLED": "1", "CRAWLER_DEBUG_MODE": "true"}):
            engine = create_state_machine(ScriptedChoiceSource([]))

        self.assertTrue(engine.cheats_enabled)
        self.assertTrue(engine.debug_mode)
        self.assertTrue(engine.navigation_service.debug_mode)

    def test_seed_makes_sessions_reproducible(self) -> None:
        with mock.patch.dict(os.environ, {"CRAWLER_SEED": "1234"}):
            first = create_state_machine(ScriptedChoiceSource([]))
            second = create_state_machine(ScriptedChoiceSource([]))

        self.assertEqual([first.rng.random() for _ in range(5)], [second.rng.random() for _ in range(5)])
        self.assertIs(first.rng, first.combat_service.rng)

    def test_invalid_seed_is_ignored_with_warning(self) -> None:
        with mock.patch.dict(os.environ, {"CRAWLER_SEED": "not-a-number"}), self.assertLogs(
            "crawler.bootstrap", level="WARNING"
        ):
            engine = create_state_machine(ScriptedChoiceSource([]))

        self.assertIsNotNone(engine.rng)


if __name__ == "__main__":
    unittest.main()
