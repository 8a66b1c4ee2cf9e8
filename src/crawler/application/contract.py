CONTRACT_VERSION = "1.0.0"

COMMAND_INTENTS = (
    "update",
    "set_seed",
)

QUERY_INTENTS = (
    "player_stats_view",
    "room_view",
    "move_views",
    "inventory_views",
    "combat_round_view",
)

CONTRACT_DTO_TYPES = (
    "ActionResult",
    "MenuView",
    "MoveView",
    "InventorySlotView",
    "RoomView",
    "PlayerStatsView",
    "CombatRoundView",
)
