from __future__ import annotations

from src.engine.models import Action, GameConfig, Phase, Player, PlayerId
from src.engine.protocol import GamePlugin


def validate_plugin(plugin: GamePlugin) -> list[str]:
    """Run sanity checks on a plugin. Returns list of errors (empty = OK)."""
    errors: list[str] = []

    for attr in ("game_id", "display_name", "min_players", "max_players"):
        if not hasattr(plugin, attr):
            errors.append(f"Missing attribute: {attr}")

    if errors:
        return errors  # Can't proceed without metadata

    try:
        players = [
            Player(
                player_id=PlayerId(f"test-{i}"),
                display_name=f"Test {i}",
                seat_index=i,
            )
            for i in range(plugin.min_players)
        ]
        config = GameConfig()
        game_data, phase, _events = plugin.create_initial_state(players, config)

        if not isinstance(game_data, dict):
            errors.append("create_initial_state must return dict as game_data")

        if not isinstance(phase, Phase):
            errors.append("create_initial_state must return Phase as second element")
            return errors

        if not phase.expected_actions:
            errors.append("First phase expects no action")

        # Every enumerated action must pass the plugin's own validation
        for p in players:
            valid = plugin.get_valid_actions(game_data, phase, p.player_id)
            if valid:
                action = Action(
                    action_type=phase.name,
                    player_id=p.player_id,
                    payload=valid[0],
                )
                error = plugin.validate_action(game_data, phase, action)
                if error is not None:
                    errors.append(f"Enumerated action rejected by validate_action: {error}")

        for p in players:
            plugin.get_player_view(game_data, phase, p.player_id, players)

        game_data2, _phase2, _events2 = plugin.create_initial_state(players, config)
        if game_data != game_data2:
            errors.append("create_initial_state is not deterministic")

    except Exception as e:
        errors.append(f"create_initial_state failed: {e}")

    return errors
