from __future__ import annotations

import copy
import logging
from dataclasses import asdict, fields
from pathlib import Path
from typing import Any, Callable

from dugout.contracts import (
    ActionRequest,
    ActionResult,
    ActionType,
    GameMetadata,
    Lineup,
    LineupState,
    LineupValidation,
    RandomSource,
)
from dugout.core import (
    BATTING_ORDER_STREAM,
    LINEUP_STREAM,
    EventBus,
    GenerationPolicy,
    build_forensic_artifact,
    lineup_event,
    persist_forensic_artifact,
    random_source_for,
)
from dugout.lineup import (
    INNING_COUNT,
    AnalyticsData,
    GenerationOutcome,
    LineupGenerator,
    LineupValidator,
    calculate_analytics,
)
from dugout.persistence import decode_state, encode_state, parse_share_fragment, state_to_payload, validate_state_payload, with_tab

logger = logging.getLogger(__name__)

_METADATA_FIELDS = {f.name for f in fields(GameMetadata)}


class LineupSession:
    """Owns one team's roster, capabilities, attendance and generated lineup.

    Every mutation goes through this object; consumers read back through the query
    methods or :meth:`snapshot`. A session is not safe to share between threads and
    generation calls must not overlap.
    """

    def __init__(
        self,
        seed: int | None = None,
        *,
        random_source: RandomSource | None = None,
        policy: GenerationPolicy | None = None,
        forensic_dir: Path | None = None,
    ) -> None:
        self.rand = random_source or random_source_for(seed)
        self.generator = LineupGenerator(self.rand.spawn(LINEUP_STREAM), policy)
        self._batting_rand = self.rand.spawn(BATTING_ORDER_STREAM)
        self.event_bus = EventBus()
        self.forensic_dir = forensic_dir
        self.last_forensic_path: str | None = None
        self.last_outcome: GenerationOutcome | None = None

        self.roster: list[str] = []
        self.batting_order: list[str] = []
        self.player_capabilities: dict[str, list[str]] = {}
        self.player_attendance: dict[str, bool] = {}
        self.game_metadata = GameMetadata()
        self.generated_lineups: Lineup = {}
        self._initial_state: LineupState | None = None

    # roster

    def add_player(self, name: str) -> bool:
        name = name.strip()
        if not name or name in self.roster:
            return False
        self.roster.append(name)
        self.player_attendance[name] = True
        return True

    def remove_player(self, name: str) -> None:
        if name not in self.roster:
            return
        self.roster.remove(name)
        if name in self.batting_order:
            self.batting_order.remove(name)
        self.player_capabilities.pop(name, None)
        self.player_attendance.pop(name, None)

    def rename_player(self, old_name: str, new_name: str) -> bool:
        new_name = new_name.strip()
        if not new_name or new_name in self.roster or old_name not in self.roster:
            return False
        self.roster[self.roster.index(old_name)] = new_name
        if old_name in self.batting_order:
            self.batting_order[self.batting_order.index(old_name)] = new_name
        if old_name in self.player_capabilities:
            self.player_capabilities[new_name] = self.player_capabilities.pop(old_name)
        if old_name in self.player_attendance:
            self.player_attendance[new_name] = self.player_attendance.pop(old_name)
        return True

    # capabilities

    def toggle_capability(self, player: str, position: str) -> None:
        capabilities = self.player_capabilities.setdefault(player, [])
        if position in capabilities:
            capabilities.remove(position)
        else:
            capabilities.append(position)

    def set_capabilities(self, player: str, positions: list[str]) -> bool:
        if player not in self.roster:
            return False
        self.player_capabilities[player] = list(dict.fromkeys(positions))
        return True

    def can_play_position(self, player: str, position: str) -> bool:
        return position in self.player_capabilities.get(player, [])

    def all_players_have_capabilities(self) -> bool:
        return all(self.player_capabilities.get(player) for player in self.attending_players())

    # attendance and batting order

    def is_attending(self, player: str) -> bool:
        return self.player_attendance.get(player) is not False

    def attending_players(self) -> list[str]:
        return [p for p in self.roster if self.is_attending(p)]

    def non_attending_players(self) -> list[str]:
        return [p for p in self.roster if not self.is_attending(p)]

    def toggle_attendance(self, player: str) -> None:
        self.player_attendance[player] = not self.is_attending(player)
        self.clear_lineup()

    def randomize_batting_order(self) -> None:
        shuffled = list(self.roster)
        self._batting_rand.shuffle(shuffled)
        self.batting_order = shuffled
        for player in self.roster:
            self.player_attendance.setdefault(player, True)

    def sorted_batting_order_for_display(self) -> list[str]:
        attending = [p for p in self.batting_order if self.is_attending(p)]
        absent = [p for p in self.batting_order if not self.is_attending(p)]
        return attending + absent

    def update_game_metadata(self, **changes: Any) -> None:
        unknown = set(changes) - _METADATA_FIELDS
        if unknown:
            raise ValueError(f"unknown game metadata fields: {sorted(unknown)}")
        for name, value in changes.items():
            expected = bool if name == "is_home_team" else str
            if value is not None and not isinstance(value, expected):
                raise ValueError(f"game metadata field {name} must be {expected.__name__}")
        for name, value in changes.items():
            if value is not None:
                setattr(self.game_metadata, name, value)

    # lineup

    def generate_lineup(self) -> GenerationOutcome:
        outcome = self.generator.generate(self.attending_players(), self.player_capabilities)
        self.generated_lineups = copy.deepcopy(outcome.lineup)
        self.last_outcome = outcome
        self._publish(
            "lineup_generated",
            self.attending_players(),
            {"status": outcome.status.value, "attempts": outcome.attempts, "errors": len(outcome.validation.errors)},
        )
        return outcome

    def clear_lineup(self) -> None:
        had_lineup = bool(self.generated_lineups)
        self.generated_lineups = {}
        if had_lineup:
            self._publish("lineup_cleared", [], {})

    def validate(self) -> LineupValidation:
        return LineupValidator(self.attending_players()).validate_lineup(self.generated_lineups)

    def analytics(self) -> AnalyticsData:
        return calculate_analytics(self.generated_lineups, self.attending_players(), self.non_attending_players())

    def swap_players_in_inning(self, inning: int, player1: str, player2: str) -> bool:
        if not 0 <= inning < INNING_COUNT or player1 == player2:
            logger.warning("rejected swap of %r and %r in inning %s", player1, player2, inning)
            return False
        slot1 = self._slot_for(inning, player1)
        slot2 = self._slot_for(inning, player2)
        if slot1 is None or slot2 is None:
            logger.warning("swap skipped: %r or %r not found in inning %d", player1, player2, inning + 1)
            return False
        self.generated_lineups[slot1][inning] = player2
        self.generated_lineups[slot2][inning] = player1
        self._publish("players_swapped", [player1, player2], {"inning": inning})
        return True

    # state snapshots

    def snapshot(self) -> LineupState:
        return LineupState(
            roster=list(self.roster),
            player_capabilities=copy.deepcopy(self.player_capabilities),
            generated_lineups=copy.deepcopy(self.generated_lineups),
            batting_order=list(self.batting_order),
            player_attendance=dict(self.player_attendance),
            game_metadata=GameMetadata(**asdict(self.game_metadata)),
        )

    def load_state(self, state: LineupState) -> None:
        restored = copy.deepcopy(state)
        self.roster = restored.roster
        self.player_capabilities = restored.player_capabilities
        self.generated_lineups = restored.generated_lineups
        self.batting_order = restored.batting_order
        self.player_attendance = restored.player_attendance
        self.game_metadata = restored.game_metadata

    @classmethod
    def from_snapshot(cls, state: LineupState, seed: int | None = None) -> LineupSession:
        session = cls(seed=seed)
        session.load_state(state)
        session.save_initial_state()
        return session

    def save_initial_state(self) -> None:
        self._initial_state = self.snapshot()

    def has_state_changed(self) -> bool:
        if self._initial_state is None:
            return False
        return self.snapshot() != self._initial_state

    def reset_to_initial_state(self) -> None:
        if self._initial_state is None:
            return
        self.load_state(self._initial_state)

    def export_share_token(self, tab: str | None = None) -> str:
        payload = state_to_payload(self.snapshot())
        # only emit tokens that import_share_token will accept
        validate_state_payload(payload)
        token = encode_state(payload)
        return with_tab(token, tab) if tab else token

    def import_share_token(self, token: str) -> str | None:
        """Replace the session state with the token's; returns the tab named in the token, if any."""
        _fragment, tab = parse_share_fragment(token)
        state = validate_state_payload(decode_state(token))
        self.load_state(state)
        self.save_initial_state()
        return tab

    # action dispatch

    def handle_action(self, request: ActionRequest) -> ActionResult:
        try:
            return self._handle_action_core(request)
        except ValueError as exc:
            return ActionResult(request.request_id, False, str(exc))
        except Exception as exc:
            logger.exception("session action %s failed", request.action_type)
            artifact = build_forensic_artifact(
                "UNHANDLED_SESSION_EXCEPTION",
                str(exc),
                state_snapshot={"roster_size": len(self.roster), "attending": len(self.attending_players())},
                context={"action_type": str(request.action_type), "payload": request.payload},
                identifiers={"request_id": request.request_id},
                causal_fragment=["session_dispatch"],
            )
            data: dict[str, Any] = {"error_code": artifact.error_code}
            if self.forensic_dir is not None:
                self.last_forensic_path = str(persist_forensic_artifact(artifact, self.forensic_dir))
                data["forensic_path"] = self.last_forensic_path
            return ActionResult(request.request_id, False, f"session action failed: {exc}", data)

    def _handle_action_core(self, request: ActionRequest) -> ActionResult:
        try:
            action = ActionType(request.action_type)
        except ValueError:
            return ActionResult(request.request_id, False, f"unsupported action '{request.action_type}'")

        handler = self._handlers().get(action)
        if handler is None:
            return ActionResult(request.request_id, False, f"unsupported action '{action.value}'")
        payload = request.payload
        missing = sorted(_REQUIRED_FIELDS.get(action, set()) - set(payload))
        if missing:
            return ActionResult(request.request_id, False, f"missing {action.value} fields: {', '.join(missing)}")
        return handler(request)

    def _handlers(self) -> dict[ActionType, Callable[[ActionRequest], ActionResult]]:
        return {
            ActionType.ADD_PLAYER: self._action_add_player,
            ActionType.REMOVE_PLAYER: self._action_remove_player,
            ActionType.RENAME_PLAYER: self._action_rename_player,
            ActionType.TOGGLE_CAPABILITY: self._action_toggle_capability,
            ActionType.TOGGLE_ATTENDANCE: self._action_toggle_attendance,
            ActionType.RANDOMIZE_BATTING_ORDER: self._action_randomize_batting_order,
            ActionType.UPDATE_GAME_METADATA: self._action_update_game_metadata,
            ActionType.GENERATE_LINEUP: self._action_generate_lineup,
            ActionType.CLEAR_LINEUP: self._action_clear_lineup,
            ActionType.SWAP_PLAYERS: self._action_swap_players,
            ActionType.VALIDATE_LINEUP: self._action_validate_lineup,
            ActionType.GET_ANALYTICS: self._action_get_analytics,
            ActionType.EXPORT_SHARE_TOKEN: self._action_export_share_token,
            ActionType.IMPORT_SHARE_TOKEN: self._action_import_share_token,
        }

    def _action_add_player(self, request: ActionRequest) -> ActionResult:
        name = str(request.payload["name"])
        if not self.add_player(name):
            return ActionResult(request.request_id, False, f"cannot add player '{name}'")
        return ActionResult(request.request_id, True, f"added {name.strip()}", {"roster": list(self.roster)})

    def _action_remove_player(self, request: ActionRequest) -> ActionResult:
        name = str(request.payload["name"])
        if name not in self.roster:
            return ActionResult(request.request_id, False, f"unknown player '{name}'")
        self.remove_player(name)
        return ActionResult(request.request_id, True, f"removed {name}", {"roster": list(self.roster)})

    def _action_rename_player(self, request: ActionRequest) -> ActionResult:
        old, new = str(request.payload["old_name"]), str(request.payload["new_name"])
        if not self.rename_player(old, new):
            return ActionResult(request.request_id, False, f"cannot rename '{old}' to '{new}'")
        return ActionResult(request.request_id, True, f"renamed {old} to {new.strip()}", {"roster": list(self.roster)})

    def _action_toggle_capability(self, request: ActionRequest) -> ActionResult:
        player, position = str(request.payload["player"]), str(request.payload["position"])
        if player not in self.roster:
            return ActionResult(request.request_id, False, f"unknown player '{player}'")
        self.toggle_capability(player, position)
        return ActionResult(
            request.request_id,
            True,
            f"{player} capabilities updated",
            {"capabilities": list(self.player_capabilities.get(player, []))},
        )

    def _action_toggle_attendance(self, request: ActionRequest) -> ActionResult:
        player = str(request.payload["player"])
        if player not in self.roster:
            return ActionResult(request.request_id, False, f"unknown player '{player}'")
        self.toggle_attendance(player)
        return ActionResult(request.request_id, True, f"{player} attendance updated", {"attending": self.is_attending(player)})

    def _action_randomize_batting_order(self, request: ActionRequest) -> ActionResult:
        self.randomize_batting_order()
        return ActionResult(request.request_id, True, "batting order randomized", {"batting_order": list(self.batting_order)})

    def _action_update_game_metadata(self, request: ActionRequest) -> ActionResult:
        self.update_game_metadata(**request.payload)
        return ActionResult(request.request_id, True, "game metadata updated", {"game_metadata": asdict(self.game_metadata)})

    def _action_generate_lineup(self, request: ActionRequest) -> ActionResult:
        if not self.attending_players():
            return ActionResult(request.request_id, False, "no attending players")
        outcome = self.generate_lineup()
        return ActionResult(
            request.request_id,
            True,
            f"lineup generated ({outcome.status.value} after {outcome.attempts} attempts)",
            {
                "lineup": copy.deepcopy(outcome.lineup),
                "is_valid": outcome.is_valid,
                "errors": list(outcome.validation.errors),
                "status": outcome.status.value,
                "capabilities_complete": self.all_players_have_capabilities(),
            },
        )

    def _action_clear_lineup(self, request: ActionRequest) -> ActionResult:
        self.clear_lineup()
        return ActionResult(request.request_id, True, "lineup cleared")

    def _action_swap_players(self, request: ActionRequest) -> ActionResult:
        payload = request.payload
        swapped = self.swap_players_in_inning(int(payload["inning"]), str(payload["player1"]), str(payload["player2"]))
        if not swapped:
            return ActionResult(request.request_id, False, "players could not be swapped")
        return ActionResult(request.request_id, True, "players swapped", {"validation": asdict(self.validate())})

    def _action_validate_lineup(self, request: ActionRequest) -> ActionResult:
        validation = self.validate()
        message = "lineup is valid" if validation.is_valid else f"{len(validation.errors)} rule violations"
        return ActionResult(request.request_id, True, message, asdict(validation))

    def _action_get_analytics(self, request: ActionRequest) -> ActionResult:
        return ActionResult(request.request_id, True, "analytics computed", asdict(self.analytics()))

    def _action_export_share_token(self, request: ActionRequest) -> ActionResult:
        tab = request.payload.get("tab")
        token = self.export_share_token(str(tab) if tab else None)
        return ActionResult(request.request_id, True, "share token exported", {"token": token})

    def _action_import_share_token(self, request: ActionRequest) -> ActionResult:
        tab = self.import_share_token(str(request.payload["token"]))
        return ActionResult(request.request_id, True, "share token imported", {"tab": tab, "roster": list(self.roster)})

    def _slot_for(self, inning: int, player: str) -> str | None:
        for slot, row in self.generated_lineups.items():
            if inning < len(row) and row[inning] == player:
                return slot
        return None

    def _publish(self, event_type: str, players: list[str], detail: dict[str, Any]) -> None:
        self.event_bus.publish(lineup_event(event_type, players, **detail))


_REQUIRED_FIELDS: dict[ActionType, set[str]] = {
    ActionType.ADD_PLAYER: {"name"},
    ActionType.REMOVE_PLAYER: {"name"},
    ActionType.RENAME_PLAYER: {"old_name", "new_name"},
    ActionType.TOGGLE_CAPABILITY: {"player", "position"},
    ActionType.TOGGLE_ATTENDANCE: {"player"},
    ActionType.SWAP_PLAYERS: {"inning", "player1", "player2"},
    ActionType.IMPORT_SHARE_TOKEN: {"token"},
}
