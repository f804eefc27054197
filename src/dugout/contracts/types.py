from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Protocol, Sequence


class Position(str, Enum):
    PITCHER = "Pitcher"
    CATCHER = "Catcher"
    FIRST_BASE = "1st Base"
    SECOND_BASE = "2nd Base"
    THIRD_BASE = "3rd Base"
    SHORTSTOP = "Shortstop"
    LEFT_FIELD = "Left Field"
    CENTER_FIELD = "Center Field"
    RIGHT_FIELD = "Right Field"


class FailureReason(str, Enum):
    INSUFFICIENT_SITTERS = "insufficient_sitters"
    UNFAIR_BENCH_SPREAD = "unfair_bench_spread"
    NO_ELIGIBLE_PLAYER = "no_eligible_player"


class GenerationStatus(str, Enum):
    ATTEMPTING = "attempting"
    SUCCESS = "success"
    BEST_EFFORT = "best_effort"
    FALLBACK = "fallback"


class ActionType(str, Enum):
    ADD_PLAYER = "add_player"
    REMOVE_PLAYER = "remove_player"
    RENAME_PLAYER = "rename_player"
    TOGGLE_CAPABILITY = "toggle_capability"
    TOGGLE_ATTENDANCE = "toggle_attendance"
    RANDOMIZE_BATTING_ORDER = "randomize_batting_order"
    UPDATE_GAME_METADATA = "update_game_metadata"
    GENERATE_LINEUP = "generate_lineup"
    CLEAR_LINEUP = "clear_lineup"
    SWAP_PLAYERS = "swap_players"
    VALIDATE_LINEUP = "validate_lineup"
    GET_ANALYTICS = "get_analytics"
    EXPORT_SHARE_TOKEN = "export_share_token"
    IMPORT_SHARE_TOKEN = "import_share_token"


class RandomSource(Protocol):
    def choice(self, items: Sequence[Any]) -> Any: ...

    def shuffle(self, items: list[Any]) -> None: ...

    def spawn(self, substream_id: str) -> RandomSource: ...


Lineup = dict[str, list[str]]
SittingAssignment = dict[int, list[str]]


@dataclass(slots=True)
class PlayerStats:
    position_counts: dict[str, int]
    infield_innings: int = 0
    bench_innings: int = 0


@dataclass(slots=True)
class LineupValidation:
    is_valid: bool
    errors: list[str] = field(default_factory=list)


@dataclass(slots=True)
class GenerationFailure:
    reason: FailureReason
    message: str
    inning: int | None = None
    position: str | None = None


@dataclass(slots=True)
class SittingPlan:
    assignment: SittingAssignment
    sitting_per_inning: int
    sitting_counts: dict[str, int]


@dataclass(slots=True)
class GameMetadata:
    game_date: str = ""
    game_time: str = ""
    home_team: str = ""
    away_team: str = ""
    is_home_team: bool = True
    field: str = ""


@dataclass(slots=True)
class LineupState:
    roster: list[str]
    player_capabilities: dict[str, list[str]]
    generated_lineups: Lineup
    batting_order: list[str] = field(default_factory=list)
    player_attendance: dict[str, bool] = field(default_factory=dict)
    game_metadata: GameMetadata = field(default_factory=GameMetadata)


@dataclass(slots=True)
class ActionRequest:
    request_id: str
    action_type: ActionType | str
    payload: dict[str, Any]


@dataclass(slots=True)
class ActionResult:
    request_id: str
    success: bool
    message: str
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class ValidationIssue:
    code: str
    severity: str
    field_path: str
    entity_id: str
    message: str


class ValidationError(ValueError):
    def __init__(self, issues: list[ValidationIssue]) -> None:
        message = "; ".join(f"{i.code}:{i.entity_id}:{i.message}" for i in issues)
        super().__init__(message)
        self.issues = issues


@dataclass(slots=True)
class ForensicArtifact:
    artifact_id: str
    timestamp: datetime
    engine_scope: str
    error_code: str
    message: str
    state_snapshot: Mapping[str, Any]
    context: Mapping[str, Any]
    identifiers: Mapping[str, str]
    causal_fragment: Sequence[str]


@dataclass(slots=True)
class LineupEvent:
    event_id: str
    time: datetime
    event_type: str
    players: list[str]
    detail: dict[str, Any] = field(default_factory=dict)
