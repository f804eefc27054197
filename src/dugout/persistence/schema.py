from __future__ import annotations

from typing import Any

from dugout.contracts import GameMetadata, LineupState, ValidationError, ValidationIssue

_METADATA_KEYS = {
    "gameDate": "game_date",
    "gameTime": "game_time",
    "homeTeam": "home_team",
    "awayTeam": "away_team",
    "isHomeTeam": "is_home_team",
    "field": "field",
}


def state_to_payload(state: LineupState) -> dict[str, Any]:
    return {
        "roster": list(state.roster),
        "playerCapabilities": {player: list(caps) for player, caps in state.player_capabilities.items()},
        "generatedLineups": {key: list(row) for key, row in state.generated_lineups.items()},
        "battingOrder": list(state.batting_order),
        "playerAttendance": dict(state.player_attendance),
        "gameMetadata": {wire: getattr(state.game_metadata, attr) for wire, attr in _METADATA_KEYS.items()},
    }


def validate_state_payload(data: Any) -> LineupState:
    """Check a decoded payload's shape and build the in-memory state from it."""
    issues: list[ValidationIssue] = []
    if not isinstance(data, dict):
        raise ValidationError([_issue("INVALID_STATE", "", "state payload must be an object")])

    roster = data.get("roster")
    if not _is_str_list(roster):
        issues.append(_issue("INVALID_ROSTER", "roster", "roster must be a list of strings"))
    elif not roster:
        issues.append(_issue("EMPTY_ROSTER", "roster", "Roster must have at least one player"))

    for key, code in (("playerCapabilities", "INVALID_CAPABILITIES"), ("generatedLineups", "INVALID_LINEUPS")):
        value = data.get(key)
        if not isinstance(value, dict) or not all(isinstance(k, str) and _is_str_list(v) for k, v in value.items()):
            issues.append(_issue(code, key, f"{key} must map strings to lists of strings"))

    batting_order = data.get("battingOrder", [])
    if batting_order is not None and not _is_str_list(batting_order):
        issues.append(_issue("INVALID_BATTING_ORDER", "battingOrder", "battingOrder must be a list of strings"))

    attendance = data.get("playerAttendance", {})
    if attendance is not None and not (
        isinstance(attendance, dict) and all(isinstance(v, bool) for v in attendance.values())
    ):
        issues.append(_issue("INVALID_ATTENDANCE", "playerAttendance", "playerAttendance must map strings to booleans"))

    metadata = data.get("gameMetadata", {})
    if metadata is not None:
        issues.extend(_validate_metadata(metadata))

    if issues:
        raise ValidationError(issues)

    return LineupState(
        roster=list(roster),
        player_capabilities={k: list(v) for k, v in data["playerCapabilities"].items()},
        generated_lineups={k: list(v) for k, v in data["generatedLineups"].items()},
        batting_order=list(batting_order or []),
        player_attendance=dict(attendance or {}),
        game_metadata=_build_metadata(metadata or {}),
    )


def _validate_metadata(metadata: Any) -> list[ValidationIssue]:
    if not isinstance(metadata, dict):
        return [_issue("INVALID_METADATA", "gameMetadata", "gameMetadata must be an object")]
    issues: list[ValidationIssue] = []
    for wire, value in metadata.items():
        if wire not in _METADATA_KEYS:
            continue
        expected = bool if wire == "isHomeTeam" else str
        if not isinstance(value, expected):
            issues.append(
                _issue("INVALID_METADATA_FIELD", f"gameMetadata.{wire}", f"{wire} must be {expected.__name__}")
            )
    return issues


def _build_metadata(metadata: dict[str, Any]) -> GameMetadata:
    values = {_METADATA_KEYS[wire]: value for wire, value in metadata.items() if wire in _METADATA_KEYS}
    return GameMetadata(**values)


def _is_str_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def _issue(code: str, field_path: str, message: str) -> ValidationIssue:
    return ValidationIssue(code=code, severity="blocking", field_path=field_path, entity_id="state", message=message)
