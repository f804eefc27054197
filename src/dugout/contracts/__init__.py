from .types import (
    ActionRequest,
    ActionResult,
    ActionType,
    FailureReason,
    ForensicArtifact,
    GameMetadata,
    GenerationFailure,
    GenerationStatus,
    Lineup,
    LineupEvent,
    LineupState,
    LineupValidation,
    PlayerStats,
    Position,
    RandomSource,
    SittingAssignment,
    SittingPlan,
    ValidationError,
    ValidationIssue,
)

__all__ = [
    "ActionRequest",
    "ActionResult",
    "ActionType",
    "FailureReason",
    "ForensicArtifact",
    "GameMetadata",
    "GenerationFailure",
    "GenerationStatus",
    "Lineup",
    "LineupEvent",
    "LineupState",
    "LineupValidation",
    "PlayerStats",
    "Position",
    "RandomSource",
    "SittingAssignment",
    "SittingPlan",
    "ValidationError",
    "ValidationIssue",
]
