from __future__ import annotations

from dataclasses import dataclass, field

from dugout.contracts import FailureReason, GenerationStatus, Lineup, LineupValidation


@dataclass(slots=True)
class GenerationOutcome:
    lineup: Lineup
    validation: LineupValidation
    status: GenerationStatus
    attempts: int
    failure_counts: dict[FailureReason, int] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return self.validation.is_valid


@dataclass(slots=True)
class PlayerFrequency:
    player: str
    total_innings: int = 0
    field_innings: int = 0
    infield_innings: int = 0
    outfield_innings: int = 0
    bench_innings: int = 0
    position_breakdown: dict[str, int] = field(default_factory=dict)


@dataclass(slots=True)
class PositionFrequency:
    position: str
    total_assignments: int = 0
    player_breakdown: dict[str, int] = field(default_factory=dict)

    @property
    def distinct_players(self) -> int:
        return len(self.player_breakdown)


@dataclass(slots=True)
class AnalyticsSummary:
    total_players: int
    total_innings: int
    average_field_time: float
    average_bench_time: float
    fairness_score: int


@dataclass(slots=True)
class AnalyticsData:
    player_frequencies: list[PlayerFrequency]
    position_frequencies: list[PositionFrequency]
    summary: AnalyticsSummary
