from .analytics import calculate_analytics, fairness_score
from .generator import LineupGenerator
from .models import AnalyticsData, AnalyticsSummary, GenerationOutcome, PlayerFrequency, PositionFrequency
from .positions import generate_lineup_with_sitting_assignment, generate_simple_lineup
from .rules import (
    INFIELD_POSITIONS,
    INNING_COUNT,
    OUTFIELD_POSITIONS,
    POSITIONS,
    UNFILLED,
    can_assign,
    can_play_position,
    can_play_position_in_inning,
    is_infield_position,
    sitting_key,
    sitting_slots,
)
from .sitting import generate_fair_sitting_assignment
from .stats import calculate_player_stats
from .validation import LineupValidator, validate_consecutive_position_assignments, validate_lineup

__all__ = [
    "AnalyticsData",
    "AnalyticsSummary",
    "GenerationOutcome",
    "INFIELD_POSITIONS",
    "INNING_COUNT",
    "LineupGenerator",
    "LineupValidator",
    "OUTFIELD_POSITIONS",
    "POSITIONS",
    "PlayerFrequency",
    "PositionFrequency",
    "UNFILLED",
    "calculate_analytics",
    "calculate_player_stats",
    "can_assign",
    "can_play_position",
    "can_play_position_in_inning",
    "fairness_score",
    "generate_fair_sitting_assignment",
    "generate_lineup_with_sitting_assignment",
    "generate_simple_lineup",
    "is_infield_position",
    "sitting_key",
    "sitting_slots",
    "validate_consecutive_position_assignments",
    "validate_lineup",
]
