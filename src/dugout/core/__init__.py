from .errors import StateCodecError, build_forensic_artifact, persist_forensic_artifact
from .events import EventBus, lineup_event, make_id
from .policy import GenerationPolicy, default_generation_policy, policy_from_config
from .randomness import BATTING_ORDER_STREAM, LINEUP_STREAM, LineupRandom, derive_seed, random_source_for, seeded_random

__all__ = [
    "BATTING_ORDER_STREAM",
    "EventBus",
    "GenerationPolicy",
    "LINEUP_STREAM",
    "LineupRandom",
    "StateCodecError",
    "build_forensic_artifact",
    "default_generation_policy",
    "derive_seed",
    "lineup_event",
    "make_id",
    "persist_forensic_artifact",
    "policy_from_config",
    "random_source_for",
    "seeded_random",
]
