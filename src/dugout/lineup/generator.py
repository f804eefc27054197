from __future__ import annotations

import copy
import logging
from collections import Counter
from typing import Sequence

from dugout.contracts import GenerationFailure, GenerationStatus, Lineup, RandomSource
from dugout.core.policy import GenerationPolicy, default_generation_policy
from dugout.lineup.models import GenerationOutcome
from dugout.lineup.positions import generate_lineup_with_sitting_assignment, generate_simple_lineup
from dugout.lineup.rules import Capabilities
from dugout.lineup.sitting import generate_fair_sitting_assignment
from dugout.lineup.validation import LineupValidator

logger = logging.getLogger(__name__)


class LineupGenerator:
    """Bounded retry search over random sitting plans and position fills.

    Each attempt draws a bench plan, fills the field around it and validates the
    result. The first fully valid lineup wins; otherwise the candidate with the fewest
    violations is returned, and if no attempt ever produced a complete lineup the
    capability-only fallback is used so a caller always gets something to display.
    Callers should read ``GenerationOutcome.validation`` to learn whether the lineup
    is compliant.
    """

    def __init__(self, random_source: RandomSource, policy: GenerationPolicy | None = None) -> None:
        self._random_source = random_source
        self._policy = policy or default_generation_policy()
        self._policy.validate()

    def generate(self, attending: Sequence[str], capabilities: Capabilities) -> GenerationOutcome:
        players = list(attending)
        validator = LineupValidator(players)
        failures: Counter = Counter()
        best: Lineup | None = None
        best_errors: list[str] = []
        best_score: int | None = None

        for attempt in range(1, self._policy.max_attempts + 1):
            plan = generate_fair_sitting_assignment(players, self._random_source)
            if isinstance(plan, GenerationFailure):
                failures[plan.reason] += 1
                logger.debug("attempt %d: sitting plan rejected: %s", attempt, plan.message)
                continue

            candidate = generate_lineup_with_sitting_assignment(
                plan.assignment, players, capabilities, self._random_source
            )
            if isinstance(candidate, GenerationFailure):
                failures[candidate.reason] += 1
                logger.debug("attempt %d: position fill failed: %s", attempt, candidate.message)
                continue

            validation = validator.validate_lineup(candidate)
            if validation.is_valid:
                logger.info("valid lineup found after %d attempts", attempt)
                return GenerationOutcome(
                    lineup=candidate,
                    validation=validation,
                    status=GenerationStatus.SUCCESS,
                    attempts=attempt,
                    failure_counts=dict(failures),
                )

            score = -len(validation.errors)
            if best_score is None or score > best_score:
                best_score = score
                best = copy.deepcopy(candidate)
                best_errors = list(validation.errors)

        attempts = self._policy.max_attempts
        if best is not None:
            logger.warning(
                "no valid lineup in %d attempts; keeping best candidate with %d violations",
                attempts,
                len(best_errors),
            )
            return GenerationOutcome(
                lineup=best,
                validation=validator.validate_lineup(best),
                status=GenerationStatus.BEST_EFFORT,
                attempts=attempts,
                failure_counts=dict(failures),
            )

        logger.warning("no candidate lineup in %d attempts; using capability-only fallback", attempts)
        fallback = generate_simple_lineup(players, capabilities, self._random_source)
        return GenerationOutcome(
            lineup=fallback,
            validation=validator.validate_lineup(fallback),
            status=GenerationStatus.FALLBACK,
            attempts=attempts,
            failure_counts=dict(failures),
        )
