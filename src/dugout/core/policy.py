from __future__ import annotations

from dataclasses import dataclass

DEFAULT_MAX_ATTEMPTS = 1000


@dataclass(slots=True)
class GenerationPolicy:
    max_attempts: int = DEFAULT_MAX_ATTEMPTS

    def validate(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")


def default_generation_policy() -> GenerationPolicy:
    return GenerationPolicy()


def policy_from_config(config: dict[str, object]) -> GenerationPolicy:
    unknown = set(config) - {"max_attempts"}
    if unknown:
        raise ValueError(f"unknown generation policy keys: {sorted(unknown)}")
    policy = GenerationPolicy(max_attempts=int(config.get("max_attempts", DEFAULT_MAX_ATTEMPTS)))  # type: ignore[arg-type]
    policy.validate()
    return policy
