from __future__ import annotations

import json
from dataclasses import asdict
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Mapping, Sequence
from uuid import uuid4

from dugout.contracts import ForensicArtifact


class StateCodecError(ValueError):
    """Raised when a share token cannot be produced or read back."""


def build_forensic_artifact(
    error_code: str,
    message: str,
    *,
    state_snapshot: Mapping[str, Any],
    context: Mapping[str, Any],
    identifiers: Mapping[str, str],
    causal_fragment: Sequence[str],
    engine_scope: str = "session",
) -> ForensicArtifact:
    return ForensicArtifact(
        artifact_id=uuid4().hex,
        timestamp=datetime.now(UTC),
        engine_scope=engine_scope,
        error_code=error_code,
        message=message,
        state_snapshot=dict(state_snapshot),
        context=dict(context),
        identifiers=dict(identifiers),
        causal_fragment=list(causal_fragment),
    )


def persist_forensic_artifact(artifact: ForensicArtifact, output_dir: Path) -> Path:
    """Write the artifact as ``<scope>_<error code>_<id>.json`` and return the path."""
    output_dir.mkdir(parents=True, exist_ok=True)
    name = f"{artifact.engine_scope}_{artifact.error_code.lower()}_{artifact.artifact_id[:12]}.json"
    path = output_dir / name
    path.write_text(json.dumps(asdict(artifact), default=str, indent=2, sort_keys=True), encoding="utf-8")
    return path
