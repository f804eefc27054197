from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from dugout.contracts import ActionRequest, ActionType
from dugout.core import GenerationPolicy, make_id, policy_from_config
from dugout.export import ExportService
from dugout.lineup import INNING_COUNT
from dugout.persistence import AnalyticsStore
from dugout.session import LineupSession

logger = logging.getLogger(__name__)


def _apply_roster(session: LineupSession, payload: dict) -> None:
    for name in payload.get("roster", []):
        session.add_player(name)
    for player, positions in payload.get("capabilities", {}).items():
        if not session.set_capabilities(player, positions):
            logger.warning("ignoring capabilities for %r, who is not on the roster", player)
    for player, attending in payload.get("attendance", {}).items():
        if player in session.roster and session.is_attending(player) != bool(attending):
            session.toggle_attendance(player)


def _print_lineup(lineup: dict[str, list[str]]) -> None:
    header = "".join(f"{i + 1:>14}" for i in range(INNING_COUNT))
    print(f"{'':<14}{header}")
    for key in lineup:
        cells = "".join(f"{(name or '-'):>14}" for name in lineup[key])
        print(f"{key:<14}{cells}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Dugout: fair defensive lineups for youth baseball")
    parser.add_argument("--roster", type=Path, required=True, help="JSON file with roster, capabilities and attendance")
    parser.add_argument("--seed", type=int, default=None, help="seed for deterministic lineups")
    parser.add_argument("--attempts", type=int, default=None, help="override the generation attempt cap")
    parser.add_argument("--analytics", action="store_true", help="print fairness analytics")
    parser.add_argument("--share", action="store_true", help="print a share token for the generated state")
    parser.add_argument("--export", type=Path, default=None, help="write analytics tables to this directory")
    parser.add_argument("--verbose", action="store_true", help="enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(asctime)s] %(levelname)s in %(module)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    payload = json.loads(args.roster.read_text(encoding="utf-8"))
    policy = policy_from_config(payload["policy"]) if "policy" in payload else None
    if args.attempts is not None:
        policy = GenerationPolicy(max_attempts=args.attempts)
    session = LineupSession(seed=args.seed, policy=policy)
    _apply_roster(session, payload)

    if not session.all_players_have_capabilities():
        print("Warning: some attending players have no positions selected")

    generated = session.handle_action(ActionRequest(make_id("req"), ActionType.GENERATE_LINEUP, {}))
    print(generated.message)
    if not generated.success:
        raise SystemExit(1)
    _print_lineup(session.generated_lineups)

    validation = session.validate()
    if validation.is_valid:
        print("All league rules satisfied.")
    else:
        print("Rule violations:")
        for error in validation.errors:
            print(f"- {error}")

    if args.analytics:
        summary = session.analytics().summary
        print(
            f"Fairness score: {summary.fairness_score} "
            f"(avg field {summary.average_field_time:.2f}, avg bench {summary.average_bench_time:.2f})"
        )

    if args.share:
        print(session.export_share_token())

    if args.export is not None:
        store = AnalyticsStore(args.export / "analytics.duckdb")
        store.initialize_schema()
        store.write_lineup(make_id("lineup"), session.generated_lineups, session.analytics(), validation.errors)
        print("Exported datasets:")
        for path in ExportService(store.db_path).export_required_datasets(args.export):
            print(f"- {path}")


if __name__ == "__main__":
    main()
