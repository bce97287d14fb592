"""Command-line entry point: score a Strava activity against a game profile"""
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from endurance_rpg.config import LOG_LEVEL, load_game_config, validate_config
from endurance_rpg.exceptions import EnduranceRPGError, wrap_external_exception
from endurance_rpg.gamification.profile_store import InMemoryProfileStore
from endurance_rpg.models.activity import ActivityRecord
from endurance_rpg.models.game import ProgressionSnapshot
from endurance_rpg.services.container import init_container
from endurance_rpg.utils.datetime_helpers import parse_iso_timestamp

# Configure logging
logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO)
)

logger = logging.getLogger(__name__)

CLI_USER_ID = "cli"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Award XP for a Strava activity")
    parser.add_argument("activity", type=Path, help="Strava activity JSON file")
    parser.add_argument("--profile", type=Path, help="Stored game profile JSON (omit for a new user)")
    parser.add_argument("--config", help="Game configuration JSON (overrides GAME_CONFIG_PATH)")
    parser.add_argument("--now", help="Processing time as ISO 8601 (defaults to the current time)")
    parser.add_argument("--write", action="store_true", help="Write the updated profile back to --profile")
    return parser


async def run(
    activity_path: Path,
    profile_path: Optional[Path] = None,
    config_path: Optional[str] = None,
    now: Optional[str] = None,
    write: bool = False
) -> dict:
    """Score one activity and return the award and the new profile as JSON-ready data"""
    config = load_game_config(config_path)
    container = init_container(InMemoryProfileStore(), config)
    service = container.progression_service

    try:
        activity = ActivityRecord.from_strava(json.loads(activity_path.read_text()))
        if profile_path and profile_path.exists():
            snapshot = ProgressionSnapshot.model_validate_json(profile_path.read_text())
            await container.store.save_profile(CLI_USER_ID, snapshot)
        processed_at = parse_iso_timestamp(now) if now else None
    except EnduranceRPGError:
        raise
    except Exception as e:
        raise wrap_external_exception(e, operation="read_cli_input", context={"activity": str(activity_path)})

    outcome = await service.process_activity(CLI_USER_ID, activity, now=processed_at)

    if write and profile_path:
        profile_path.write_text(outcome.snapshot.model_dump_json(indent=2))
        logger.info(f"Wrote updated profile to {profile_path}")

    return {
        "award": outcome.award.model_dump(mode="json"),
        "game": outcome.snapshot.model_dump(mode="json"),
        "leveled_up": outcome.leveled_up,
        "tier_changed": outcome.tier_changed,
        "rejected": outcome.rejected,
    }


def main(argv: Optional[list[str]] = None) -> int:
    """Main application entry point"""
    args = build_parser().parse_args(argv)

    try:
        validate_config()
        result = asyncio.run(run(args.activity, args.profile, args.config, args.now, args.write))
    except EnduranceRPGError as e:
        print(json.dumps(e.to_dict()), file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
