"""
Team Stats CLI.

Uses the team store, RankingCacheService and TeamService over an explicitly
constructed database manager and Redis client.
"""

import argparse
import json
import sys
from dataclasses import dataclass

from dotenv import load_dotenv
from pydantic import ValidationError
from structlog.contextvars import bound_contextvars

from teamstats.cache import RedisCache
from teamstats.cli.formatters import format_output
from teamstats.config import get_settings
from teamstats.constants import (
    ACTION_CLEAR_CACHE,
    ACTION_PLAY_GAMES,
    ACTION_REBUILD_DB,
    ACTION_TYPES,
    RESULT_FROM_DB,
    RESULT_LIST,
    RESULT_SORTED_SET,
    RESULT_TOP,
    RESULT_TYPES,
)
from teamstats.db import DatabaseManager
from teamstats.exceptions import StoreUnavailable, TeamStatsError
from teamstats.logging import configure_logging, get_logger, timed
from teamstats.repositories import TeamRepository
from teamstats.schemas import TeamCreate, TeamUpdate
from teamstats.services import RankingCacheService, TeamService

load_dotenv()

logger = get_logger("cli")


@dataclass
class CLIContext:
    db: DatabaseManager
    cache: RedisCache
    ranking: RankingCacheService
    teams: TeamService


def build_context() -> CLIContext:
    """
    Construct the database, Redis client and services for one CLI run.

    Nothing here connects to the database or Redis; both connect on first use.
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    db = DatabaseManager(settings)
    db.initialize()

    cache = RedisCache(settings)
    ranking = RankingCacheService(cache, db, settings)
    return CLIContext(db=db, cache=cache, ranking=ranking, teams=TeamService(db, ranking))


def _run_action(ctx: CLIContext, action: str, messages: list[str]) -> None:
    if action == ACTION_PLAY_GAMES:
        messages.append("Updating team statistics.")
        ctx.teams.play_season()
    elif action == ACTION_CLEAR_CACHE:
        ctx.teams.clear_cache()
    elif action == ACTION_REBUILD_DB:
        messages.append("Rebuilding DB.")
        ctx.teams.rebuild()
    messages.append("Team data removed from cache.")


def _read_teams(ctx: CLIContext, result_type: str, messages: list[str]):
    ranking = ctx.ranking
    misses_before = ranking.stats.misses

    if result_type == RESULT_LIST:
        teams = ranking.fetch_as_list()
        if ranking.stats.misses > misses_before:
            messages.append("Teams list cache miss. Storing results to cache.")
        else:
            messages.append("List read from cache.")
    elif result_type == RESULT_SORTED_SET:
        teams = ranking.fetch_as_sorted_set()
        if ranking.stats.misses > misses_before:
            messages.append("Teams sorted set cache miss. Storing results to cache.")
        else:
            messages.append("Reading sorted set from cache.")
    elif result_type == RESULT_TOP:
        teams = ranking.fetch_top()
        if ranking.stats.misses > misses_before:
            messages.append("Teams sorted set cache miss. Storing results to cache.")
        messages.append(f"Retrieving top {ranking.settings.top_teams_limit} teams from cache.")
    else:
        teams = ranking.fetch_from_store()
        messages.append("Results read from DB.")
    return teams


def cmd_teams(ctx: CLIContext, args) -> int:
    """Run an optional action, then list teams through the chosen read path."""
    messages: list[str] = []

    with bound_contextvars(command="teams", result_type=args.result):
        if args.action:
            _run_action(ctx, args.action, messages)

        with timed(f"read_{args.result}", logger) as timing:
            teams = _read_teams(ctx, args.result, messages)

    message = " ".join(messages)
    if args.format == "json":
        print(
            format_output(teams, "json", message=message, elapsed_ms=round(timing.elapsed_ms, 3))
        )
    else:
        print(format_output(teams, args.format, verbose=args.verbose))
        print(f"{message} MS: {timing.elapsed_ms:.3f}")
    return 0


def cmd_details(ctx: CLIContext, args) -> int:
    team = ctx.teams.get_team(args.id)
    print(format_output([team], "table"))
    return 0


def cmd_create(ctx: CLIContext, args) -> int:
    data = TeamCreate(name=args.name, wins=args.wins, losses=args.losses, ties=args.ties)
    team = ctx.teams.create_team(data)
    print(f"Created team {team.id}: {team.name}")
    return 0


def cmd_edit(ctx: CLIContext, args) -> int:
    changes = TeamUpdate(name=args.name, wins=args.wins, losses=args.losses, ties=args.ties)
    team = ctx.teams.edit_team(args.id, changes)
    print(f"Updated team {team.id}: {team.name} ({team.wins}-{team.losses}-{team.ties})")
    return 0


def cmd_delete(ctx: CLIContext, args) -> int:
    ctx.teams.delete_team(args.id)
    print(f"Deleted team {args.id}")
    return 0


def cmd_status(ctx: CLIContext, args) -> int:
    """Report database and cache health; runs even when the database is unreachable."""
    errors, warnings = ctx.ranking.settings.validate_production_config()
    database = ctx.db.health_check()
    if database["healthy"]:
        try:
            with ctx.db.session() as session:
                database["teams"] = TeamRepository(session).count()
        except StoreUnavailable:
            # Reachable but not yet created
            database["teams"] = None

    status = {
        "database": database,
        "cache": ctx.cache.health_check(),
        "config": {"errors": errors, "warnings": warnings},
    }
    print(json.dumps(status, indent=2))
    healthy = database["healthy"] and status["cache"]["status"] == "healthy"
    return 0 if healthy else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Team Stats - team standings with a Redis ranking cache"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Teams command
    teams_parser = subparsers.add_parser("teams", help="List teams by wins")
    teams_parser.add_argument("--action", choices=ACTION_TYPES, help="Run an action first")
    teams_parser.add_argument(
        "--result", choices=RESULT_TYPES, default=RESULT_FROM_DB, help="Where to read teams from"
    )
    teams_parser.add_argument("--format", choices=["text", "table", "json"], default="table")
    teams_parser.add_argument(
        "-v", "--verbose", action="store_true", help="Include team IDs in text output"
    )

    # Details command
    details_parser = subparsers.add_parser("details", help="Show one team")
    details_parser.add_argument("id", type=int, help="Team ID")

    # Create command
    create_parser = subparsers.add_parser("create", help="Create a team")
    create_parser.add_argument("--name", required=True, help="Team name")
    create_parser.add_argument("--wins", type=int, default=0)
    create_parser.add_argument("--losses", type=int, default=0)
    create_parser.add_argument("--ties", type=int, default=0)

    # Edit command
    edit_parser = subparsers.add_parser("edit", help="Edit a team")
    edit_parser.add_argument("id", type=int, help="Team ID")
    edit_parser.add_argument("--name", help="New team name")
    edit_parser.add_argument("--wins", type=int)
    edit_parser.add_argument("--losses", type=int)
    edit_parser.add_argument("--ties", type=int)

    # Delete command
    delete_parser = subparsers.add_parser("delete", help="Delete a team")
    delete_parser.add_argument("id", type=int, help="Team ID")

    # Status command
    subparsers.add_parser("status", help="Show database and cache health")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point with CLI interface."""
    parser = build_parser()
    args = parser.parse_args(argv)

    commands = {
        "teams": cmd_teams,
        "details": cmd_details,
        "create": cmd_create,
        "edit": cmd_edit,
        "delete": cmd_delete,
        "status": cmd_status,
    }

    if args.command not in commands:
        parser.print_help()
        return 2

    ctx = None
    try:
        ctx = build_context()
        if args.command != "status":
            ctx.db.create_all_tables()
        return commands[args.command](ctx, args)
    except ValidationError as e:
        logger.warning("invalid_input", command=args.command, errors=e.error_count())
        print(f"Error: invalid team data\n{e}")
        return 1
    except TeamStatsError as e:
        logger.error("command_failed", command=args.command, error=str(e))
        print(f"Error: {e}")
        return 1
    finally:
        if ctx is not None:
            ctx.db.reset()


if __name__ == "__main__":
    sys.exit(main())
