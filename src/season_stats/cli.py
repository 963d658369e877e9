#!/usr/bin/env python3
"""
Command-line interface for team season stats.

Usage:
    season-stats players --sort reb          # Player season averages
    season-stats last-game                   # Box score of the latest finished game
    season-stats record                      # Record, upcoming games, recent results
    season-stats team                        # Team season averages
    season-stats snapshot                    # Full snapshot as JSON
    season-stats team --team-id 2 --season 2024 --api-key KEY
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Optional, Sequence

from .aggregators.derived import sort_players
from .core.config import Settings, get_settings
from .core.http import MissingCredentialError
from .core.models import SeasonSnapshot, TeamRef
from .core.types import ShootingSplit
from .providers.balldontlie import BallDontLieNBA
from .services.pipeline import SeasonPipeline

logger = logging.getLogger("season_stats.cli")

SORT_KEYS = ("games_played", "pts", "reb", "ast", "stl", "blk", "fg_pct", "fg3_pct", "ft_pct")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


# =============================================================================
# Formatting
# =============================================================================


def fmt_num(value: Optional[float]) -> str:
    return "-" if value is None else f"{value:.1f}"


def fmt_pct(value: Optional[float], decimals: int = 1) -> str:
    return "-" if value is None else f"{value * 100:.{decimals}f}%"


def fmt_date(value) -> str:
    return f"{value:%b} {value.day}, {value.year}"


def team_label(team: TeamRef, *, full: bool = False) -> str:
    """Abbreviation (or full name) of a team, falling back to the other, then "-"."""
    names = (team.full_name, team.abbreviation) if full else (team.abbreviation, team.full_name)
    return next((name for name in names if name), "-")


def render_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    widths = [len(h) for h in headers]
    for row in rows:
        widths = [max(w, len(cell)) for w, cell in zip(widths, row)]
    lines = ["  ".join(h.ljust(w) for h, w in zip(headers, widths))]
    lines.append("  ".join("-" * w for w in widths))
    for row in rows:
        lines.append("  ".join(cell.ljust(w) for cell, w in zip(row, widths)))
    return "\n".join(lines)


def format_players(snapshot: SeasonSnapshot, sort_key: str = "pts") -> str:
    if not snapshot.players:
        return "No player data found."

    rows = []
    for p in sort_players(snapshot.players, sort_key):
        name = p.player.full_name
        if p.player.position:
            name = f"{name} ({p.player.position})"
        rows.append([
            name,
            str(p.games_played),
            fmt_num(p.pts),
            fmt_num(p.reb),
            fmt_num(p.ast),
            fmt_num(p.stl),
            fmt_num(p.blk),
            fmt_pct(p.shooting_pct(ShootingSplit.FG)),
            fmt_pct(p.shooting_pct(ShootingSplit.FG3)),
            fmt_pct(p.shooting_pct(ShootingSplit.FT)),
        ])
    table = render_table(
        ["Player", "GP", "PTS", "REB", "AST", "STL", "BLK", "FG%", "3P%", "FT%"], rows
    )
    return f"{table}\n\n{len(snapshot.players)} players, sorted by {sort_key}"


def format_last_game(snapshot: SeasonSnapshot) -> str:
    last = snapshot.last_game
    if last is None:
        return "No finished games yet."

    game = last.game
    label = (
        f"{team_label(game.visitor_team)} {game.visitor_team_score} @ "
        f"{team_label(game.home_team)} {game.home_team_score}, {fmt_date(game.date)}"
        f"  {'WIN' if last.won else 'LOSS'}"
    )
    if not last.rows:
        return f"{label}\n\nNo player stats for last game."

    rows = [
        [
            r.player.full_name,
            r.min,
            str(r.pts),
            str(r.reb),
            str(r.ast),
            str(r.stl),
            str(r.blk),
            f"{r.fgm}-{r.fga}",
            f"{r.fg3m}-{r.fg3a}",
            f"{r.ftm}-{r.fta}",
            str(r.turnover),
        ]
        for r in last.rows
    ]
    table = render_table(
        ["Player", "MIN", "PTS", "REB", "AST", "STL", "BLK", "FGM-FGA", "3PM-3PA", "FTM-FTA", "TO"],
        rows,
    )
    return f"{label}\n\n{table}"


def format_record(snapshot: SeasonSnapshot) -> str:
    summary = snapshot.summary
    lines = [
        f"Wins: {summary.wins}",
        f"Losses: {summary.losses}",
        f"Win %: {fmt_pct(summary.win_pct, decimals=0)}",
    ]
    if snapshot.conference_rank is not None:
        lines.append(f"Conference rank: #{snapshot.conference_rank}")

    lines.extend(["", "Upcoming games:"])
    if not snapshot.upcoming_games:
        lines.append("  No upcoming games found.")
    for g in snapshot.upcoming_games:
        where = "HOME" if g.home else "AWAY"
        lines.append(f"  {fmt_date(g.date)}  {'vs' if g.home else '@'} {team_label(g.opponent, full=True)}  {where}")

    lines.extend(["", "Recent results:"])
    if not snapshot.recent_results:
        lines.append("  No finished games yet.")
    for r in snapshot.recent_results:
        lines.append(
            f"  {fmt_date(r.date)}  {'vs' if r.home else '@'} {team_label(r.opponent)}  "
            f"{'W' if r.won else 'L'} {r.team_score}-{r.opponent_score}"
        )
    return "\n".join(lines)


def format_team(snapshot: SeasonSnapshot) -> str:
    summary = snapshot.summary
    averages = summary.weighted_averages
    cards = [
        ("Points per Game", fmt_num(summary.points_per_game)),
        ("Rebounds per Game", fmt_num(averages.get("reb"))),
        ("Assists per Game", fmt_num(averages.get("ast"))),
        ("Steals per Game", fmt_num(averages.get("stl"))),
        ("Blocks per Game", fmt_num(averages.get("blk"))),
        ("Field Goal %", fmt_pct(summary.shooting.get("fg_pct"))),
        ("3-Point %", fmt_pct(summary.shooting.get("fg3_pct"))),
        ("Free Throw %", fmt_pct(summary.shooting.get("ft_pct"))),
        ("Games Played", str(summary.games_played)),
        ("Season Record", summary.record),
    ]
    return render_table(["Stat", "Value"], [list(card) for card in cards])


# =============================================================================
# Commands
# =============================================================================


async def build_snapshot(args: argparse.Namespace, settings: Settings) -> SeasonSnapshot:
    """Run the pipeline once with CLI overrides applied."""
    async with BallDontLieNBA.from_settings(settings, api_key=args.api_key) as api:
        pipeline = SeasonPipeline(api, team_id=args.team_id, season=args.season, settings=settings)
        return await pipeline.refresh()


def fetch_snapshot(args: argparse.Namespace) -> SeasonSnapshot:
    return asyncio.run(build_snapshot(args, get_settings()))


def cmd_players(args: argparse.Namespace) -> int:
    """Show player season averages."""
    print(format_players(fetch_snapshot(args), args.sort))
    return 0


def cmd_last_game(args: argparse.Namespace) -> int:
    """Show the latest finished game."""
    print(format_last_game(fetch_snapshot(args)))
    return 0


def cmd_record(args: argparse.Namespace) -> int:
    """Show record and schedule."""
    print(format_record(fetch_snapshot(args)))
    return 0


def cmd_team(args: argparse.Namespace) -> int:
    """Show team season averages."""
    print(format_team(fetch_snapshot(args)))
    return 0


def cmd_snapshot(args: argparse.Namespace) -> int:
    """Dump the full snapshot as JSON."""
    print(fetch_snapshot(args).model_dump_json(indent=2))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Team season stats from BallDontLie",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--team-id", type=int, help="Team ID (default: settings)")
    parser.add_argument("--season", type=int, help="Season year (default: settings)")
    parser.add_argument("--api-key", help="BallDontLie API key (default: BALLDONTLIE_API_KEY)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    players_parser = subparsers.add_parser("players", help="Player season averages")
    players_parser.add_argument("--sort", choices=SORT_KEYS, default="pts", help="Sort column")

    subparsers.add_parser("last-game", help="Latest finished game box score")
    subparsers.add_parser("record", help="Season record and schedule")
    subparsers.add_parser("team", help="Team season averages")
    subparsers.add_parser("snapshot", help="Full snapshot as JSON")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    configure_logging("DEBUG" if args.verbose else get_settings().log_level)

    commands = {
        "players": cmd_players,
        "last-game": cmd_last_game,
        "record": cmd_record,
        "team": cmd_team,
        "snapshot": cmd_snapshot,
    }

    cmd_func = commands.get(args.command)
    if cmd_func is None:
        parser.print_help()
        return 1

    try:
        return cmd_func(args)
    except MissingCredentialError:
        logger.error("No API key provided. Set BALLDONTLIE_API_KEY or pass --api-key.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
