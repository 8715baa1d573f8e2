"""Unified Testing CLI for Court Pairing.

This module provides an interactive command-line interface for generating
random sessions, validating schedules, printing standings and benchmarking
the scheduler.
"""

# Court Pairing
# Copyright (C) 2025  Court Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import argparse
import json
import statistics
import sys
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter, WordCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from courtpairing.constants import FORMAT_LABELS
from courtpairing.exceptions import CourtPairingException, InvalidConfigurationException
from courtpairing.models import ClubTournament, Match, Player, SessionConfig
from courtpairing.models.standing import Standing
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)


# ANSI color codes for terminal output
class Colors:
    HEADER = "\033[95m"
    OKBLUE = "\033[94m"
    OKCYAN = "\033[96m"
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


FORMAT_CHOICES = sorted(FORMAT_LABELS)
PATTERN_CHOICES = ["realistic", "close", "blowout", "random"]

# Command definitions with their options
COMMANDS = {
    "generate": {
        "description": "Generate a random session (RSG)",
        "options": {
            "--players": "Number of players (default: 12)",
            "--rounds": "Number of rounds (default: 6)",
            "--courts": "Courts per round (default: 3)",
            "--format": "Session format (DOUBLES_ROTATE/DOUBLES_FIXED_TEAMS/SINGLES)",
            "--prefer-mixed": "Prefer mixed-gender partners",
            "--pattern": "Score pattern (realistic/close/blowout/random)",
            "--seed": "Random seed for reproducibility",
            "--output": "Output file path (JSON)",
            "--validate": "Run schedule validation",
        },
    },
    "validate": {
        "description": "Validate a session or club schedule file",
        "options": {
            "--file": "Schedule file to validate (JSON)",
            "--detailed": "Show every criterion result",
        },
    },
    "standings": {
        "description": "Print club and player standings",
        "options": {
            "--file": "Club tournament file (JSON); random league when omitted",
            "--clubs": "Clubs in the random league (default: 4)",
            "--divisions": "Divisions in the random league (default: 1)",
            "--seed": "Random seed",
            "--top": "Top performers per division and gender (default: 3)",
            "--export": "Write a JSON standings report",
            "--csv": "Write the scored matches as CSV",
        },
    },
    "benchmark": {
        "description": "Performance benchmarking",
        "options": {
            "--size": "Players per session (default: 40)",
            "--rounds": "Number of rounds (default: 12)",
            "--courts": "Courts per round (default: 8)",
            "--iterations": "Number of iterations (default: 10)",
        },
    },
    "help": {
        "description": "Show help for specific command",
        "options": {
            "<command>": "Command name to get help for",
        },
    },
    "exit": {"description": "Exit the interactive mode", "options": {}},
}


def print_banner():
    title = "court-pairing-test: schedule generator and checker"
    rule = "=" * len(title)
    print(f"\n{Colors.OKBLUE}{rule}\n{title}\n{rule}{Colors.ENDC}")
    print(
        f"Commands: {', '.join(SUBCOMMANDS)}. "
        f"{Colors.BOLD}help <command>{Colors.ENDC} for options, "
        f"{Colors.BOLD}exit{Colors.ENDC} to quit.\n"
    )


def print_commands_list():
    print(f"\n{Colors.BOLD}Commands{Colors.ENDC}")
    width = max(len(name) for name in COMMANDS) + 2
    for name, entry in COMMANDS.items():
        print(f"  {Colors.OKGREEN}{name:<{width}}{Colors.ENDC}{entry['description']}")
    print()


def print_command_help(command: str):
    """Describe one command and its flags; falls back to the command list."""
    entry = COMMANDS.get(command)
    if entry is None:
        print(f"{Colors.FAIL}No such command: {command}{Colors.ENDC}")
        print_commands_list()
        return

    print(f"\n{Colors.BOLD}{command}{Colors.ENDC}: {entry['description']}")
    for flag, text in entry["options"].items():
        print(f"    {Colors.OKCYAN}{flag:<16}{Colors.ENDC}{text}")
    print()


def create_completer() -> NestedCompleter:
    """Completion for command names (bare or with a leading slash) and their flags."""
    tree: Dict[str, Optional[WordCompleter]] = {}
    for name, entry in COMMANDS.items():
        flags = list(entry["options"])
        completer = WordCompleter(flags) if flags else None
        tree[name] = tree[f"/{name}"] = completer
    tree["/list"] = None
    return NestedCompleter.from_nested_dict(tree)


def load_json_file(path: str) -> Dict[str, Any]:
    """Read a JSON object from ``path``.

    Raises:
        InvalidConfigurationException: If the file is missing or malformed
    """
    file_path = Path(path)
    if not file_path.exists():
        raise InvalidConfigurationException(f"File not found: {file_path}")
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidConfigurationException(f"Invalid JSON in {file_path}: {e}") from e
    if not isinstance(data, dict):
        raise InvalidConfigurationException(f"{file_path} must contain a JSON object")
    return data


def print_standings(title: str, rows: List[Standing]):
    """Print a standings table."""
    print(f"\n{Colors.BOLD}{title}{Colors.ENDC}")
    print(f"  {'#':>3}  {'Name':24} {'W':>3} {'L':>3} {'PF':>5} {'PA':>5} {'+/-':>5}")
    for rank, row in enumerate(rows, start=1):
        name = (row.name or row.id)[:24]
        print(
            f"  {rank:>3}  {name:24} {row.wins:>3} {row.losses:>3} "
            f"{row.points_for:>5} {row.points_against:>5} {row.point_diff:>+5}"
        )


def print_report(report, detailed: bool = False):
    """Print a validation report."""
    if report.violations:
        print(f"  {Colors.FAIL}Absolute violations: {len(report.violations)}{Colors.ENDC}")
        print(f"    Criteria: {' '.join(v.criterion for v in report.violations)}")
    if report.quality_warnings:
        print(
            f"  {Colors.WARNING}Quality warnings: "
            f"{len(report.quality_warnings)}{Colors.ENDC}"
        )
    print(f"  {report.summary}")

    if detailed:
        for result in report.criteria_results:
            colour = Colors.OKGREEN if result.passed else Colors.FAIL
            print(
                f"    {colour}{result.criterion:22}{Colors.ENDC} "
                f"{result.status.value:15} {result.description}"
            )


def run_generate_command(args: argparse.Namespace) -> int:
    """Run the generate (RSG) command."""
    from courtpairing.testing.rsg import RandomSessionGenerator, RSGConfig, ScorePattern

    print(f"\n{Colors.BOLD}Generating session...{Colors.ENDC}")

    config = RSGConfig(
        num_players=args.players,
        num_rounds=args.rounds,
        courts=args.courts,
        session_format=args.format,
        prefer_mixed=args.prefer_mixed,
        score_pattern=ScorePattern[args.pattern.upper()],
        seed=args.seed,
        validate=args.validate,
    )
    rsg = RandomSessionGenerator(config)
    session_data = rsg.generate_complete_session()

    if args.output:
        output_path = Path(args.output)
        output_path.write_text(rsg.export_json_format(session_data), encoding="utf-8")
        print(f"{Colors.OKGREEN}Session saved to: {output_path}{Colors.ENDC}")

    print(f"\n{Colors.BOLD}Session Generated:{Colors.ENDC}")
    print(f"  Format: {FORMAT_LABELS[config.session_format]}")
    print(f"  Players: {len(session_data['players'])}")
    print(f"  Matches: {len(session_data['matches'])}")

    if "validation" in session_data:
        report = session_data["validation"]
        print(f"\n{Colors.BOLD}Validation:{Colors.ENDC}")
        if report["absolute_violations"]:
            print(
                f"  {Colors.FAIL}Absolute violations: "
                f"{' '.join(report['absolute_violations'])}{Colors.ENDC}"
            )
        print(f"  {report['summary']}")

    print_standings("Session standings", session_data["standings"][:10])
    return 0


def run_validate_command(args: argparse.Namespace) -> int:
    """Run the validation command."""
    from courtpairing.validation import ScheduleValidator

    data = load_json_file(args.file)
    validator = ScheduleValidator()
    print(f"\n{Colors.BOLD}Validating schedule: {args.file}{Colors.ENDC}")

    if "clubs" in data:
        tournament = ClubTournament.from_dict(data)
        report = validator.validate_round_robin(tournament)
    elif "session" in data:
        session = SessionConfig.from_dict(data["session"])
        players = [Player.from_dict(p) for p in data.get("players", [])]
        matches = [Match.from_dict(m) for m in data.get("matches", [])]
        report = validator.validate_session(matches, session, players)
    else:
        raise InvalidConfigurationException(
            "Expected a club tournament ('clubs') or a session ('session') file"
        )

    print_report(report, detailed=args.detailed)
    return 0 if not report.violations else 1


def run_standings_command(args: argparse.Namespace) -> int:
    """Print standings of a club tournament."""
    from courtpairing.export import save_report, standings_report, write_club_csv
    from courtpairing.standings import (
        compute_club_standings,
        compute_individual_coverage,
        compute_player_standings,
        top_performers,
    )
    from courtpairing.testing.rsg import create_club_tournament

    if args.file:
        tournament = ClubTournament.from_dict(load_json_file(args.file))
    else:
        tournament = create_club_tournament(args.clubs, args.divisions, seed=args.seed)

    print_standings("Club standings", compute_club_standings(tournament))

    player_rows = compute_player_standings(tournament)
    for division in tournament.divisions:
        for gender, label in (("F", "Women"), ("M", "Men")):
            rows = top_performers(tournament, division.id, gender, args.top, player_rows)
            if rows:
                print_standings(f"{division.name or division.code} - {label}", rows)

    coverage = compute_individual_coverage(tournament)
    if not coverage.is_complete:
        print(
            f"\n{Colors.WARNING}Individual standings cover "
            f"{coverage.scored_matches_with_player_mapping} of "
            f"{coverage.scored_matches} scored matches{Colors.ENDC}"
        )

    if args.export:
        save_report(standings_report(tournament, args.top), Path(args.export))
        print(f"{Colors.OKGREEN}Report saved to: {args.export}{Colors.ENDC}")
    if args.csv:
        write_club_csv(Path(args.csv), tournament)
        print(f"{Colors.OKGREEN}CSV saved to: {args.csv}{Colors.ENDC}")
    return 0


def run_benchmark_command(args: argparse.Namespace) -> int:
    """Time full session generation (schedule, scores, standings)."""
    from courtpairing.testing.rsg import RandomSessionGenerator, RSGConfig

    print(
        f"\n{Colors.BOLD}Benchmark{Colors.ENDC}: {args.size} players, "
        f"{args.rounds} rounds, {args.courts} courts x {args.iterations} runs"
    )

    timings_ms: List[float] = []
    for run in range(1, args.iterations + 1):
        rsg = RandomSessionGenerator(
            RSGConfig(
                num_players=args.size,
                num_rounds=args.rounds,
                courts=args.courts,
                seed=41 + run,
                validate=False,
            )
        )
        started = time.perf_counter()
        data = rsg.generate_complete_session()
        timings_ms.append((time.perf_counter() - started) * 1000)
        print(
            f"  run {run:>3}: {timings_ms[-1]:8.2f} ms  "
            f"({len(data['matches'])} matches)"
        )

    if timings_ms:
        print(
            f"\n  mean {statistics.mean(timings_ms):.2f} ms, "
            f"median {statistics.median(timings_ms):.2f} ms, "
            f"fastest {min(timings_ms):.2f} ms, slowest {max(timings_ms):.2f} ms"
        )
    return 0


def add_generate_arguments(parser: argparse.ArgumentParser):
    parser.add_argument("--players", type=int, default=12)
    parser.add_argument("--rounds", type=int, default=6)
    parser.add_argument("--courts", type=int, default=3)
    parser.add_argument("--format", choices=FORMAT_CHOICES, default="DOUBLES_ROTATE")
    parser.add_argument("--prefer-mixed", action="store_true")
    parser.add_argument("--pattern", choices=PATTERN_CHOICES, default="realistic")
    parser.add_argument("--seed", type=int)
    parser.add_argument("--output")
    parser.add_argument("--validate", action="store_true")


def add_validate_arguments(parser: argparse.ArgumentParser):
    parser.add_argument("--file", required=True)
    parser.add_argument("--detailed", action="store_true")


def add_standings_arguments(parser: argparse.ArgumentParser):
    parser.add_argument("--file")
    parser.add_argument("--clubs", type=int, default=4)
    parser.add_argument("--divisions", type=int, default=1)
    parser.add_argument("--seed", type=int)
    parser.add_argument("--top", type=int, default=3)
    parser.add_argument("--export")
    parser.add_argument("--csv")


def add_benchmark_arguments(parser: argparse.ArgumentParser):
    parser.add_argument("--size", type=int, default=40)
    parser.add_argument("--rounds", type=int, default=12)
    parser.add_argument("--courts", type=int, default=8)
    parser.add_argument("--iterations", type=int, default=10)


SUBCOMMANDS = {
    "generate": (add_generate_arguments, run_generate_command),
    "validate": (add_validate_arguments, run_validate_command),
    "standings": (add_standings_arguments, run_standings_command),
    "benchmark": (add_benchmark_arguments, run_benchmark_command),
}


def create_command_parser(command: str) -> argparse.ArgumentParser:
    """Create a standalone parser for one subcommand (interactive mode)."""
    add_arguments, _ = SUBCOMMANDS[command]
    parser = argparse.ArgumentParser(
        prog=command, description=COMMANDS[command]["description"]
    )
    add_arguments(parser)
    return parser


def create_main_parser() -> argparse.ArgumentParser:
    """Create main argument parser."""
    parser = argparse.ArgumentParser(
        prog="court-pairing-test",
        description="Unified testing CLI for Court Pairing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive mode
  court-pairing-test

  # Generate a random rotating-doubles session
  court-pairing-test generate --players 14 --rounds 8 --courts 3 --validate

  # Validate a saved schedule
  court-pairing-test validate --file session.json --detailed

  # Standings of a random four-club league
  court-pairing-test standings --clubs 4 --seed 7

  # Benchmark performance
  court-pairing-test benchmark --size 64 --iterations 20
        """,
    )

    parser.add_argument(
        "--interactive", "-i", action="store_true", help="Start in interactive mode"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    for command, (add_arguments, handler) in SUBCOMMANDS.items():
        sub_parser = subparsers.add_parser(
            command, help=COMMANDS[command]["description"]
        )
        add_arguments(sub_parser)
        sub_parser.set_defaults(func=handler)

    return parser


QUIT_WORDS = {"exit", "quit", "q"}
LIST_WORDS = {"help", "?", "list"}


def dispatch_line(line: str) -> bool:
    """Run one interactive input line; False once the user asked to quit."""
    words = [word.lstrip("/") for word in line.split()]
    if not words:
        return True

    command, rest = words[0], words[1:]
    if command in QUIT_WORDS:
        return False
    if command in LIST_WORDS:
        if rest:
            print_command_help(rest[0])
        else:
            print_commands_list()
        return True
    if command not in SUBCOMMANDS:
        print(f"{Colors.FAIL}No such command: {command}{Colors.ENDC} (try help)")
        return True

    _, handler = SUBCOMMANDS[command]
    try:
        handler(create_command_parser(command).parse_args(rest))
    except SystemExit:
        # argparse already printed its usage message
        pass
    except CourtPairingException as e:
        print(f"{Colors.FAIL}{type(e).__name__}: {e}{Colors.ENDC}")
    except Exception:
        logger.exception(f"Command {command!r} crashed")
    return True


def run_interactive_mode() -> int:
    """Prompt for commands until exit, with completion and history."""
    print_banner()
    session = PromptSession(
        completer=create_completer(),
        history=InMemoryHistory(),
        style=Style.from_dict({"prompt": "#00aa00 bold"}),
    )

    while True:
        try:
            line = session.prompt("courts> ")
        except KeyboardInterrupt:
            print(f"{Colors.WARNING}(type exit to leave){Colors.ENDC}")
            continue
        except EOFError:
            break
        if not dispatch_line(line):
            break

    print(f"{Colors.OKGREEN}Bye.{Colors.ENDC}")
    return 0


def run_standard_mode(argv: Optional[List[str]] = None) -> int:
    """Run in standard CLI mode (non-interactive)."""
    parser = create_main_parser()
    args = parser.parse_args(argv)

    if args.interactive:
        return run_interactive_mode()

    if not hasattr(args, "func"):
        parser.print_help()
        return 0

    try:
        return args.func(args)
    except CourtPairingException as e:
        print(f"{Colors.FAIL}{type(e).__name__}: {e}{Colors.ENDC}", file=sys.stderr)
        return 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for court-pairing-test CLI."""
    argv = sys.argv[1:] if argv is None else argv
    if not argv or "--interactive" in argv or "-i" in argv:
        return run_interactive_mode()
    return run_standard_mode(argv)


if __name__ == "__main__":
    sys.exit(main())
