"""
Command-line interface.

Usage:
    character-validator validate path/to/agent.character.json [--tree] [--expand] [--config PATH]
    character-validator serve [--config config/system.yaml]
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from character_validator.config import CharacterFileError, ConfigLoader
from character_validator.main import configure_console, load_config, run_server
from character_validator.schema import Valid, parse_and_validate
from character_validator.services import COMMON_ISSUES, CharacterSummary, build_report
from character_validator.viewer import JsonTree, render_text

logger = logging.getLogger(__name__)

EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_UNREADABLE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="character-validator",
        description="Validate character configuration files",
    )
    parser.add_argument("--config", type=Path, default=None, help="Path to system.yaml")

    # Lets --config follow the subcommand too; SUPPRESS keeps a value given before it
    config_option = argparse.ArgumentParser(add_help=False)
    config_option.add_argument("--config", type=Path, default=argparse.SUPPRESS, help="Path to system.yaml")

    subparsers = parser.add_subparsers(dest="command", required=True)

    validate = subparsers.add_parser("validate", parents=[config_option], help="Validate a character file")
    validate.add_argument("file", type=Path, help="Character JSON file")
    validate.add_argument("--tree", action="store_true", help="Print the validated data as a tree")
    validate.add_argument(
        "--expand",
        action="store_true",
        help="Expand every node of the tree (implies --tree)",
    )

    subparsers.add_parser("serve", parents=[config_option], help="Run the web interface")
    return parser


def _print_report(outcome, group: bool) -> None:
    print("Validation Errors")
    print("The following issues were found in your character configuration:")
    for entry in build_report(outcome.errors, group=group):
        print(f"  • {entry.field}: {entry.message}")
        if entry.suggestion:
            print(f"      Tip: {entry.suggestion}")
    print()
    print("Common issues include:")
    for issue in COMMON_ISSUES:
        print(f"  - {issue}")


def _print_summary(summary: CharacterSummary) -> None:
    print("Valid Character Config")
    print(f"  Name: {summary.name}")
    print(f"  Model Provider: {summary.model_provider}")
    if summary.model:
        print(f"  Model: {summary.model}")
    print(f"  Clients: {', '.join(summary.clients)}")
    print(f"  Plugins: {', '.join(summary.plugins) if summary.has_plugins else 'No plugins configured'}")
    print(f"  Traits: {', '.join(summary.adjectives)}")
    print(f"  Topics: {', '.join(summary.topics)}")
    print("  Bio:")
    for line in summary.bio:
        print(f"    - {line}")


def _expand_all(tree: JsonTree) -> None:
    # Expanding top-down makes each level visible before the next is toggled
    for _, node in tree.visible_nodes():
        if node.is_container and not node.is_expanded:
            node.toggle()


def validate_command(args: argparse.Namespace) -> int:
    system_config = load_config(args.config)
    try:
        content = ConfigLoader().read_character_file(args.file)
    except CharacterFileError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_UNREADABLE

    outcome = parse_and_validate(content, system_config.validation)
    if not isinstance(outcome, Valid):
        _print_report(outcome, group=system_config.viewer.group_errors_by_path)
        return EXIT_INVALID

    _print_summary(CharacterSummary.from_config(outcome.config))
    if args.tree or args.expand:
        tree = JsonTree(outcome.data, initial_expanded=True)
        if args.expand:
            _expand_all(tree)
        print()
        print("\n".join(render_text(tree)))
    return EXIT_VALID


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_console()

    if args.command == "serve":
        run_server(load_config(args.config))
        return EXIT_VALID

    logging.basicConfig(level=logging.WARNING, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    return validate_command(args)


if __name__ == "__main__":
    sys.exit(main())
