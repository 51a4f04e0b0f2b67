#!/usr/bin/env python3
"""
bureaucrat CLI - Entry point for pip-installed package.

Commands:
  install     Install the prepare-commit-msg hook
  uninstall   Remove the hook again
  show        Show configuration and the tag for the current branch
  run         Hook entry point, called by git (hidden)
"""

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .config import load_config
from .errors import BureaucratError
from .git import Repository
from .hooks import install_hook, uninstall_hook
from .log import LOG_LEVELS, configure_logging, default_level
from .message import render_tag, tag_message_file
from .resolver import resolve
from .utils import truncate_path

logger = logging.getLogger(__name__)

# Values git passes as the second prepare-commit-msg argument.
COMMIT_SOURCES = ("message", "template", "merge", "squash", "commit")
TAGGED_SOURCES = (None, "template")


def cmd_install(args: argparse.Namespace) -> int:
    repository = Repository.open()
    hook_path = install_hook(repository, overwrite=args.overwrite)
    logger.info(f"Hook installed at {truncate_path(hook_path)}")
    return 0


def cmd_uninstall(args: argparse.Namespace) -> int:
    repository = Repository.open()
    hook_path = repository.hook_path()
    if uninstall_hook(repository):
        logger.info(f"Hook removed from {truncate_path(hook_path)}")
    else:
        logger.info("Nothing to uninstall")
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    repository = Repository.open()
    config_path = repository.discover_config()
    config = load_config(config_path)
    branch = args.branch if args.branch is not None else repository.current_branch()
    tag = resolve(branch, config)

    print(f"Configuration:   {truncate_path(config_path)}")
    print(f"Codes:           {', '.join(config.codes) or '(none, CVE only)'}")
    print(f"Branch prefixes: {', '.join(config.branch_prefixes) or '(any)'}")
    print(f"Branch:          {branch}")
    print(f"Tag:             {render_tag(tag) if tag else '(none)'}")
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    if args.source not in TAGGED_SOURCES:
        logger.debug(f"Skipping tagging for '{args.source}' type commit")
        return 0
    logger.debug(f"Tagging '{args.source or 'unspecified'}' type commit")

    repository = Repository.open()
    config = load_config(repository.discover_config())
    logger.debug(f"Using codes {list(config.codes)} for branches {list(config.branch_prefixes)}")

    branch = repository.current_branch()
    tag = resolve(branch, config)
    if tag is None:
        logger.debug(f"No issue reference found in '{branch}'")
        return 0

    tag_message_file(args.path, tag)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bureaucrat",
        description="bureaucrat - Tag commit messages with the issue from the branch name",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  bureaucrat install              Install the prepare-commit-msg hook
  bureaucrat install --overwrite  Replace a hook installed by another tool
  bureaucrat show                 Show config and tag for the current branch
  bureaucrat uninstall            Remove the hook
        """,
    )
    parser.add_argument("--version", "-v", action="version", version=f"bureaucrat {__version__}")
    parser.add_argument(
        "--log-level", "-l",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Set logging level (default: $BUREAUCRAT_LOG or INFO)",
    )

    subparsers = parser.add_subparsers(
        dest="command", metavar="{install,uninstall,show}", required=True,
    )

    install = subparsers.add_parser("install", help="Install the prepare-commit-msg hook")
    install.add_argument(
        "--overwrite", action="store_true",
        help="Install hook even if a prepare-commit-msg exists already",
    )
    install.set_defaults(func=cmd_install)

    uninstall = subparsers.add_parser("uninstall", help="Remove the prepare-commit-msg hook")
    uninstall.set_defaults(func=cmd_uninstall)

    show = subparsers.add_parser("show", help="Show configuration and resolved tag")
    show.add_argument("--branch", "-b", help="Branch name to resolve instead of the current one")
    show.set_defaults(func=cmd_show)

    # Hook entry point; not listed in --help.
    run = subparsers.add_parser("run")
    run.add_argument("path", type=Path, help="File holding the commit message so far")
    run.add_argument("source", nargs="?", choices=COMMIT_SOURCES, help="Type of commit")
    run.add_argument("sha", nargs="?", help="Commit SHA-1 if this is an amended commit")
    run.set_defaults(func=cmd_run)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level or default_level())

    try:
        return args.func(args)
    except BureaucratError as e:
        logger.log(e.log_level, str(e))
        if e.hint:
            logger.info(e.hint)
        return e.exit_code
    except OSError as e:
        logger.error(f"IO error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
