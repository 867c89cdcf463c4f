"""CLI entry point."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
from pathlib import Path
from typing import Sequence

from .core import CommentEvent, Config, ConfigError, TriagebotError, load_config
from .core.commands import CommandInput
from .core.config import DEFAULT_BOT_NAMES
from .core.errors import ParseError
from .core.interactions import render_parse_error
from .core.router import CommentRouter
from .core.team import TeamClient
from .github import GitHubManager
from .zulip import ZulipClient

LOGGER = logging.getLogger(__name__)


def cli(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(
        prog="triagebot",
        description="triagebot - act on bot commands written in issue comments",
    )
    parser.add_argument("--config-dir", help="Directory holding .env and repos.yaml")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parse_parser = subparsers.add_parser(
        "parse",
        help="Show the commands found in a comment without executing them",
    )
    parse_parser.add_argument("text", help="Comment body")
    parse_parser.add_argument(
        "--bot-name",
        action="append",
        dest="bot_names",
        help="Name the bot is mentioned by (repeatable)",
    )

    handle_parser = subparsers.add_parser(
        "handle",
        help="Execute the commands in a comment against GitHub",
    )
    handle_parser.add_argument("--repo", required=True, help="Repository as owner/name")
    handle_parser.add_argument("--issue", required=True, type=int, help="Issue or PR number")
    handle_parser.add_argument("--user", required=True, help="Login of the comment author")
    handle_parser.add_argument("--url", default="", help="URL of the comment")
    body_group = handle_parser.add_mutually_exclusive_group(required=True)
    body_group.add_argument("--body", help="Comment body")
    body_group.add_argument("--body-file", type=Path, help="File containing the comment body")

    args = parser.parse_args(argv)
    _configure_logging()

    if args.command == "parse":
        return _run_parse(args.text, args.bot_names or DEFAULT_BOT_NAMES)
    if args.command == "handle":
        body = args.body if args.body is not None else args.body_file.read_text(encoding="utf-8")
        event = CommentEvent(
            repo=args.repo,
            issue_number=args.issue,
            author=args.user,
            body=body,
            html_url=args.url,
        )
        try:
            config = load_config(args.config_dir)
            _apply_log_level()
            asyncio.run(_handle_async(config, event))
        except ConfigError as exc:
            LOGGER.error("Configuration error: %s", exc)
            return 1
        except TriagebotError as exc:
            LOGGER.error("Failed to handle comment: %s", exc)
            return 1
        return 0

    parser.print_help()
    return 1


def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _apply_log_level() -> None:
    log_level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    log_level = getattr(logging, log_level_name, logging.INFO)
    logging.getLogger().setLevel(log_level)


def _run_parse(text: str, bot_names: Sequence[str]) -> int:
    status = 0
    found = False
    for item in CommandInput(text, bot_names).parse_commands():
        found = True
        if isinstance(item, ParseError):
            print(f"error at byte {item.byte_offset}: {item.message}")
            print(render_parse_error(item))
            status = 2
        else:
            print(item)
    if not found:
        print("no commands found")
    return status


async def _handle_async(config: Config, event: CommentEvent) -> None:
    github_manager = GitHubManager(config.github_token)
    if not github_manager.is_configured():
        raise ConfigError("GITHUB_TOKEN is not set")

    zulip_client = None
    if config.zulip:
        zulip_client = ZulipClient(config.zulip.url, config.zulip.bot_email, config.zulip.api_token)
    router = CommentRouter(
        config,
        github_manager,
        TeamClient(config.team_api_url),
        zulip_client,
    )
    LOGGER.info("Handling comment by %s on %s#%s", event.author, event.repo, event.issue_number)
    await router.handle_comment(event)


if __name__ == "__main__":
    raise SystemExit(cli())
