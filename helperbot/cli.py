"""CLI entrypoint for reference expansion, tag management and the webhook server."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable

from helperbot.commands import reference, serve, tag
from helperbot.commands.common import normalize_command
from helperbot.commands.parser import build_parser as _build_parser
from helperbot.config import ConfigurationError
from helperbot.logging_utils import configure_logging
from helperbot.services.command_runtime import CommandRuntime, default_runtime
from helperbot.tags import TagError

logger = logging.getLogger(__name__)

CommandHandler = Callable[..., int]

COMMANDS: dict[str, CommandHandler] = {
    "reference": reference.run,
    "tag": tag.run,
    "serve": serve.run,
}


def build_parser() -> argparse.ArgumentParser:
    return _build_parser()


def main(argv: list[str] | None = None, *, runtime: CommandRuntime | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    handler = COMMANDS.get(normalize_command(args.command))
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args, runtime=runtime or default_runtime())
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        return 2
    except TagError as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
