"""Reference expansion command: one message in, at most one reply out."""

from __future__ import annotations

import argparse
import logging
import sys

from helperbot.commands.common import CommandRuntime, build_reference_engine, load_config
from helperbot.models import MessageEvent

logger = logging.getLogger(__name__)


def run(args: argparse.Namespace, *, runtime: CommandRuntime) -> int:
    config = load_config(args)
    engine = build_reference_engine(config, runtime=runtime)

    text = sys.stdin.read() if args.stdin else args.text
    event = MessageEvent(channel_id=args.channel_id, message_id=args.message_id, content=text or "")
    message = engine.handle_event(event, runtime.delivery_cls())
    if message is None:
        logger.info("No references to expand")
    return 0
