"""Serve the message webhook and tag API."""

from __future__ import annotations

import argparse
import logging

from helperbot.commands.common import CommandRuntime, load_config

logger = logging.getLogger(__name__)


def run(args: argparse.Namespace, *, runtime: CommandRuntime) -> int:
    config = load_config(args)
    config.github.require_repository()

    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - dependency/runtime
        raise RuntimeError("Missing optional server dependencies. Install with: pip install 'helperbot[server]'") from exc

    from helperbot.webapp import create_app

    host = args.host or config.server.host
    port = args.port or config.server.port
    lookup = runtime.lookup_client_cls(gh_bin=config.github.gh_bin)
    app = create_app(config, lookup=lookup, storage=runtime.storage_cls(config.storage.sqlite_path))
    logger.info("Starting webhook on http://%s:%s (repo=%s/%s)", host, port, config.github.repository_owner, config.github.repository_name)
    uvicorn.run(app, host=host, port=port, log_level=args.log_level.lower())
    return 0
