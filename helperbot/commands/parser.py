"""CLI parser construction."""

from __future__ import annotations

import argparse

from helperbot.commands.common import add_common_config_flags


def _add_tag_commands(tag: argparse.ArgumentParser) -> None:
    tag_sub = tag.add_subparsers(dest="tag_command", required=True)

    show = tag_sub.add_parser("show", help="Print the current content of a tag (name or alias)")
    show.add_argument("name")

    create = tag_sub.add_parser("create", help="Create a new tag")
    create.add_argument("name")
    create.add_argument("--content", required=True, help="Tag content")
    create.add_argument("--alias", dest="aliases", action="append", default=[], help="Alias (repeatable)")
    create.add_argument("--author", type=int, default=0, help="Chat user id recorded in history")

    edit = tag_sub.add_parser("edit", help="Append a new version to an existing tag")
    edit.add_argument("name")
    edit.add_argument("--content", help="New content (defaults to the current content)")
    edit_aliases = edit.add_mutually_exclusive_group()
    edit_aliases.add_argument(
        "--alias",
        dest="aliases",
        action="append",
        default=None,
        help="Replace aliases (repeatable; omit to keep current aliases)",
    )
    edit_aliases.add_argument("--clear-aliases", action="store_true", help="Remove every alias")
    edit.add_argument("--author", type=int, default=0, help="Chat user id recorded in history")

    history = tag_sub.add_parser("history", help="Print every version of a tag, oldest first")
    history.add_argument("name")

    listing = tag_sub.add_parser("list", help="List tag names")

    delete = tag_sub.add_parser("delete", help="Delete a tag with its aliases and history")
    delete.add_argument("name")

    for cmd in (show, history, listing):
        cmd.add_argument("--json", action="store_true", help="Print JSON instead of text")
    for cmd in (show, create, edit, history, listing, delete):
        add_common_config_flags(cmd)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Chat helper bot: tags and GitHub reference expansion")
    parser.add_argument("--log-level", default="INFO", help="Logging level (DEBUG, INFO, WARNING, ERROR)")

    sub = parser.add_subparsers(dest="command", required=True)

    reference = sub.add_parser(
        "reference",
        aliases=["ref", "refs"],
        help="Expand ##<number> references in a message and print the reply",
    )
    source = reference.add_mutually_exclusive_group(required=True)
    source.add_argument("--text", help="Message text to scan")
    source.add_argument("--stdin", action="store_true", help="Read message text from stdin")
    reference.add_argument("--channel-id", default="cli", help="Channel id echoed in the reply envelope")
    reference.add_argument("--message-id", default="cli", help="Message id echoed in the reply envelope")
    add_common_config_flags(reference)

    tag = sub.add_parser("tag", aliases=["tags"], help="Use or manage a predefined message")
    _add_tag_commands(tag)

    serve = sub.add_parser("serve", aliases=["serve-webhook"], help="Run the message webhook and tag API")
    serve.add_argument("--host", help="Bind host (defaults to server.host)")
    serve.add_argument("--port", type=int, help="Bind port (defaults to server.port)")
    add_common_config_flags(serve)

    return parser
