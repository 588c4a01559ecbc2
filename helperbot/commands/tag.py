"""Tag management command."""

from __future__ import annotations

import argparse
import json

from helperbot.commands.common import CommandRuntime, build_tag_service, load_config
from helperbot.models import Tag


def _print_tag(tag: Tag) -> None:
    aliases = ", ".join(tag.aliases) or "none"
    print(f"Tag: {tag.name} (aliases: {aliases}, versions: {len(tag.history)})")
    print(tag.content)


def run(args: argparse.Namespace, *, runtime: CommandRuntime) -> int:
    config = load_config(args)
    service = build_tag_service(config, runtime=runtime)
    action = args.tag_command

    if action == "show":
        tag = service.get(args.name)
        if args.json:
            print(json.dumps({"name": tag.name, "content": tag.content, "aliases": tag.aliases}, indent=2))
        else:
            print(tag.content)
        return 0

    if action == "create":
        _print_tag(service.create(args.name, args.content, author_id=args.author, aliases=args.aliases))
        return 0

    if action == "edit":
        aliases = [] if args.clear_aliases else args.aliases
        _print_tag(service.edit(args.name, author_id=args.author, content=args.content, aliases=aliases))
        return 0

    if action == "history":
        history = service.history(args.name)
        if args.json:
            print(json.dumps([entry.model_dump(mode="json") for entry in history], indent=2))
            return 0
        for version, entry in enumerate(history, start=1):
            aliases = ", ".join(entry.aliases) or "none"
            print(f"v{version} {entry.timestamp.isoformat()} author={entry.author_id} aliases={aliases}")
            print(f"  {entry.content}")
        return 0

    if action == "list":
        names = service.list_names()
        if args.json:
            print(json.dumps(names))
        else:
            for name in names:
                print(name)
        return 0

    service.delete(args.name)
    print(f"Deleted tag {args.name}")
    return 0
