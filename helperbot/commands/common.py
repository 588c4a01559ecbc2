"""Shared helpers for CLI command modules."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import yaml

from helperbot.config import ConfigurationError, HelperConfig, load_effective_config
from helperbot.pipeline import ReferenceContext, ReferenceEngine
from helperbot.services.command_runtime import CommandRuntime
from helperbot.tags import TagService

logger = logging.getLogger(__name__)

ALIAS_TO_CANONICAL = {
    "ref": "reference",
    "refs": "reference",
    "tags": "tag",
    "serve-webhook": "serve",
}


def normalize_command(name: str) -> str:
    return ALIAS_TO_CANONICAL.get(name, name)


def load_yaml_dict(path: str | None) -> dict | None:
    if not path:
        return None
    data = yaml.safe_load(Path(path).read_text())
    if data is None:
        return None
    if not isinstance(data, dict):
        raise ConfigurationError(f"YAML at {path} must decode to a mapping")
    return data


def load_config(args: argparse.Namespace) -> HelperConfig:
    return load_effective_config(
        repo_path=args.repo_path,
        org_defaults=load_yaml_dict(args.org_config),
        system_defaults=load_yaml_dict(args.system_config),
        runtime_override=load_yaml_dict(args.runtime_override),
    )


def add_common_config_flags(cmd: argparse.ArgumentParser) -> None:
    cmd.add_argument("--repo-path", default=".", help="Directory holding .helperbot.yaml")
    cmd.add_argument("--org-config", help="Optional org defaults YAML")
    cmd.add_argument("--system-config", help="Optional system defaults YAML")
    cmd.add_argument("--runtime-override", help="Optional runtime override YAML")


def build_reference_engine(config: HelperConfig, *, runtime: CommandRuntime) -> ReferenceEngine:
    lookup = runtime.lookup_client_cls(gh_bin=config.github.gh_bin)
    return ReferenceEngine(ReferenceContext.from_config(config, lookup=lookup))


def build_tag_service(config: HelperConfig, *, runtime: CommandRuntime) -> TagService:
    return TagService(runtime.storage_cls(config.storage.sqlite_path))
