"""Settings loading: defaults, buildfs.yaml, then BUILDFS_* environment / .env values."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict

CONFIG_FILE = "buildfs.yaml"
ENV_PREFIX = "BUILDFS_"


class FsSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    # Name of the tarfile extraction filter applied to tar.gz members.
    tar_filter: Literal["data", "tar", "fully_trusted"] = "data"
    skip_hidden: bool = False
    restore_zip_permissions: bool = True


def read_env_file(keys: list[str], root: Path | None = None) -> dict[str, str]:
    """Parse .env file and return values for requested keys.

    Does NOT load into os.environ; callers decide what to do with values.
    """
    env_file = (root or Path.cwd()) / ".env"
    try:
        content = env_file.read_text()
    except OSError:
        return {}

    result: dict[str, str] = {}
    wanted = set(keys)

    for line in content.splitlines():
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("#"):
            continue
        eq_idx = trimmed.find("=")
        if eq_idx == -1:
            continue
        key = trimmed[:eq_idx].strip()
        if key not in wanted:
            continue
        value = trimmed[eq_idx + 1 :].strip()
        if (value.startswith('"') and value.endswith('"')) or (value.startswith("'") and value.endswith("'")):
            value = value[1:-1]
        if value:
            result[key] = value

    return result


def _read_config_file(root: Path) -> dict[str, Any]:
    config_path = root / CONFIG_FILE
    if not config_path.exists():
        return {}

    raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError(f"{CONFIG_FILE} must contain a mapping, got {type(raw).__name__}")
    return raw


def load_settings(root: Path | None = None) -> FsSettings:
    """Build settings for the given project root (defaults to cwd).

    Precedence, lowest first: field defaults, buildfs.yaml, .env, process environment.
    """
    root = root or Path.cwd()
    values = _read_config_file(root)

    env_keys = {f"{ENV_PREFIX}{name.upper()}": name for name in FsSettings.model_fields}
    env_file = read_env_file(list(env_keys), root)
    for key, name in env_keys.items():
        value = os.environ.get(key) or env_file.get(key)
        if value:
            values[name] = value

    return FsSettings(**values)


def default_settings() -> FsSettings:
    """Settings used when an operation is called without explicit settings.

    Read from the current directory and environment on every call, so changes
    made after import are picked up. Invalid values raise pydantic.ValidationError
    even for fields the calling operation does not use.
    """
    return load_settings()
