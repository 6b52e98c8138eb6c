"""Configuration for cache-cleaner.

Every setting resolves in the same order: explicit value (CLI flag or
argument) -> environment variable -> ``.env.cache-cleaner`` in the project
directory -> built-in default.  The target folder list may also come from a
YAML file (``.cache-cleaner.yml`` by default) holding a ``targets`` list.
"""
from __future__ import annotations

import math
import os
import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import dotenv_values


ENV_PROJECT_DIR = "CC_PROJECT_DIR"
ENV_TARGETS = "CC_TARGETS"
ENV_TARGETS_FILE = "CC_TARGETS_FILE"
ENV_RESTART_COMMAND = "CC_RESTART_COMMAND"
ENV_RESTART_DELAY_SECONDS = "CC_RESTART_DELAY_SECONDS"
ENV_FORCE_DELETE_TIMEOUT_SECONDS = "CC_FORCE_DELETE_TIMEOUT_SECONDS"
ENV_LOG_LEVEL = "CC_LOG_LEVEL"
ENV_API_PORT = "CC_API_PORT"

DOTENV_FILENAME = ".env.cache-cleaner"
TARGETS_FILENAME = ".cache-cleaner.yml"

DEFAULT_TARGETS = ("Intermediate", "Binaries", "Saved", ".vs")
DEFAULT_RESTART_DELAY_SECONDS = 3.0
DEFAULT_API_PORT = 9110


@dataclass
class CleanerConfig:
    project_dir: Path
    targets: tuple[str, ...] = DEFAULT_TARGETS
    restart_command: list[str] = field(default_factory=list)
    restart_delay_seconds: float = DEFAULT_RESTART_DELAY_SECONDS
    force_delete_timeout_seconds: float | None = None
    log_level: str = "INFO"
    api_port: int = DEFAULT_API_PORT


def read_dotenv_key(*, dotenv_path: Path, key: str) -> str:
    if not dotenv_path.exists():
        return ""
    values = dotenv_values(dotenv_path)
    return str(values.get(key) or "").strip()


def _resolve(explicit: Any, *, env: Mapping[str, str], dotenv_path: Path, key: str) -> str:
    value = str(explicit if explicit is not None else "").strip()
    if not value:
        value = str(env.get(key) or "").strip()
    if not value:
        value = read_dotenv_key(dotenv_path=dotenv_path, key=key)
    return value


def parse_targets(raw: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in str(raw or "").split(",") if item.strip())


def load_targets_file(path: Path) -> tuple[str, ...]:
    with open(path, encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping with a 'targets' list")
    targets = data.get("targets")
    if not isinstance(targets, list):
        raise ValueError(f"{path}: 'targets' must be a list")
    return tuple(str(item).strip() for item in targets if str(item).strip())


def validate_targets(targets: tuple[str, ...]) -> tuple[str, ...]:
    if not targets:
        raise ValueError("at least one target folder is required")
    for name in targets:
        candidate = Path(name)
        if candidate.is_absolute() or name.startswith(("/", "\\")):
            raise ValueError(f"target '{name}' must be relative to the project directory")
        if ".." in candidate.parts or name in {".", ""}:
            raise ValueError(f"target '{name}' must stay inside the project directory")
    return targets


def _parse_seconds(raw: str, *, key: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{key} must be a number, got '{raw}'")
    if not math.isfinite(value):
        raise ValueError(f"{key} must be a finite number, got '{raw}'")
    if value < 0:
        raise ValueError(f"{key} must be >= 0")
    return value


def load_config(
    *,
    project_dir: str | None = None,
    targets: str | None = None,
    restart_command: str | None = None,
    env: Mapping[str, str] | None = None,
) -> CleanerConfig:
    env = os.environ if env is None else env

    resolved_project_dir = str(project_dir or "").strip() or str(env.get(ENV_PROJECT_DIR) or "").strip()
    root = Path(resolved_project_dir or os.getcwd()).expanduser().resolve()
    dotenv_path = root / DOTENV_FILENAME

    resolved_targets = parse_targets(_resolve(targets, env=env, dotenv_path=dotenv_path, key=ENV_TARGETS))
    if not resolved_targets:
        targets_file = _resolve(None, env=env, dotenv_path=dotenv_path, key=ENV_TARGETS_FILE)
        targets_path = Path(targets_file) if targets_file else root / TARGETS_FILENAME
        if not targets_path.is_absolute():
            targets_path = root / targets_path
        if targets_path.exists():
            resolved_targets = load_targets_file(targets_path)
        elif targets_file:
            raise ValueError(f"targets file not found: {targets_path}")
    if not resolved_targets:
        resolved_targets = DEFAULT_TARGETS

    config = CleanerConfig(project_dir=root, targets=validate_targets(resolved_targets))

    raw_restart = _resolve(restart_command, env=env, dotenv_path=dotenv_path, key=ENV_RESTART_COMMAND)
    if raw_restart:
        config.restart_command = shlex.split(raw_restart)

    raw_delay = _resolve(None, env=env, dotenv_path=dotenv_path, key=ENV_RESTART_DELAY_SECONDS)
    if raw_delay:
        config.restart_delay_seconds = _parse_seconds(raw_delay, key=ENV_RESTART_DELAY_SECONDS)

    raw_timeout = _resolve(None, env=env, dotenv_path=dotenv_path, key=ENV_FORCE_DELETE_TIMEOUT_SECONDS)
    if raw_timeout:
        config.force_delete_timeout_seconds = _parse_seconds(raw_timeout, key=ENV_FORCE_DELETE_TIMEOUT_SECONDS)

    config.log_level = (_resolve(None, env=env, dotenv_path=dotenv_path, key=ENV_LOG_LEVEL) or "INFO").upper()

    raw_port = _resolve(None, env=env, dotenv_path=dotenv_path, key=ENV_API_PORT)
    if raw_port:
        try:
            config.api_port = int(raw_port)
        except ValueError:
            raise ValueError(f"{ENV_API_PORT} must be an integer, got '{raw_port}'")

    return config


def target_paths(config: CleanerConfig) -> list[str]:
    return [str(config.project_dir / name) for name in config.targets]
