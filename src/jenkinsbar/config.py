from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os
import yaml

from .errors import ConfigError

DEFAULT_CONFIG_PATH = "~/.config/jenkinsbar/config.yaml"
CONNECT_ERROR_POLICIES = ("disconnect", "abort")

def _expand(path: str) -> str:
    return os.path.expanduser(os.path.expandvars(path))

@dataclass(frozen=True)
class TrackedGroup:
    endpoint: str
    name: str
    job_ids: tuple[str, ...] = ()
    username: str | None = None
    token: str | None = None

@dataclass(frozen=True)
class WidgetConfig:
    groups: tuple[TrackedGroup, ...]
    update_frequency: int
    timeout: float = 10.0
    max_workers: int = 4
    on_connect_error: str = "disconnect"

def _optional_str(value) -> str | None:
    if value is None:
        return None
    return os.path.expandvars(str(value)).strip() or None

def _parse_group(index: int, raw) -> TrackedGroup:
    if not isinstance(raw, dict):
        raise ConfigError(f"jobs[{index}] must be a mapping, got {type(raw).__name__}")
    for key in ("jenkins", "name"):
        if not raw.get(key):
            raise ConfigError(f"jobs[{index}] is missing {key!r}")

    job_ids = raw.get("jobs", [])
    if job_ids is None:
        job_ids = []
    if not isinstance(job_ids, list):
        raise ConfigError(f"jobs[{index}].jobs must be a list of job names")

    return TrackedGroup(
        endpoint=os.path.expandvars(str(raw["jenkins"])).strip(),
        name=str(raw["name"]),
        job_ids=tuple(str(j) for j in job_ids),
        username=_optional_str(raw.get("username")),
        token=_optional_str(raw.get("token")),
    )

def parse_config(raw: dict) -> WidgetConfig:
    groups = raw.get("jobs", raw.get("groups"))
    if groups is None:
        raise ConfigError("config must define 'jobs': a list of tracked Jenkins groups")
    if not isinstance(groups, list):
        raise ConfigError("'jobs' must be a list of tracked Jenkins groups")

    try:
        update_frequency = int(raw.get("update_frequency", raw.get("updateFrequency", 30)))
        timeout = float(raw.get("timeout", 10.0))
        max_workers = int(raw.get("max_workers", 4))
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid numeric setting: {e}") from e

    if update_frequency < 0:
        raise ConfigError(f"update_frequency must be >= 0, got {update_frequency}")
    if timeout <= 0:
        raise ConfigError(f"timeout must be > 0, got {timeout}")
    if max_workers < 1:
        raise ConfigError(f"max_workers must be >= 1, got {max_workers}")

    policy = str(raw.get("on_connect_error", "disconnect")).lower().strip()
    if policy not in CONNECT_ERROR_POLICIES:
        raise ConfigError(f"Unknown on_connect_error {policy!r}. Supported: {list(CONNECT_ERROR_POLICIES)}")

    return WidgetConfig(
        groups=tuple(_parse_group(i, g) for i, g in enumerate(groups)),
        update_frequency=update_frequency,
        timeout=timeout,
        max_workers=max_workers,
        on_connect_error=policy,
    )

def load_config(path: str | Path) -> WidgetConfig:
    p = Path(_expand(str(path)))
    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Error reading config {p}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing config {p}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError("config.yaml must contain a YAML mapping at top level.")
    return parse_config(raw)
