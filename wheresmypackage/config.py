"""
Configuration loading

Settings come from an optional YAML file (with ``${VAR}`` environment
substitution) and are then overridden by environment variables:

    WHERESMYPACKAGE_CONFIG        path of the YAML file
    WHERESMYPACKAGE_API_HOSTNAME  base URL of the tracking service
    WHERESMYPACKAGE_TIMEOUT       request timeout in seconds

Example config.yaml:

    api_base: https://${TRACKING_HOST}
    timeout: 20
    narrator_interval: 3
    carriers:
      - name: 4PX
        logo: /carrierlogos/4px.png
        api_code: 4px
"""

import logging
import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

import yaml

from .carriers import CarrierRegistry
from .constants import (
    DEFAULT_API_BASE,
    DEFAULT_TIMEOUT_SECONDS,
    ENV_API_HOSTNAME,
    ENV_CONFIG_PATH,
    ENV_TIMEOUT,
    LOADING_MESSAGES,
    NARRATOR_INTERVAL_SECONDS,
)

logger = logging.getLogger(__name__)


def _load_config(path: str) -> dict:
    """Read YAML config file with ${VAR} environment variable substitution."""
    with open(path, "r", encoding="utf-8") as f:
        raw = f.read()

    def _replace_env(match):
        var_name = match.group(1)
        value = os.environ.get(var_name)
        if value is None:
            raise ValueError(
                f"Environment variable '{var_name}' not set "
                f"(referenced in config file '{path}')"
            )
        return value

    resolved = re.sub(r"\$\{(\w+)\}", _replace_env, raw)
    return yaml.safe_load(resolved) or {}


def _seconds(cfg: Dict[str, Any], key: str, default: float) -> float:
    """Read a duration; a missing or null entry falls back to ``default``."""
    value = cfg.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"'{key}' must be a number of seconds, got {value!r}")


@dataclass(frozen=True)
class Settings:
    """Immutable runtime configuration, injected at construction."""
    api_base: str = DEFAULT_API_BASE
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    narrator_interval: float = NARRATOR_INTERVAL_SECONDS
    carriers: CarrierRegistry = field(default_factory=CarrierRegistry)
    loading_messages: Tuple[str, ...] = LOADING_MESSAGES

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any]) -> "Settings":
        messages = cfg.get("loading_messages") or LOADING_MESSAGES
        return cls(
            api_base=str(cfg.get("api_base") or DEFAULT_API_BASE),
            timeout=_seconds(cfg, "timeout", DEFAULT_TIMEOUT_SECONDS),
            narrator_interval=_seconds(cfg, "narrator_interval", NARRATOR_INTERVAL_SECONDS),
            carriers=CarrierRegistry.from_config(cfg.get("carriers")),
            loading_messages=tuple(str(m) for m in messages),
        )


def load_settings(path: Optional[str] = None) -> Settings:
    """Load settings from ``path`` (or $WHERESMYPACKAGE_CONFIG) plus env overrides."""
    path = path or os.getenv(ENV_CONFIG_PATH)
    cfg: Dict[str, Any] = {}
    if path:
        cfg = _load_config(path)
        if not isinstance(cfg, dict):
            raise ValueError(f"Config file '{path}' must contain a mapping")
        logger.info(f"Config loaded from {path}")

    api_base = os.getenv(ENV_API_HOSTNAME)
    if api_base:
        cfg["api_base"] = api_base

    timeout = os.getenv(ENV_TIMEOUT)
    if timeout:
        try:
            cfg["timeout"] = float(timeout)
        except ValueError:
            raise ValueError(f"{ENV_TIMEOUT} must be a number, got '{timeout}'")

    return Settings.from_dict(cfg)
