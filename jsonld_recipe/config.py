"""Runtime configuration for the extraction service."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import logging
import os
from typing import Mapping


DEFAULT_FETCH_TIMEOUT_SECONDS = 10.0
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)
DEFAULT_LOG_LEVEL = "INFO"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(*, name: str, raw_value: str) -> bool:
    value = raw_value.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be one of: true, false, 1, 0, yes, no, on, off")


def _parse_positive_float(*, name: str, raw_value: str) -> float:
    try:
        value = float(raw_value)
    except ValueError:
        raise ValueError(f"{name} must be a number") from None
    if value <= 0:
        raise ValueError(f"{name} must be > 0")
    return value


@dataclass(frozen=True, slots=True)
class Settings:
    """Validated settings for fetching pages and reading their JSON-LD."""

    fetch_timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS
    user_agent: str = DEFAULT_USER_AGENT
    strict_jsonld: bool = True
    expand_graph: bool = False
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        source: Mapping[str, str] = os.environ if environ is None else environ

        timeout_raw = source.get(
            "RECIPE_FETCH_TIMEOUT_SECONDS", str(DEFAULT_FETCH_TIMEOUT_SECONDS)
        ).strip()
        user_agent = source.get("RECIPE_USER_AGENT", DEFAULT_USER_AGENT).strip()
        strict_raw = source.get("RECIPE_JSONLD_STRICT", "true")
        graph_raw = source.get("RECIPE_EXPAND_GRAPH", "false")
        log_level = source.get("RECIPE_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()

        if not user_agent:
            raise ValueError("RECIPE_USER_AGENT cannot be empty")
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"RECIPE_LOG_LEVEL is not a logging level: {log_level!r}")

        return cls(
            fetch_timeout_seconds=_parse_positive_float(
                name="RECIPE_FETCH_TIMEOUT_SECONDS", raw_value=timeout_raw
            ),
            user_agent=user_agent,
            strict_jsonld=_parse_bool(name="RECIPE_JSONLD_STRICT", raw_value=strict_raw),
            expand_graph=_parse_bool(name="RECIPE_EXPAND_GRAPH", raw_value=graph_raw),
            log_level=log_level,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
