"""Utility helpers shared by the ServerHi configuration loader."""

from __future__ import annotations

import json
import typing as typ

from .models import DEFAULT_DARK_COLORS, DEFAULT_LIGHT_COLORS, ConfigError, ThemeConfig

if typ.TYPE_CHECKING:
    from pathlib import Path


def _read_json(path: Path) -> dict[str, typ.Any]:
    """Read a JSON object from ``path`` or raise :class:`ConfigError`."""
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise ConfigError(msg)
    try:
        loaded = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        msg = f"Configuration file '{path}' is not valid JSON: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(loaded, dict):
        msg = f"Configuration file '{path}' must contain a JSON object."
        raise ConfigError(msg)
    return loaded


def _required_str(payload: typ.Mapping[str, typ.Any], key: str, source: str) -> str:
    """Return a stripped, non-empty string for ``key`` or raise ConfigError."""
    if key not in payload:
        msg = f"Missing required key '{key}' in {source}."
        raise ConfigError(msg)
    value = payload[key]
    if not isinstance(value, str) or not value.strip():
        msg = f"Key '{key}' in {source} must be a non-empty string."
        raise ConfigError(msg)
    return value.strip()


def _optional_str(
    payload: typ.Mapping[str, typ.Any], key: str, default: str, source: str
) -> str:
    """Return a stripped string for ``key`` when present, otherwise ``default``."""
    if payload.get(key) is None:
        return default
    return _required_str(payload, key, source)


def _optional_int(
    payload: typ.Mapping[str, typ.Any],
    key: str,
    default: int,
    source: str,
    *,
    minimum: int = 0,
) -> int:
    """Return an integer for ``key`` no smaller than ``minimum``."""
    value = payload.get(key)
    if value is None:
        return default
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"Key '{key}' in {source} must be an integer."
        raise ConfigError(msg)
    if value < minimum:
        msg = f"Key '{key}' in {source} must be at least {minimum}."
        raise ConfigError(msg)
    return value


def _color_tokens(
    payload: object, defaults: typ.Mapping[str, str], source: str
) -> dict[str, str]:
    """Merge a mapping of colour tokens over ``defaults``."""
    if payload is None:
        return dict(defaults)
    if not isinstance(payload, dict):
        msg = f"Colour tokens in {source} must be an object."
        raise ConfigError(msg)
    merged = dict(defaults)
    for token, value in payload.items():
        if not isinstance(value, str):
            msg = f"Colour token '{token}' in {source} must be a string."
            raise ConfigError(msg)
        merged[str(token)] = value
    return merged


def _build_theme_config(payload: typ.Mapping[str, typ.Any] | None) -> ThemeConfig:
    """Build a ThemeConfig instance from the ``theme.json`` payload."""
    if not payload:
        return ThemeConfig()
    colors = payload.get("colors") or {}
    if not isinstance(colors, dict):
        msg = "Key 'colors' in theme.json must be an object."
        raise ConfigError(msg)
    return ThemeConfig(
        dark=_color_tokens(colors.get("dark"), DEFAULT_DARK_COLORS, "theme.json dark"),
        light=_color_tokens(
            colors.get("light"), DEFAULT_LIGHT_COLORS, "theme.json light"
        ),
    )


__all__ = [
    "_build_theme_config",
    "_optional_int",
    "_optional_str",
    "_read_json",
    "_required_str",
]
