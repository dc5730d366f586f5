from __future__ import annotations

"""
Configuration Validation Service.

Checks a raw settings dictionary (stored file merged with command-line
overrides) against the treefs settings schema. Lenient mode coerces what it
can and reports every repair as a warning; strict mode raises instead.
"""

import logging
from typing import Any, Callable, Dict, List, Tuple

from treefs.domain.config import get_default_config
from treefs.infra.fs import normalize_path
from treefs.infra.logging.config import LOG_LEVELS
from treefs.utils.i18n import i18n

logger = logging.getLogger(__name__)

_TRUE_WORDS = ("true", "1", "yes", "y", "on")
_FALSE_WORDS = ("false", "0", "no", "n", "off")

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a treefs settings dictionary.

    Args:
        config: Raw settings, usually a dictionary.
        strict: Raise on the first invalid value instead of repairing it.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Clean settings and repair warnings.

    Raises:
        TypeError: In strict mode, for a non-dict input or a wrongly typed value.
        ValueError: In strict mode, for an unknown log level or locale.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Settings must be a dict, got {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        logger.warning(msg)
        warnings.append(f"{msg} Using defaults.")
        return defaults, warnings

    clean: Dict[str, Any] = {}
    for key, default in defaults.items():
        check = _SCHEMA[key]
        clean[key] = check(config.get(key), default, key, warnings, strict)

    for key in sorted(set(config) - set(defaults)):
        warnings.append(f"Unknown setting '{key}' ignored.")

    return clean, warnings

# -----------------------------------------------------------------------------
# FIELD CHECKS
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, key: str, warnings: List[str], strict: bool) -> str:
    """Text setting. Whitespace is kept since prompts usually end in a space."""
    if value is None:
        return fallback
    if isinstance(value, str):
        return value if value.strip() else fallback

    msg = f"Setting '{key}' must be text, got {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using '{fallback}'.")
    return fallback


def _as_bool(value: Any, fallback: bool, key: str, warnings: List[str], strict: bool) -> bool:
    if value is None:
        return fallback
    if isinstance(value, bool):
        return value

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Setting '{key}' read {value!r} as {bool(value)}.")
            return bool(value)
        if isinstance(value, str):
            word = value.strip().lower()
            if word in _TRUE_WORDS or word in _FALSE_WORDS:
                result = word in _TRUE_WORDS
                warnings.append(f"Setting '{key}' read {value!r} as {result}.")
                return result

    msg = f"Setting '{key}' must be true or false, got {value!r}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using {fallback}.")
    return fallback


def _as_path(value: Any, fallback: str, key: str, warnings: List[str], strict: bool) -> str:
    return normalize_path(_as_str(value, fallback, key, warnings, strict), fallback)


def _as_level(value: Any, fallback: str, key: str, warnings: List[str], strict: bool) -> str:
    name = _as_str(value, fallback, key, warnings, strict).strip().upper()
    if name in LOG_LEVELS:
        return name

    msg = f"Unknown log level '{value}'."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using {fallback}.")
    return fallback


def _as_locale(value: Any, fallback: str, key: str, warnings: List[str], strict: bool) -> str:
    locale = _as_str(value, fallback, key, warnings, strict).strip()
    if locale in i18n.available_locales():
        return locale

    msg = f"No messages available for locale '{locale}'."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using {fallback}.")
    return fallback


_SCHEMA: Dict[str, Callable[[Any, Any, str, List[str], bool], Any]] = {
    "snapshot_path": _as_path,
    "autoload": _as_bool,
    "autosave": _as_bool,
    "prompt_prefix": _as_str,
    "locale": _as_locale,
    "log_level": _as_level,
    "log_to_file": _as_bool,
}
