from __future__ import annotations

"""
Message Catalogue.

Every user-facing string of the shell and the CLI lives in a JSON locale
file under ``interface/locales``. Keys use dot notation (``shell.unknown``)
and values are ``str.format`` templates. A key missing from the active
locale is looked up in English, and as a last resort the key itself is shown.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

BASE_LOCALE = "en"
LOCALES_DIR = os.path.abspath(
    os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "interface", "locales")
)


def _read_catalogue(path: str) -> Optional[Dict[str, Any]]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        logger.warning(f"I18n: cannot read '{path}': {e}")
        return None
    except ValueError as e:
        logger.error(f"I18n: '{path}' is not valid JSON: {e}")
        return None
    if not isinstance(data, dict):
        logger.error(f"I18n: '{path}' must hold a JSON object.")
        return None
    return data


def _lookup(catalogue: Dict[str, Any], key: str) -> Optional[str]:
    node: Any = catalogue
    for part in key.split("."):
        if not isinstance(node, dict):
            return None
        node = node.get(part)
    return node if isinstance(node, str) else None


class I18n:
    """
    Locale-aware resolver for message keys.

    Attributes:
        is_loaded: True once any catalogue (active or base) is available.
    """

    def __init__(self, locale: str = BASE_LOCALE, locales_path: str = LOCALES_DIR):
        self._locales_path = locales_path
        self._locale = BASE_LOCALE
        self._active: Dict[str, Any] = {}
        self._base: Dict[str, Any] = {}
        self.is_loaded = False

        self.load_locale(locale)

    @property
    def locale(self) -> str:
        return self._locale

    def available_locales(self) -> List[str]:
        """Locale identifiers that have a catalogue file."""
        if not os.path.isdir(self._locales_path):
            return []
        return sorted(
            name[:-len(".json")]
            for name in os.listdir(self._locales_path)
            if name.endswith(".json")
        )

    def load_locale(self, locale: str) -> bool:
        """
        Switch the active catalogue.

        On failure the previous locale stays active.

        Returns:
            bool: True if the locale was switched.
        """
        catalogue = _read_catalogue(os.path.join(self._locales_path, f"{locale}.json"))
        if catalogue is None:
            return False

        if locale == BASE_LOCALE:
            self._base = catalogue
        elif not self._base:
            self._base = _read_catalogue(os.path.join(self._locales_path, f"{BASE_LOCALE}.json")) or {}

        self._active = catalogue
        self._locale = locale
        self.is_loaded = True
        logger.debug(f"I18n: active locale is now '{locale}'")
        return True

    def t(self, key: str, **kwargs: Any) -> str:
        """
        Resolve ``key`` and fill in its placeholders.

        Args:
            key: Dot-notation message key.
            **kwargs: Placeholder values.

        Returns:
            str: The message. A template whose placeholders cannot be filled is
            returned unformatted; an unknown key is returned as-is.
        """
        template = _lookup(self._active, key)
        if template is None:
            template = _lookup(self._base, key)
        if template is None:
            return key

        if not kwargs:
            return template
        try:
            return template.format(**kwargs)
        except (KeyError, IndexError) as e:
            logger.debug(f"I18n: missing placeholder {e} for '{key}'")
            return template


# Shared instance used by the CLI and the shell
i18n = I18n()
