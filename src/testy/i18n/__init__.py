"""Message catalog lookup for console output."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from importlib.resources import files
from typing import Any

import yaml

DEFAULT_LANGUAGE = "en"

logger = logging.getLogger("testy.i18n")


@lru_cache(maxsize=None)
def load_catalog() -> dict[str, dict[str, str]]:
    """Load the bundled translations, keyed by language then message key."""
    raw = (files("testy.i18n") / "translations.yaml").read_text(encoding="utf-8")
    return yaml.safe_load(raw) or {}


def supported_languages() -> list[str]:
    return sorted(load_catalog())


@dataclass(frozen=True)
class I18nMessage:
    """A message identified by a stable key plus positional, already rendered arguments."""

    key: str
    params: tuple[str, ...] = ()

    @classmethod
    def of(cls, key: str, *params: Any) -> I18nMessage:
        return cls(key, tuple(str(p) for p in params))

    def expressed_in(self, i18n: I18n) -> str:
        return i18n.translate(self.key, *self.params)

    def __str__(self) -> str:
        return self.expressed_in(I18n.default())


class I18n:
    def __init__(self, language: str = DEFAULT_LANGUAGE):
        catalog = load_catalog()
        if language not in catalog:
            raise ValueError(
                f"Unsupported language: {language!r}. "
                f"Available: {', '.join(sorted(catalog))}"
            )
        self.language = language
        self._catalog = catalog

    @classmethod
    def default(cls) -> I18n:
        return cls(DEFAULT_LANGUAGE)

    def translate(self, key: str, *params: Any) -> str:
        template = self._catalog[self.language].get(key)
        if template is None:
            template = self._catalog[DEFAULT_LANGUAGE].get(key)
        if template is None:
            logger.debug(f"Missing translation for key '{key}'")
            return key
        return template.format(*params)

    def render(self, text: I18nMessage | str | None) -> str:
        """Render either a plain string or a message in this language."""
        if text is None:
            return ""
        if isinstance(text, I18nMessage):
            return text.expressed_in(self)
        return text
