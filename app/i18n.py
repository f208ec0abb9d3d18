"""Localization context passed explicitly to anything that renders user text."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any

from app.models.enums import LanguageCode

DEFAULT_LANGUAGE = LanguageCode.en
_LOCALES_DIR = Path(__file__).resolve().parent / "locales"

LANGUAGE_NAMES: dict[LanguageCode, str] = {
	LanguageCode.en: "English",
	LanguageCode.hi: "हिंदी",
	LanguageCode.bho: "भोजपुरी",
	LanguageCode.bn: "বাংলা",
	LanguageCode.te: "తెలుగు",
	LanguageCode.mr: "मराठी",
	LanguageCode.ta: "தமிழ்",
	LanguageCode.ur: "اردو",
	LanguageCode.gu: "ગુજરાતી",
	LanguageCode.kn: "ಕನ್ನಡ",
	LanguageCode.or_: "ଓଡ଼ିଆ",
	LanguageCode.ml: "മലയാളം",
	LanguageCode.pa: "ਪੰਜਾਬੀ",
}


def resolve_language(value: Any) -> LanguageCode:
	"""Map any input to a supported code, defaulting to English."""
	if isinstance(value, LanguageCode):
		return value
	if isinstance(value, str):
		try:
			return LanguageCode(value.strip().lower())
		except ValueError:
			return DEFAULT_LANGUAGE
	return DEFAULT_LANGUAGE


@lru_cache
def load_translations(language: LanguageCode) -> dict[str, str]:
	path = _LOCALES_DIR / f"{language.value}.json"
	if not path.exists():
		return {}
	return json.loads(path.read_text(encoding="utf-8"))


@dataclass(frozen=True)
class I18nContext:
	language: LanguageCode = DEFAULT_LANGUAGE
	fallback: dict[str, str] = field(default_factory=lambda: load_translations(DEFAULT_LANGUAGE))

	@classmethod
	def for_language(cls, value: Any) -> I18nContext:
		return cls(language=resolve_language(value))

	@property
	def language_name(self) -> str:
		return LANGUAGE_NAMES[self.language]

	def t(self, key: str) -> str:
		"""Translate ``key``; missing entries fall back to English, then the key."""
		translated = load_translations(self.language).get(key)
		if translated:
			return translated
		return self.fallback.get(key, key)
