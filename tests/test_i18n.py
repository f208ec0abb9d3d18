from __future__ import annotations

import pytest

from app.i18n import I18nContext, resolve_language
from app.models.enums import LanguageCode


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("hi", LanguageCode.hi),
        (" OR ", LanguageCode.or_),
        ("bho", LanguageCode.bho),
        ("", LanguageCode.en),
        ("fr", LanguageCode.en),
        (None, LanguageCode.en),
        (42, LanguageCode.en),
    ],
)
def test_resolve_language(value: object, expected: LanguageCode) -> None:
    assert resolve_language(value) == expected


def test_translation_falls_back_to_english() -> None:
    tamil = I18nContext.for_language("ta")
    assert tamil.t("errorOccurred") == "An error occurred"
    assert tamil.language_name == "தமிழ்"


def test_translation_uses_language_table_and_unknown_keys() -> None:
    hindi = I18nContext.for_language("hi")
    assert hindi.t("quintals") == "क्विंटल"
    assert hindi.t("noSuchKey") == "noSuchKey"
