"""Tests for the gettext-backed translator."""

from __future__ import annotations

from pathlib import Path

from fieldhooks.infrastructure.translation import Translator


class TestTranslator:
    def test_untranslated_passthrough(self) -> None:
        assert Translator().translate("field", "Field required.") == "Field required."

    def test_args_applied(self) -> None:
        t = Translator()
        assert t("field", "Max. %s characters length.", 20) == "Max. 20 characters length."

    def test_missing_catalog_falls_back(self, tmp_path: Path) -> None:
        t = Translator(locale="fr", locale_dir=tmp_path)
        assert t.translate("field", "Invalid field.") == "Invalid field."
        assert t.locale == "fr"
