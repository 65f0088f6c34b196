"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, fieldhooks.toml only contains
overrides. A fresh site needs no configuration at all.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from fieldhooks.domain.text import TextProcessing
from fieldhooks.domain.textproc import DEFAULT_ALLOWED_TAGS
from fieldhooks.infrastructure.resolution import DEFAULT_MENU_PREFIX

# --- fieldhooks.toml sections ---


class SiteConfig(BaseModel):
    """[site] section."""

    model_config = {"frozen": True}

    title: str = "My Site"
    description: str = ""
    locale: str = "en"
    locale_dir: Path | None = None


class TemplatesConfig(BaseModel):
    """[templates] section."""

    model_config = {"frozen": True}

    override_dir: Path | None = None
    menu_prefix: str = DEFAULT_MENU_PREFIX
    default_view_mode: str = "default"


class TextConfig(BaseModel):
    """[text] section."""

    model_config = {"frozen": True}

    allowed_tags: list[str] = Field(default_factory=lambda: list(DEFAULT_ALLOWED_TAGS))
    default_processing: TextProcessing = "plain"


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    disabled: list[str] = Field(default_factory=list)
    local_discovery: bool = True

