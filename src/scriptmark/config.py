"""Centralised configuration using pydantic-settings.

All environment variables are read through the Settings class.
Consumers call ``get_settings()`` to obtain a cached, validated instance.
Tests construct ``Settings(_env_file=None, ...)`` directly for isolation.

The export core never reads settings itself: callers pass an
``ExportConfig`` into ``export_html`` explicitly.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# src/scriptmark/config.py  ->  parent x3  ->  project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


# ---------------------------------------------------------------------------
# Default templates
# ---------------------------------------------------------------------------
DEFAULT_HTML_HEAD_TEMPLATE = """\
<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<meta name="generator" content="ScriptMark ${tool-version} (${host-version})">
<title>${title}</title>
<link rel="canonical" href="${htmlfile}">
${stylesheet}
</head>
<body>
"""

DEFAULT_CSS_TEMPLATE = """\
#scriptmark {
    font-family: ${font};
    font-size: 12pt;
    line-height: 1.1;
    width: 6in;
    margin: 1in auto;
}
#scriptmark h1,
#scriptmark h2,
#scriptmark p {
    font-size: inherit;
    font-weight: inherit;
    margin: 1em 0;
}
#scriptmark .scene-heading {
    text-transform: uppercase;
    font-weight: bold;
}
#scriptmark .action {
    text-align: left;
}
#scriptmark .character {
    margin: 1em 0 0 2in;
    text-transform: uppercase;
}
#scriptmark .dialog {
    margin: 0 1.5in 1em 1in;
}
#scriptmark .paren {
    margin: 0 2in 0 1.5in;
}
#scriptmark .trans {
    margin-left: 4in;
    text-transform: uppercase;
}
#scriptmark .center {
    text-align: center;
}
#scriptmark .section,
#scriptmark .synopsis,
#scriptmark .note {
    color: #808080;
}
"""

DEFAULT_FONTS = ["Courier Prime", "Courier", "Courier New", "monospace"]


# ---------------------------------------------------------------------------
# Sub-models (one per configuration domain)
# ---------------------------------------------------------------------------
class ExportConfig(BaseModel):
    """HTML export templates and naming."""

    html_head_template: str = DEFAULT_HTML_HEAD_TEMPLATE
    default_document_name: str = "Untitled"
    css_template: str = DEFAULT_CSS_TEMPLATE
    fonts: list[str] = list(DEFAULT_FONTS)
    use_inline_style: bool = False

    @field_validator("default_document_name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            msg = "EXPORT__DEFAULT_DOCUMENT_NAME must not be blank"
            raise ValueError(msg)
        return value


class AppConfig(BaseModel):
    """Application runtime configuration."""

    log_dir: Path = Path("logs")


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------
class Settings(BaseSettings):
    """Settings with automatic .env loading and type validation.

    Environment variables use double-underscore delimiter for nesting:
    ``EXPORT__DEFAULT_DOCUMENT_NAME``, ``EXPORT__USE_INLINE_STYLE``,
    ``APP__LOG_DIR``, etc.
    """

    model_config = SettingsConfigDict(
        env_file=_PROJECT_ROOT / ".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    export: ExportConfig = ExportConfig()
    app: AppConfig = AppConfig()


# ---------------------------------------------------------------------------
# Singleton access
# ---------------------------------------------------------------------------
@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Call ``get_settings.cache_clear()`` in tests to reset.
    """
    settings = Settings()

    env_file = settings.model_config.get("env_file")
    if env_file is not None and Path(str(env_file)).is_file():
        logger.info("Settings loaded .env from: %s", env_file)
    else:
        logger.info("Settings: no .env file found, using env vars and defaults")

    return settings
