"""Tests for scriptmark.config -- Settings, sub-models, env loading.

Every test constructs Settings(_env_file=None, ...) to avoid reading real .env files.
The _env_file parameter is a pydantic-settings internal not visible to ty.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from scriptmark.config import (
    _PROJECT_ROOT,
    DEFAULT_CSS_TEMPLATE,
    DEFAULT_FONTS,
    DEFAULT_HTML_HEAD_TEMPLATE,
    AppConfig,
    ExportConfig,
    Settings,
    get_settings,
)


def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove any EXPORT__/APP__ variables pydantic-settings would read."""
    for key in list(os.environ):
        if key.startswith(("EXPORT__", "APP__")):
            monkeypatch.delenv(key, raising=False)


def _no_env_file(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make get_settings() construct Settings without reading a .env file."""
    import scriptmark.config as config_module

    original_init = config_module.Settings.__init__

    def _patched_init(self: object, *args: object, **kwargs: object) -> None:
        kwargs.setdefault("_env_file", None)
        original_init(self, *args, **kwargs)  # type: ignore[invalid-argument-type]

    monkeypatch.setattr(config_module.Settings, "__init__", _patched_init)


class TestDefaults:
    """Settings with no env file and no env vars uses defaults."""

    def test_export_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _clear_env(monkeypatch)
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.export.default_document_name == "Untitled"
        assert s.export.html_head_template == DEFAULT_HTML_HEAD_TEMPLATE
        assert s.export.css_template == DEFAULT_CSS_TEMPLATE
        assert s.export.fonts == DEFAULT_FONTS
        assert s.export.use_inline_style is False
        assert s.app.log_dir == Path("logs")

    def test_default_head_template_placeholders(self) -> None:
        for key in ("tool-version", "host-version", "htmlfile", "title", "stylesheet"):
            assert f"${{{key}}}" in DEFAULT_HTML_HEAD_TEMPLATE

    def test_fonts_not_shared_between_instances(self) -> None:
        a = ExportConfig()
        a.fonts.append("Fixedsys")
        assert ExportConfig().fonts == DEFAULT_FONTS


class TestTypeValidation:
    """Pydantic type validation on Settings construction."""

    def test_valid_typed_values_populate_all_fields(self) -> None:
        s = Settings(
            _env_file=None,  # type: ignore[call-arg]
            export=ExportConfig(
                html_head_template="<html>${title}",
                default_document_name="Draft",
                css_template="p { font: ${font}; }",
                fonts=["Courier"],
                use_inline_style=True,
            ),
            app=AppConfig(log_dir=Path("/tmp/logs")),
        )
        assert s.export.html_head_template == "<html>${title}"
        assert s.export.default_document_name == "Draft"
        assert s.export.css_template == "p { font: ${font}; }"
        assert s.export.fonts == ["Courier"]
        assert s.export.use_inline_style is True
        assert s.app.log_dir == Path("/tmp/logs")

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("true", True),
            ("false", False),
            ("1", True),
            ("0", False),
            ("yes", True),
            ("no", False),
        ],
    )
    def test_bool_coercion(self, raw: str, expected: bool) -> None:
        cfg = ExportConfig(use_inline_style=raw)  # type: ignore[arg-type]
        assert cfg.use_inline_style is expected

    @pytest.mark.parametrize("name", ["", "   "], ids=["empty", "blank"])
    def test_blank_document_name_rejected(self, name: str) -> None:
        with pytest.raises(ValidationError, match="must not be blank"):
            ExportConfig(default_document_name=name)


class TestEnvironment:
    """Nested env vars with the double-underscore delimiter."""

    def test_document_name_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _clear_env(monkeypatch)
        monkeypatch.setenv("EXPORT__DEFAULT_DOCUMENT_NAME", "Screenplay")
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.export.default_document_name == "Screenplay"

    def test_inline_style_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _clear_env(monkeypatch)
        monkeypatch.setenv("EXPORT__USE_INLINE_STYLE", "true")
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.export.use_inline_style is True

    def test_fonts_from_env_json(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _clear_env(monkeypatch)
        monkeypatch.setenv("EXPORT__FONTS", '["Courier", "monospace"]')
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.export.fonts == ["Courier", "monospace"]

    def test_log_dir_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _clear_env(monkeypatch)
        monkeypatch.setenv("APP__LOG_DIR", "/var/log/scriptmark")
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.app.log_dir == Path("/var/log/scriptmark")

    def test_project_root_env_in_config(self) -> None:
        assert Settings.model_config.get("env_file") == _PROJECT_ROOT / ".env"


class TestSingleton:
    """get_settings() caching and logging."""

    def test_cache_clear_resets_singleton(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _no_env_file(monkeypatch)
        a = get_settings()
        b = get_settings()
        assert a is b, "Cached calls should return same instance"

        get_settings.cache_clear()
        c = get_settings()
        assert a is not c, "After cache_clear, should return new instance"

    def test_get_settings_logs_env_file(
        self,
        caplog: pytest.LogCaptureFixture,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        _no_env_file(monkeypatch)
        with caplog.at_level(logging.INFO, logger="scriptmark.config"):
            get_settings()
        messages = [r.message for r in caplog.records]
        assert any("Settings" in m and ".env" in m for m in messages), (
            f"Expected INFO log about .env, got: {messages}"
        )
