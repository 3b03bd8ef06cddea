"""
Unit Tests for Sanitizer.
"""

from __future__ import annotations

from rulecheck.core.config import Config
from rulecheck.security.sanitizer import Sanitizer, SanitizerConfig, sanitize


class TestSanitizer:

    def test_escapes_all_metacharacters(self) -> None:
        sanitizer = Sanitizer(SanitizerConfig())

        assert sanitizer.string("& < > \" '") == "&amp; &lt; &gt; &quot; &#x27;"

    def test_trims_before_escaping(self) -> None:
        assert Sanitizer(SanitizerConfig()).string("\n\t <b> \r\n") == "&lt;b&gt;"

    def test_non_strings_unchanged(self) -> None:
        sanitizer = Sanitizer(SanitizerConfig())
        marker = object()

        assert sanitizer.value(25) == 25
        assert sanitizer.value(None) is None
        assert sanitizer.value(marker) is marker

    def test_mapping_returns_new_dict(self) -> None:
        data = {"bio": " <i>x</i> ", "age": 3}

        result = sanitize(data)

        assert result == {"bio": "&lt;i&gt;x&lt;/i&gt;", "age": 3}
        assert result is not data
        assert data["bio"] == " <i>x</i> "

    def test_trim_can_be_disabled(self) -> None:
        sanitizer = Sanitizer(SanitizerConfig(trim_whitespace=False))

        assert sanitizer.string(" a ") == " a "

    def test_quotes_can_be_left_alone(self) -> None:
        sanitizer = Sanitizer(SanitizerConfig(escape_quotes=False))

        assert sanitizer.string("\"<it's>\"") == "\"&lt;it's&gt;\""


class TestSanitizerConfig:

    def test_defaults_from_config(self) -> None:
        config = SanitizerConfig.from_config(Config(environ={}))

        assert config.trim_whitespace is True
        assert config.escape_quotes is True

    def test_environment_overrides(self) -> None:
        config = SanitizerConfig.from_config(
            Config(environ={"RULECHECK_SANITIZER_TRIM_WHITESPACE": "false"})
        )

        assert config.trim_whitespace is False
        assert config.escape_quotes is True

    def test_default_sanitizer_ignores_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("RULECHECK_SANITIZER_ESCAPE_QUOTES", "no")
        monkeypatch.setenv("RULECHECK_SANITIZER_TRIM_WHITESPACE", "false")

        assert Sanitizer().string(" 'x' ") == "&#x27;x&#x27;"

    def test_from_config_reads_global_config(self, monkeypatch) -> None:
        monkeypatch.setenv("RULECHECK_SANITIZER_ESCAPE_QUOTES", "no")

        assert Sanitizer.from_config().string(" 'x' ") == "'x'"
