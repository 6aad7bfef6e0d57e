"""
Configuration Tests
"""

import dataclasses

import pytest

from shared.config import DEFAULT_BREACH_API_URL, GaugeConfig, PwGaugeConfig, get_config


class TestPwGaugeConfig:
    """Tests for TOML loading."""

    def test_defaults(self):
        config = PwGaugeConfig()
        assert config.gauge.breach_check_enabled is True
        assert config.gauge.breach_api_url == DEFAULT_BREACH_API_URL
        assert config.global_settings.log_level == "WARNING"

    def test_load_from_toml(self, tmp_path):
        path = tmp_path / "gauge.toml"
        path.write_text(
            '[global]\n'
            'log_level = "DEBUG"\n'
            '\n'
            '[gauge]\n'
            'breach_check_enabled = false\n'
            'breach_timeout = 2.5\n'
            'context_words = ["alice", "acme"]\n'
            'future_option = 1\n',
            encoding="utf-8",
        )
        config = PwGaugeConfig.load(path)

        assert config.global_settings.log_level == "DEBUG"
        assert config.gauge.breach_check_enabled is False
        assert config.gauge.breach_timeout == 2.5
        assert config.gauge.context_words == ("alice", "acme")

    def test_missing_explicit_path_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            PwGaugeConfig.load(tmp_path / "absent.toml")

    def test_to_dict(self):
        data = PwGaugeConfig().to_dict()
        assert data["gauge"]["breach_add_padding"] is True


class TestGaugeConfig:
    """Tests for the frozen tool section."""

    def test_frozen(self):
        config = GaugeConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.breach_check_enabled = False

    def test_with_context_returns_copy(self):
        config = GaugeConfig(context_words=("alice",))
        updated = config.with_context(["acme", ""])

        assert updated.context_words == ("alice", "acme")
        assert config.context_words == ("alice",)

    def test_with_context_no_words_is_identity(self):
        config = GaugeConfig()
        assert config.with_context([]) is config


class TestGetConfig:
    def test_cached_until_path_given(self, tmp_path):
        first = get_config()
        assert get_config() is first

        path = tmp_path / "other.toml"
        path.write_text('[gauge]\noutput_format = "json"\n', encoding="utf-8")
        reloaded = get_config(path)

        assert reloaded is not first
        assert reloaded.gauge.output_format == "json"
        assert get_config() is reloaded
