import pytest
from pydantic import ValidationError

from rxquant.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings()
        assert s.app_env == "dev"

    def test_default_directory_provider(self) -> None:
        s = Settings()
        assert s.directory_provider == "example"

    def test_default_api_urls(self) -> None:
        s = Settings()
        assert s.rxnorm_api_base_url == "https://rxnav.nlm.nih.gov/REST"
        assert s.fda_api_base_url == "https://api.fda.gov/drug/ndc.json"

    def test_default_directory_timeout(self) -> None:
        s = Settings()
        assert s.directory_timeout_seconds == 10

    def test_default_matching_options(self) -> None:
        s = Settings()
        assert s.max_alternatives == 5
        assert s.allow_multiple_packages is True
        assert s.relax_tolerance_when_unmatched is False

    def test_inactive_packages_included_by_default(self) -> None:
        s = Settings()
        assert s.include_inactive_packages is True


class TestSettingsFromEnv:
    def test_loads_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        s = Settings()
        assert s.log_level == "DEBUG"

    def test_loads_directory_provider(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DIRECTORY_PROVIDER", "live")
        s = Settings()
        assert s.directory_provider == "live"

    def test_loads_max_alternatives(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAX_ALTERNATIVES", "3")
        s = Settings()
        assert s.max_alternatives == 3

    def test_loads_relaxed_tolerance_flag(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RELAX_TOLERANCE_WHEN_UNMATCHED", "true")
        s = Settings()
        assert s.relax_tolerance_when_unmatched is True


class TestSettingsValidation:
    def test_invalid_timeout_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DIRECTORY_TIMEOUT_SECONDS", "not_a_number")
        with pytest.raises(ValidationError):
            Settings()

    def test_invalid_result_limit_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FDA_RESULT_LIMIT", "abc")
        with pytest.raises(ValidationError):
            Settings()
