import pytest

from afterbuy_client.config.settings import DEFAULT_API_URL, Settings, get_settings


@pytest.mark.unit
def test_credentials_read_from_environment():
    settings = Settings()
    assert settings.user_id == "test-user"
    assert settings.partner_id == 1234
    assert settings.partner_password == "test-partner-secret"
    assert settings.missing_credentials == []


@pytest.mark.unit
def test_defaults(monkeypatch):
    monkeypatch.delenv("AFTERBUY_ERROR_LANGUAGE", raising=False)
    monkeypatch.delenv("AFTERBUY_LOG_LEVEL", raising=False)

    settings = Settings()
    assert settings.api_url == DEFAULT_API_URL
    assert settings.timeout == 30.0
    assert settings.timezone == "Europe/Berlin"
    assert settings.error_language == "DE"
    assert settings.log_level == "INFO"


@pytest.mark.unit
def test_values_are_normalized(monkeypatch):
    monkeypatch.setenv("AFTERBUY_ERROR_LANGUAGE", " en ")
    monkeypatch.setenv("AFTERBUY_LOG_LEVEL", "debug")

    settings = Settings()
    assert settings.error_language == "EN"
    assert settings.log_level == "DEBUG"


@pytest.mark.unit
def test_missing_credentials_are_listed(monkeypatch):
    monkeypatch.delenv("AFTERBUY_USER_ID")
    monkeypatch.setenv("AFTERBUY_USER_PASSWORD", "")

    assert Settings().missing_credentials == ["AFTERBUY_USER_ID", "AFTERBUY_USER_PASSWORD"]


@pytest.mark.unit
def test_invalid_timeout_is_rejected(monkeypatch):
    monkeypatch.setenv("AFTERBUY_TIMEOUT", "0")
    with pytest.raises(ValueError):
        Settings()


@pytest.mark.unit
def test_get_settings_is_cached():
    assert get_settings() is get_settings()
