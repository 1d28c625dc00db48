from config import Settings


def test_settings_defaults(monkeypatch):
    for name in ("REALESTATE_API_URL", "REQUEST_TIMEOUT_S", "ENV", "LOG_LEVEL", "SHOW_TEST_DATA_BUTTON"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.REALESTATE_API_URL == "http://localhost:8000/api/v1/analysis"
    assert settings.REQUEST_TIMEOUT_S == 30.0
    assert settings.ENV == "dev"
    assert settings.SHOW_TEST_DATA_BUTTON is True


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("REQUEST_TIMEOUT_S", "5")
    monkeypatch.setenv("ENV", "prod")

    settings = Settings(_env_file=None)

    assert settings.REQUEST_TIMEOUT_S == 5.0
    assert settings.ENV == "prod"
