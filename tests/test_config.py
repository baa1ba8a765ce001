from coupon_api.config import configure_logging, get_settings


def test_defaults(monkeypatch):
    for name in ["APP_ENV", "HOST", "PORT", "LOG_LEVEL", "SEED_COUPONS"]:
        monkeypatch.delenv(name, raising=False)
    settings = get_settings()
    assert settings.is_development
    assert settings.port == 8000
    assert settings.log_level == "INFO"
    assert settings.seed_coupons is False


def test_log_level_is_normalised(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert get_settings().log_level == "DEBUG"


def test_unknown_log_level_falls_back_to_info(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "VERBOSE")
    settings = get_settings()
    assert settings.log_level == "INFO"
    configure_logging(settings.log_level)


def test_production_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setenv("SEED_COUPONS", "yes")
    settings = get_settings()
    assert not settings.is_development
    assert settings.seed_coupons is True
