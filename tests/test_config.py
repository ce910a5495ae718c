"""Tests for environment-driven settings."""
import pytest

from price_alert_monitor.config import get_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults(monkeypatch):
    for name in ("ENVIRONMENT", "ALERT_PRICE_CHUNK_SIZE", "ALERT_PRICE_CHUNK_DELAY_MS",
                 "FOREIGN_PRICE_VENDOR", "SITE_URL"):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.is_production is False
    assert settings.price_chunk_size == 5
    assert settings.price_chunk_delay == pytest.approx(0.1)
    assert settings.foreign_price_vendor == "kis"


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "Production")
    monkeypatch.setenv("CRON_SECRET", " s3cret ")
    monkeypatch.setenv("ALERT_PRICE_CHUNK_SIZE", "10")
    monkeypatch.setenv("ALERT_PRICE_CHUNK_DELAY_MS", "250")
    monkeypatch.setenv("FOREIGN_PRICE_VENDOR", "Finnhub")
    monkeypatch.setenv("SITE_URL", "https://example.com/")

    settings = get_settings()

    assert settings.is_production is True
    assert settings.cron_secret == "s3cret"
    assert settings.price_chunk_size == 10
    assert settings.price_chunk_delay == pytest.approx(0.25)
    assert settings.foreign_price_vendor == "finnhub"
    assert settings.site_url == "https://example.com"


def test_bad_numbers_fall_back(monkeypatch):
    monkeypatch.setenv("ALERT_PRICE_CHUNK_SIZE", "0")
    monkeypatch.setenv("ALERT_PRICE_CHUNK_DELAY_MS", "soon")

    settings = get_settings()

    assert settings.price_chunk_size == 1
    assert settings.price_chunk_delay == pytest.approx(0.1)
