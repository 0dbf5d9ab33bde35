"""Tests for configuration helpers."""

from door_access.config import Settings, parse_timezone


def test_parse_timezone() -> None:
    assert parse_timezone("Asia/Hong_Kong").key == "Asia/Hong_Kong"
    assert parse_timezone(None).key == "UTC"
    assert parse_timezone("Mars/Olympus_Mons").key == "UTC"


def test_settings_defaults() -> None:
    settings = Settings(_env_file=None)

    assert settings.reservation_grace_minutes == 30
    assert settings.trigger_event_minutes == 1
    assert settings.site_timezone == "Asia/Hong_Kong"
    assert settings.has_record_store is False
    assert settings.has_calendar is False


def test_settings_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_KEY", "service-key")
    monkeypatch.setenv("RESERVATION_GRACE_MINUTES", "15")

    settings = Settings(_env_file=None)

    assert settings.has_record_store is True
    assert settings.reservation_grace_minutes == 15
