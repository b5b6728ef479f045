"""
Тесты конфигурации
"""

from config.settings import AnalyticsConfig, CompanyConfig, DatabaseConfig


def test_database_config_from_env(monkeypatch):
    monkeypatch.setenv("DB_HOST", "db.example.com")
    monkeypatch.setenv("DB_PORT", "bukan-angka")
    config = DatabaseConfig.from_env()
    assert config.host == "db.example.com"
    assert config.port == 5432


def test_analytics_period_falls_back_to_six(monkeypatch):
    monkeypatch.setenv("ANALYTICS_DEFAULT_PERIOD", "2")
    assert AnalyticsConfig.from_env().default_period_months == 6
    monkeypatch.setenv("ANALYTICS_DEFAULT_PERIOD", "12")
    assert AnalyticsConfig.from_env().default_period_months == 12


def test_company_website_optional(monkeypatch):
    monkeypatch.setenv("COMPANY_WEBSITE", "")
    assert CompanyConfig.from_env().website is None
