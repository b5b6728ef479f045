"""
Настройки приложения

Значения читаются из переменных окружения (и файла .env в корне проекта).
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent

load_dotenv(PROJECT_ROOT / ".env")


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        return default


@dataclass
class DatabaseConfig:
    """Подключение к Postgres управляемого бэкенда"""
    host: str = "localhost"
    port: int = 5432
    database: str = "postgres"
    user: str = "postgres"
    password: str = ""
    sslmode: str = "require"

    @classmethod
    def from_env(cls) -> "DatabaseConfig":
        return cls(
            host=os.getenv("DB_HOST", "localhost"),
            port=_env_int("DB_PORT", 5432),
            database=os.getenv("DB_NAME", "postgres"),
            user=os.getenv("DB_USER", "postgres"),
            password=os.getenv("DB_PASSWORD", ""),
            sslmode=os.getenv("DB_SSLMODE", "require"),
        )


@dataclass
class CompanyConfig:
    """Реквизиты компании для шапки документов"""
    name: str = "PT. Umrah Haji Travel"
    address: str = "Jl. Raya Utama No. 123, Jakarta Selatan 12345"
    phone: str = "(021) 1234-5678"
    email: str = "info@umrahhaji.com"
    website: Optional[str] = "www.umrahhaji.com"
    city: str = "Jakarta"

    @classmethod
    def from_env(cls) -> "CompanyConfig":
        defaults = cls()
        return cls(
            name=os.getenv("COMPANY_NAME", defaults.name),
            address=os.getenv("COMPANY_ADDRESS", defaults.address),
            phone=os.getenv("COMPANY_PHONE", defaults.phone),
            email=os.getenv("COMPANY_EMAIL", defaults.email),
            website=os.getenv("COMPANY_WEBSITE", defaults.website) or None,
            city=os.getenv("COMPANY_CITY", defaults.city),
        )


@dataclass
class AnalyticsConfig:
    """Настройки аналитики лидов"""
    default_period_months: int = 6

    @classmethod
    def from_env(cls) -> "AnalyticsConfig":
        period = _env_int("ANALYTICS_DEFAULT_PERIOD", 6)
        if period not in (1, 3, 6, 12):
            period = 6
        return cls(default_period_months=period)


@dataclass
class UIConfig:
    """Настройки интерфейса"""
    font_size: int = 14
    font_family: str = "Arial"

    @classmethod
    def from_env(cls) -> "UIConfig":
        return cls(
            font_size=_env_int("UI_FONT_SIZE", 14),
            font_family=os.getenv("UI_FONT_FAMILY", "Arial"),
        )


@dataclass
class Settings:
    """Корневой объект настроек"""
    database: DatabaseConfig = field(default_factory=DatabaseConfig.from_env)
    company: CompanyConfig = field(default_factory=CompanyConfig.from_env)
    analytics: AnalyticsConfig = field(default_factory=AnalyticsConfig.from_env)
    ui: UIConfig = field(default_factory=UIConfig.from_env)
    log_dir: Path = field(default_factory=lambda: Path(os.getenv("LOG_DIR", PROJECT_ROOT / "logs")))
    export_dir: Path = field(default_factory=lambda: Path(os.getenv("EXPORT_DIR", PROJECT_ROOT / "exports")))

    def get(self, key: str, default=None):
        return getattr(self, key, default)


config = Settings()
