"""
Configuration — pydantic-settings

Настройки пакета из переменных окружения (префикс RATIOMATH_) или .env.
Переменные окружения имеют приоритет над .env.

    RATIOMATH_DIGIT_BUDGET  начальный digit budget (default: 50)
    RATIOMATH_LOG_LEVEL     уровень логирования (default: WARNING)
"""

from typing import Final

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Digit budget по умолчанию (десятичных знаков)
DEFAULT_DIGIT_BUDGET: Final[int] = 50

LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class RatiomathSettings(BaseSettings):
    """
    Настройки ratiomath.
    """

    digit_budget: int = Field(
        default=DEFAULT_DIGIT_BUDGET,
        ge=1,
        description="Начальный digit budget контекста точности",
    )
    log_level: str = Field(
        default="WARNING",
        description="Уровень логирования пакета",
    )

    model_config = SettingsConfigDict(
        env_prefix="RATIOMATH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Проверка имени уровня логирования."""
        normalized = value.upper()
        if normalized not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {LOG_LEVELS}, got {value!r}")
        return normalized


def get_settings() -> RatiomathSettings:
    """
    Прочитать настройки из окружения.

    Returns:
        RatiomathSettings: Новый экземпляр настроек
    """
    return RatiomathSettings()
