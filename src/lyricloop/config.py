"""Configuration management for lyricloop.

This module provides typed configuration classes using pydantic-settings.
Configuration is loaded from environment variables with optional .env file support.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = [
    "DEFAULT_GENERIC_DISTRACTORS",
    "MatchingSettings",
    "SchedulerSettings",
    "SessionSettings",
    "LoggingSettings",
    "LyricLoopConfig",
]

DEFAULT_GENERIC_DISTRACTORS: tuple[str, ...] = (
    "to sing", "to dance", "to walk", "to eat", "to drink", "to sleep",
    "happy", "sad", "beautiful", "fast", "slow", "big", "small",
    "house", "car", "book", "music", "love", "friend", "family",
)


class MatchingSettings(BaseSettings):
    """Cross-catalog matching settings."""

    model_config = SettingsConfigDict(
        env_prefix="LYRICLOOP_MATCHING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    acceptance_threshold: int = Field(default=50, ge=0, le=100)
    title_weight: float = 0.5
    artist_weight: float = 0.35
    duration_weight: float = 0.15
    duration_tolerance_seconds: int = 3  # full agreement at or below
    duration_cutoff_seconds: int = 30  # zero agreement at or above
    neutral_score: int = 50
    empty_title_ceiling: int = 20
    include_community_only: bool = False
    parse_limit: int = 10  # records kept per catalog payload


class SchedulerSettings(BaseSettings):
    """Spaced-repetition scheduler settings."""

    model_config = SettingsConfigDict(
        env_prefix="LYRICLOOP_SCHEDULER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_easiness: float = 2.5
    easiness_floor: float = 1.3
    passing_quality: int = 3
    first_interval_days: int = 1
    second_interval_days: int = 6
    lapse_interval_days: int = 1


class LoggingSettings(BaseSettings):
    """Log output settings."""

    model_config = SettingsConfigDict(
        env_prefix="LYRICLOOP_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: str = "INFO"
    json_output: bool = False


class SessionSettings(BaseSettings):
    """Review session assembly settings."""

    model_config = SettingsConfigDict(
        env_prefix="LYRICLOOP_SESSION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    due_limit: int = 20
    option_count: int = 4  # correct answer included
    matching_pairs: int = 5
    blank_ratio: float = 0.2
    min_word_bank_distractors: int = 2
    mastered_score: int = 90

    # Mixed session proportions (quiz absorbs the rounding remainder)
    quiz_share: float = 0.5
    matching_share: float = 0.2
    sentence_share: float = 0.15
    fill_blank_share: float = 0.15

    generic_distractors: list[str] = Field(
        default_factory=lambda: list(DEFAULT_GENERIC_DISTRACTORS)
    )


class LyricLoopConfig(BaseSettings):
    """Main configuration aggregating all settings.

    Example usage:
        config = LyricLoopConfig()
        threshold = config.matching.acceptance_threshold
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    matching: MatchingSettings = MatchingSettings()
    scheduler: SchedulerSettings = SchedulerSettings()
    session: SessionSettings = SessionSettings()
    logging: LoggingSettings = LoggingSettings()
