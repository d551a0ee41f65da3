"""
Configuration settings for the effectstats package.

This module contains the tunable parameters of the hypothesis tests,
effect size conventions, report formatting and logging.

Values can be overridden through environment variables (or a `.env`
file in the working directory).
"""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()


@dataclass
class StatisticsConfig:
    """Configuration for hypothesis tests and effect sizes."""

    # Effect size convention: Cohen's d for n > threshold, Hedges' g otherwise
    large_sample_threshold: int = field(
        default_factory=lambda: int(os.getenv("EFFECTSTATS_LARGE_SAMPLE_THRESHOLD", "20"))
    )

    # Exact Mann-Whitney p-values while both groups are below this size
    # and the pooled sample has no ties
    exact_rank_test_max_n: int = 50

    # Power analysis (anova_stats)
    power_alpha: float = 0.05
    anova_digits: int = 3

    # Effect size thresholds (Cohen's conventions)
    small_effect_d: float = 0.2
    medium_effect_d: float = 0.5
    large_effect_d: float = 0.8
    small_effect_r: float = 0.1
    medium_effect_r: float = 0.3
    large_effect_r: float = 0.5


@dataclass
class ReportingConfig:
    """Configuration for printed test summaries."""

    digits: int = 2


@dataclass
class LoggingConfig:
    """Configuration for log output."""

    level: str = field(default_factory=lambda: os.getenv("EFFECTSTATS_LOG_LEVEL", "WARNING"))
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class AppConfig:
    """Main package configuration."""

    statistics: StatisticsConfig = field(default_factory=StatisticsConfig)
    reporting: ReportingConfig = field(default_factory=ReportingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Global configuration instance
config = AppConfig()


def get_config() -> AppConfig:
    """Get the global configuration instance."""
    return config


def reload_config() -> AppConfig:
    """Reload configuration from environment."""
    global config
    load_dotenv(override=True)
    config = AppConfig()
    return config
