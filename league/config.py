"""Runtime configuration read from the environment (and a .env file)."""

import os

from dotenv import load_dotenv

load_dotenv()


class Config:
    """Leaderboard settings"""

    # Leaderboard defaults
    DEFAULT_METRIC = os.getenv('LEAGUE_DEFAULT_METRIC', 'total_points')
    MIN_PARTICIPATION = int(os.getenv('LEAGUE_MIN_PARTICIPATION', 1))

    # Export fetching
    FETCH_TIMEOUT = float(os.getenv('LEAGUE_FETCH_TIMEOUT', 30.0))
    MAX_EXPORT_BYTES = int(os.getenv('LEAGUE_MAX_EXPORT_BYTES', 20 * 1024 * 1024))

    LOG_LEVEL = os.getenv('LEAGUE_LOG_LEVEL', 'INFO').upper()

    @classmethod
    def validate(cls):
        """Validate that the configuration is usable"""
        from league.metrics import get_metric

        get_metric(cls.DEFAULT_METRIC)
        if cls.MIN_PARTICIPATION < 0:
            raise ValueError("LEAGUE_MIN_PARTICIPATION must not be negative")
        if cls.FETCH_TIMEOUT <= 0:
            raise ValueError("LEAGUE_FETCH_TIMEOUT must be positive")
        if cls.MAX_EXPORT_BYTES <= 0:
            raise ValueError("LEAGUE_MAX_EXPORT_BYTES must be positive")
        if cls.LOG_LEVEL not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            raise ValueError(f"Unknown LEAGUE_LOG_LEVEL: {cls.LOG_LEVEL}")
