"""Application settings and configuration."""
import os
from pathlib import Path
from dotenv import load_dotenv

ENV_PATH = Path(__file__).resolve().parent / '.env'
load_dotenv(dotenv_path=ENV_PATH)


class Settings:
    """
    ─── UPSTREAM BUDGET ──────────────────────────────────────────────────
    OpenDota without a key allows roughly 60 requests/minute and answers
    bursts with 429 + Retry-After. Every request of the process (match
    list, match details, parse requests, hero table) goes through ONE
    limiter, so two reports built at the same time share the budget.
    ──────────────────────────────────────────────────────────────────────
    """

    OPENDOTA_BASE_URL: str = os.getenv('OPENDOTA_BASE_URL', 'https://api.opendota.com/api')
    OPENDOTA_API_KEY:  str = os.getenv('OPENDOTA_API_KEY', '')

    # ── HTTP ───────────────────────────────────────────────────────────────
    REQUEST_TIMEOUT:         float = float(os.getenv('REQUEST_TIMEOUT', '5'))
    MIN_REQUEST_INTERVAL_MS: int   = int(os.getenv('MIN_REQUEST_INTERVAL_MS', '1000'))
    MAX_ATTEMPTS:            int   = int(os.getenv('MAX_ATTEMPTS', '5'))
    RETRY_BASE_MS:           int   = int(os.getenv('RETRY_BASE_MS', '1000'))
    RETRY_MAX_MS:            int   = int(os.getenv('RETRY_MAX_MS', '8000'))

    # ── Match list ─────────────────────────────────────────────────────────
    MATCH_LIST_LIMIT: int = int(os.getenv('MATCH_LIST_LIMIT', '5000'))

    # ── Cache TTLs (seconds) ───────────────────────────────────────────────
    # Hero table changes only with new heroes.
    HEROES_CACHE_TTL:  int = int(os.getenv('HEROES_CACHE_TTL', '3600'))
    MATCHES_CACHE_TTL: int = int(os.getenv('MATCHES_CACHE_TTL', '300'))

    # ── Deep enrichment ────────────────────────────────────────────────────
    DEEP_MATCH_LIMIT:     int = int(os.getenv('DEEP_MATCH_LIMIT', '20'))
    DEEP_MATCH_LIMIT_MAX: int = 300
    DEEP_CONCURRENCY:     int = int(os.getenv('DEEP_CONCURRENCY', '2'))

    # ── Paths ──────────────────────────────────────────────────────────────
    BASE_DIR: Path = Path(__file__).resolve().parent.parent
    LOG_DIR:  Path = Path(os.getenv('LOG_DIR', str(BASE_DIR / 'data' / 'logs')))

    LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO')

    @classmethod
    def validate(cls) -> None:
        if cls.MIN_REQUEST_INTERVAL_MS < 0:
            raise ValueError("MIN_REQUEST_INTERVAL_MS must be >= 0")
        if cls.MAX_ATTEMPTS < 1:
            raise ValueError("MAX_ATTEMPTS must be >= 1")
        if cls.DEEP_CONCURRENCY < 1:
            raise ValueError("DEEP_CONCURRENCY must be >= 1")


settings = Settings()
