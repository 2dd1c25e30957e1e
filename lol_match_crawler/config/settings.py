"""Application settings and configuration."""
import os
from pathlib import Path
from typing import Dict, List, Optional
from dotenv import load_dotenv

ENV_PATH = Path(__file__).resolve().parent / '.env'
load_dotenv(dotenv_path=ENV_PATH)


# Values that could not be parsed, reported by Settings.validate() instead of
# failing at import time.
_INVALID_ENV: Dict[str, str] = {}


def _env_number(name: str, default, cast):
    raw = os.getenv(name, '').strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError:
        _INVALID_ENV[name] = raw
        return default


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    return _env_number(name, default, int)


def _env_float(name: str, default: float) -> float:
    return _env_number(name, default, float)


def _env_int_list(name: str, default: List[int]) -> List[int]:
    return _env_number(name, default, lambda raw: [int(q) for q in _csv_list(raw)])


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, '').strip().lower()
    if not raw:
        return default
    return raw in ('true', '1', 'yes')


def _csv_list(raw: str) -> List[str]:
    return [item.strip() for item in raw.split(',') if item.strip()]


class Settings:
    """
    Run configuration for the match crawler.

    Every value can be set through the environment or config/.env; the CLI
    flags override whatever is configured here.

    ─── RATE LIMITS ──────────────────────────────────────────────────────
    Expressed in the same "limit:seconds" pairs the Riot API returns in its
    X-App-Rate-Limit and X-Method-Rate-Limit headers. A personal key allows
    20/1s and 100/120s; the defaults stay slightly below to avoid 429s.
    Once the provider reports its own limits in a response they replace
    these, unless ADOPT_RATE_LIMIT_HEADERS is false.
    ──────────────────────────────────────────────────────────────────────
    """

    RIOT_API_KEY:      str = os.getenv('RIOT_API_KEY', '')
    RIOT_API_KEY_FILE: str = os.getenv('RIOT_API_KEY_FILE', 'key.txt')

    REGION: str = os.getenv('REGION', 'na1')

    # ── Crawl ──────────────────────────────────────────────────────────────
    TARGET_MATCHES:     int           = _env_int('TARGET_MATCHES', 100)
    MAX_DEPTH:          Optional[int] = _env_int('MAX_DEPTH', None)
    MATCHES_PER_PLAYER: int           = _env_int('MATCHES_PER_PLAYER', 20)
    SEED_PLAYERS:       List[str]     = _csv_list(os.getenv('SEED_PLAYERS', ''))
    ELIGIBLE_QUEUES:    List[int]     = _env_int_list('ELIGIBLE_QUEUES', [420, 440])
    SEED_DISCOVERY_COUNT: int         = _env_int('SEED_DISCOVERY_COUNT', 25)

    # ── Rate limits ────────────────────────────────────────────────────────
    APP_RATE_LIMITS:     str = os.getenv('APP_RATE_LIMITS', '18:1,90:120')
    MATCH_RATE_LIMITS:   str = os.getenv('MATCH_RATE_LIMITS', '18:1,90:120')
    ACCOUNT_RATE_LIMITS: str = os.getenv('ACCOUNT_RATE_LIMITS', '18:1,85:120')
    LEAGUE_RATE_LIMITS:  str = os.getenv('LEAGUE_RATE_LIMITS', '15:1,75:120')
    ADOPT_RATE_LIMIT_HEADERS: bool = _env_bool('ADOPT_RATE_LIMIT_HEADERS', True)

    # ── HTTP ───────────────────────────────────────────────────────────────
    REQUEST_TIMEOUT:        int   = _env_int('REQUEST_TIMEOUT', 30)
    MAX_RETRIES:            int   = _env_int('MAX_RETRIES', 3)
    MAX_RATE_LIMIT_RETRIES: int   = _env_int('MAX_RATE_LIMIT_RETRIES', 5)
    RETRY_BACKOFF_BASE_S:   float = _env_float('RETRY_BACKOFF_BASE_S', 1.0)
    RETRY_BACKOFF_FACTOR:   float = _env_float('RETRY_BACKOFF_FACTOR', 2.0)
    RETRY_BACKOFF_MAX_S:    float = _env_float('RETRY_BACKOFF_MAX_S', 30.0)

    # ── Concurrency ────────────────────────────────────────────────────────
    # 1 keeps the crawl strictly sequential; higher values overlap the match
    # downloads of a single player.
    MAX_CONCURRENT_REQUESTS: int = _env_int('MAX_CONCURRENT_REQUESTS', 1)

    # ── Paths ──────────────────────────────────────────────────────────────
    BASE_DIR:   Path = Path.cwd()
    DATA_DIR:   Path = BASE_DIR / 'data'
    OUTPUT_DIR: Path = Path(os.getenv('OUTPUT_DIR', str(DATA_DIR / 'csv')))
    LOG_DIR:    Path = Path(os.getenv('LOG_DIR', str(DATA_DIR / 'logs')))

    LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO')

    @classmethod
    def load_api_key(cls) -> str:
        """Return the API key from the environment, falling back to the key file."""
        if cls.RIOT_API_KEY:
            return cls.RIOT_API_KEY.strip()
        key_file = Path(cls.RIOT_API_KEY_FILE)
        if key_file.is_file():
            return key_file.read_text(encoding='utf-8').strip()
        return ''

    @classmethod
    def validate(cls, *, require_api_key: bool = True) -> None:
        if _INVALID_ENV:
            name, raw = next(iter(_INVALID_ENV.items()))
            raise ValueError(f"{name} must be numeric, got {raw!r}")
        if require_api_key and not cls.load_api_key():
            raise ValueError(
                f"RIOT_API_KEY must be set in config/.env or stored in {cls.RIOT_API_KEY_FILE}"
            )
        if cls.TARGET_MATCHES < 1:
            raise ValueError("TARGET_MATCHES must be a positive integer")
        if cls.MAX_DEPTH is not None and cls.MAX_DEPTH < 0:
            raise ValueError("MAX_DEPTH must not be negative")
        from lol_match_crawler.infrastructure.api.rate_limiter import parse_rate_limit_header

        for name in ('APP_RATE_LIMITS', 'MATCH_RATE_LIMITS', 'ACCOUNT_RATE_LIMITS', 'LEAGUE_RATE_LIMITS'):
            try:
                windows = parse_rate_limit_header(getattr(cls, name))
            except ValueError as exc:
                raise ValueError(f"{name}: {exc}") from exc
            if any(limit < 1 or seconds <= 0 for limit, seconds in windows):
                raise ValueError(f"{name} must only contain positive limits and durations")


settings = Settings()
