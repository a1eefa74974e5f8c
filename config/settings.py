"""Application settings and configuration."""
import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

ENV_PATH = Path(__file__).resolve().parent / '.env'
load_dotenv(dotenv_path=ENV_PATH)


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


class Settings:
    """
    Process-wide settings, read once from the environment (and config/.env).

    The acquisition client never reads these directly; build a
    ``ClientConfig`` from them at startup and pass it in.
    """

    # ── NeatQueue API ──────────────────────────────────────────────────────
    NEATQUEUE_API_URL: str           = os.getenv('NEATQUEUE_API_URL', 'https://api.neatqueue.com')
    NEATQUEUE_API_KEY: Optional[str] = os.getenv('NEATQUEUE_API_KEY') or None
    DISCORD_GUILD_ID:  Optional[str] = os.getenv('DISCORD_GUILD_ID') or None

    # ── HTTP ───────────────────────────────────────────────────────────────
    REQUEST_TIMEOUT_MS: int = _int_env('NEATQUEUE_TIMEOUT_MS', 10_000)
    RETRY_ATTEMPTS:     int = _int_env('NEATQUEUE_RETRY_ATTEMPTS', 3)
    RETRY_DELAY_MS:     int = _int_env('NEATQUEUE_RETRY_DELAY_MS', 1_000)
    RETRY_BACKOFF:      float = 2.0
    USER_AGENT:         str = 'ApeSquad-NeatQueue-Client/1.0'

    # ── Pagination ─────────────────────────────────────────────────────────
    DEFAULT_LIMIT: int = 50
    MAX_LIMIT:     int = 100

    # ── Paths ──────────────────────────────────────────────────────────────
    BASE_DIR: Path = Path(__file__).resolve().parent.parent
    LOG_DIR:  Optional[Path] = Path(os.environ['LOG_DIR']) if os.getenv('LOG_DIR') else None

    LOG_LEVEL: str  = os.getenv('LOG_LEVEL', 'INFO')
    DEBUG:     bool = os.getenv('DEBUG', 'false').strip().lower() == 'true'


settings = Settings()
