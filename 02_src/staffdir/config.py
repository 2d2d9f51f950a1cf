"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DATA_DIR = PROJECT_ROOT / "03_data"
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_DB_PATH = DATA_DIR / "staffdir.db"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

DEFAULT_JWT_SECRET = "chamber_of_secrets"

DATA_DIR.mkdir(parents=True, exist_ok=True)
LOGS_DIR.mkdir(parents=True, exist_ok=True)


PathLike = Union[str, Path]


def resolve_db_path(env_value: PathLike | None = None) -> PathLike:
    """Resolve DATABASE_URL to an absolute path."""
    if not env_value:
        return DEFAULT_DB_PATH

    if str(env_value) == ":memory:":
        return ":memory:"

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


@dataclass(frozen=True)
class Settings:
    """Runtime settings read from the environment."""

    api_host: str = "localhost"
    api_port: int = 5001
    database_url: str | None = None
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_expires_hours: int = 8
    cors_origins: tuple[str, ...] = ("*",)
    socketio_path: str = "socket.io"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables."""
        origins = os.getenv("CORS_ORIGINS", "*")
        return cls(
            api_host=os.getenv("API_HOST", "localhost"),
            api_port=int(os.getenv("API_PORT", "5001")),
            database_url=os.getenv("DATABASE_URL") or None,
            jwt_secret=os.getenv("JWT_SECRET") or DEFAULT_JWT_SECRET,
            jwt_expires_hours=int(os.getenv("JWT_EXPIRES_HOURS", "8")),
            cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
            socketio_path=os.getenv("SOCKETIO_PATH", "socket.io"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    @property
    def uses_default_secret(self) -> bool:
        return self.jwt_secret == DEFAULT_JWT_SECRET
