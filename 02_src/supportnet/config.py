"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Mapping, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import ConfigurationError

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DATA_DIR = PROJECT_ROOT / "03_data"
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_DB_PATH = DATA_DIR / "supportnet.db"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

DEFAULT_CHECK_IN_MINUTES = 150
DEFAULT_TICK_SECONDS = 60
DEFAULT_TIMEOUT_TICKS = 1
DEFAULT_WINDOW_START = 9
DEFAULT_WINDOW_END = 21

TRANSPORTS = ("loopback", "webhook")


PathLike = Union[str, Path]


def resolve_db_path(env_value: PathLike | None = None) -> PathLike:
    """Resolve DATABASE_URL to an absolute path."""
    if not env_value:
        DATA_DIR.mkdir(parents=True, exist_ok=True)
        return DEFAULT_DB_PATH

    if str(env_value) == ":memory:":
        return ":memory:"

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


@dataclass(frozen=True)
class SupportNetConfig:
    """Startup configuration for the tracked user and the scheduler."""

    user_id: str
    user_name: str
    timezone: str
    sobriety_date: datetime
    window_start: int = DEFAULT_WINDOW_START
    window_end: int = DEFAULT_WINDOW_END
    tick_seconds: float = DEFAULT_TICK_SECONDS
    timeout_ticks: int = DEFAULT_TIMEOUT_TICKS
    default_check_in_minutes: int = DEFAULT_CHECK_IN_MINUTES
    transport: str = "loopback"
    webhook_url: str | None = None
    anthropic_api_key: str | None = None
    llm_model: str | None = None
    db_path: PathLike | None = None

    def __post_init__(self):
        for name in ("window_start", "window_end"):
            hour = getattr(self, name)
            if not 0 <= hour <= 23:
                raise ConfigurationError(f"{name} must be between 0 and 23, got {hour}")
        if self.timeout_ticks < 1:
            raise ConfigurationError("timeout_ticks must be at least 1")
        if self.default_check_in_minutes < 1:
            raise ConfigurationError("default_check_in_minutes must be at least 1")
        if self.transport not in TRANSPORTS:
            raise ConfigurationError(
                f"Unknown transport {self.transport!r}, expected one of {TRANSPORTS}"
            )
        if self.transport == "webhook" and not self.webhook_url:
            raise ConfigurationError("TRANSPORT_WEBHOOK_URL is required for the webhook transport")
        if self.sobriety_date.tzinfo is None:
            raise ConfigurationError("sobriety_date must carry a UTC offset")

    @property
    def zone(self) -> ZoneInfo:
        """Tracked user's timezone."""
        return load_zone(self.timezone)


def load_zone(name: str) -> ZoneInfo:
    """Load an IANA timezone, raising ConfigurationError if unknown."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigurationError(f"Invalid timezone: {name}") from e


def _require(env: Mapping[str, str], key: str) -> str:
    value = env.get(key)
    if not value:
        raise ConfigurationError(f"Expected {key} in the environment")
    return value


def _int(env: Mapping[str, str], key: str, default: int) -> int:
    value = env.get(key)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ConfigurationError(f"{key} must be an integer, got {value!r}") from e


def config_from_env(env: Mapping[str, str] | None = None) -> SupportNetConfig:
    """
    Build SupportNetConfig from environment variables.

    Args:
        env: Mapping to read from. Defaults to os.environ.

    Raises:
        ConfigurationError: if a required variable is missing or malformed.
    """
    if env is None:
        env = os.environ

    timezone_name = _require(env, "USER_TIMEZONE")
    zone = load_zone(timezone_name)

    raw_date = _require(env, "USER_SOBRIETY_DATE")
    try:
        sobriety_date = datetime.fromisoformat(raw_date)
    except ValueError as e:
        raise ConfigurationError(f"Invalid sobriety date: {raw_date}") from e
    if sobriety_date.tzinfo is None:
        raise ConfigurationError(f"Sobriety date must include a UTC offset: {raw_date}")

    try:
        tick_seconds = float(env.get("TICK_INTERVAL_SECONDS") or DEFAULT_TICK_SECONDS)
    except ValueError as e:
        raise ConfigurationError("TICK_INTERVAL_SECONDS must be a number") from e

    return SupportNetConfig(
        user_id=_require(env, "TRACKED_USER_ID"),
        user_name=_require(env, "USER_NAME"),
        timezone=timezone_name,
        sobriety_date=sobriety_date.astimezone(zone),
        window_start=_int(env, "CHECK_IN_WINDOW_START", DEFAULT_WINDOW_START),
        window_end=_int(env, "CHECK_IN_WINDOW_END", DEFAULT_WINDOW_END),
        tick_seconds=tick_seconds,
        timeout_ticks=_int(env, "CONVERSATION_TIMEOUT_TICKS", DEFAULT_TIMEOUT_TICKS),
        default_check_in_minutes=_int(env, "DEFAULT_CHECK_IN_MINUTES", DEFAULT_CHECK_IN_MINUTES),
        transport=env.get("TRANSPORT", "loopback").lower(),
        webhook_url=env.get("TRANSPORT_WEBHOOK_URL") or None,
        anthropic_api_key=env.get("ANTHROPIC_API_KEY") or None,
        llm_model=env.get("LLM_MODEL") or None,
        db_path=env.get("DATABASE_URL") or None,
    )
