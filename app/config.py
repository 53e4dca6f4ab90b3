"""Runtime configuration."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Attributes
    ----------
    app_name : str
        Human-readable application name.
    database_url : str
        SQLAlchemy database URL.
    session_cookie_name : str
        Cookie carrying the raw session token.
    session_ttl_seconds : int
        Lifetime of a newly issued session.
    session_cookie_secure : bool
        Whether the session cookie is restricted to HTTPS.
    default_destination : str
        Redirect target when a link cannot be resolved.
    slug_length : int
        Length of generated tracking-link slugs.
    log_level : str
        Root log level.
    log_json : bool
        Whether log records are rendered as JSON lines.
    """

    model_config = SettingsConfigDict(env_prefix="ACTIVATION_TRACKER_", extra="ignore")

    app_name: str = "Activation Tracker"
    database_url: str = "sqlite+aiosqlite:///./activation_tracker.db"
    session_cookie_name: str = "tracker_session"
    session_ttl_seconds: int = 14 * 24 * 3600
    session_cookie_secure: bool = False
    default_destination: str = "/"
    slug_length: int = 8
    log_level: str = "INFO"
    log_json: bool = False


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings.

    Returns
    -------
    Settings
        Cached settings instance.
    """
    return Settings()
