"""
Configuration management via environment variables.

This module loads configuration from .env file using python-dotenv.
All configuration values are accessed through the Settings class.

Firebase credentials follow the service-account layout, so the same
variables work for local runs and for container deployments where
they are injected by the platform.
"""
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv


# Load .env file from project root
# This must happen before accessing os.environ
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(env_path)


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    frozen=True makes the dataclass immutable, preventing accidental
    modification of settings at runtime.

    Attributes:
        app_name: Application identifier for logging
        app_env: Environment name (development, staging, production)
        log_level: Logging verbosity (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for log files; empty disables file logging
        port: Port used when running the server directly
        gemini_api_key: API key for Google Gemini
        gemini_model: Gemini model identifier
        groq_api_key: Optional Groq key, enables the fallback provider
        cache_max_age_seconds: Response cache time-to-live
        realtime_timeout_seconds: Per-source timeout for public data APIs
        survey_backend: 'file' or 'firestore'
        survey_store_path: JSON file used by the file backend
    """
    # Application settings
    app_name: str = "CivicChat"
    app_env: str = "development"
    log_level: str = "INFO"
    log_dir: str = "logs"
    port: int = 3000

    # LLM settings
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"
    groq_api_key: str = ""
    groq_model: str = "llama-3.3-70b-versatile"
    llm_temperature: float = 0.7
    llm_top_k: int = 40
    llm_top_p: float = 0.95

    # Response cache
    cache_max_age_seconds: float = 300.0

    # Real-time data sources
    realtime_timeout_seconds: float = 5.0

    # Survey storage
    survey_backend: str = "file"
    survey_store_path: str = "data/nps-responses.json"
    survey_max_payload_bytes: int = 64 * 1024

    # Firebase / Firestore
    firebase_project_id: str = ""
    firebase_client_email: str = ""
    firebase_private_key: str = ""
    firebase_client_id: str = ""
    firebase_token_uri: str = "https://oauth2.googleapis.com/token"
    firestore_collection: str = "nps_responses"

    # HTTP
    enable_audit_logging: bool = True
    cors_origins: Tuple[str, ...] = ("*",)

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.app_env.lower() == "development"

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env.lower() == "production"


def _get_env(key: str, default: Optional[str] = None) -> str:
    """
    Get environment variable with optional default.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value

    Raises:
        ValueError: If required variable is not set and no default provided
    """
    value = os.environ.get(key, default)
    if value is None:
        raise ValueError(
            f"Required environment variable '{key}' is not set. "
            f"Please check your .env file."
        )
    return value


def project_id_from_email(client_email: str) -> str:
    """
    Extract the project id from a service-account email.

    Service accounts look like name@PROJECT_ID.iam.gserviceaccount.com.

    Returns:
        The project id, or an empty string if the email has another shape
    """
    parts = client_email.split("@")
    if len(parts) != 2:
        return ""
    return parts[1].split(".")[0]


def resolve_firebase_project_id(
    project_id: str,
    legacy_project_id: str,
    client_email: str
) -> str:
    """
    Pick the Firebase project id.

    Priority: the id embedded in the service-account email, then
    FIREBASE_PROJECT_ID, then the older FIRESTORE_PROJECT_ID.
    """
    from_email = project_id_from_email(client_email) if client_email else ""
    if from_email:
        return from_email
    return project_id or legacy_project_id


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance with all configuration values

    Raises:
        ValueError: If required environment variables are missing
            or the survey backend is unknown
    """
    survey_backend = _get_env("SURVEY_BACKEND", "file").strip().lower()
    if survey_backend not in ("file", "firestore"):
        raise ValueError(
            f"Invalid SURVEY_BACKEND '{survey_backend}'. Use 'file' or 'firestore'."
        )

    client_email = _get_env("FIREBASE_CLIENT_EMAIL", "")
    project_id = resolve_firebase_project_id(
        _get_env("FIREBASE_PROJECT_ID", ""),
        _get_env("FIRESTORE_PROJECT_ID", ""),
        client_email,
    )

    cors_origins = tuple(
        origin.strip()
        for origin in _get_env("CORS_ORIGINS", "*").split(",")
        if origin.strip()
    )

    return Settings(
        # Application
        app_name=_get_env("APP_NAME", "CivicChat"),
        app_env=_get_env("APP_ENV", "development"),
        log_level=_get_env("LOG_LEVEL", "INFO"),
        log_dir=_get_env("LOG_DIR", "logs"),
        port=int(_get_env("PORT", "3000")),

        # LLM
        gemini_api_key=_get_env("GEMINI_API_KEY"),
        gemini_model=_get_env("GEMINI_MODEL", "gemini-2.0-flash"),
        groq_api_key=_get_env("GROQ_API_KEY", ""),
        groq_model=_get_env("GROQ_MODEL", "llama-3.3-70b-versatile"),
        llm_temperature=float(_get_env("LLM_TEMPERATURE", "0.7")),
        llm_top_k=int(_get_env("LLM_TOP_K", "40")),
        llm_top_p=float(_get_env("LLM_TOP_P", "0.95")),

        # Cache
        cache_max_age_seconds=float(_get_env("CACHE_MAX_AGE_SECONDS", "300")),

        # Real-time sources
        realtime_timeout_seconds=float(_get_env("REALTIME_TIMEOUT_SECONDS", "5")),

        # Survey storage
        survey_backend=survey_backend,
        survey_store_path=_get_env("SURVEY_STORE_PATH", "data/nps-responses.json"),
        survey_max_payload_bytes=int(_get_env("SURVEY_MAX_PAYLOAD_BYTES", str(64 * 1024))),

        # Firebase
        firebase_project_id=project_id,
        firebase_client_email=client_email,
        firebase_private_key=_get_env("FIREBASE_PRIVATE_KEY", "").replace("\\n", "\n"),
        firebase_client_id=_get_env("FIREBASE_CLIENT_ID", ""),
        firebase_token_uri=_get_env("FIREBASE_TOKEN_URI", "https://oauth2.googleapis.com/token"),
        firestore_collection=_get_env("FIRESTORE_COLLECTION", "nps_responses") or "nps_responses",

        # HTTP
        enable_audit_logging=_get_env("ENABLE_AUDIT_LOGGING", "true").lower() == "true",
        cors_origins=cors_origins or ("*",),
    )
