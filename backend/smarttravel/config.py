# smarttravel/config.py
import os
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


class Settings(BaseModel):
    # General app settings
    APP_NAME: str = os.getenv("APP_NAME", "SmartTravel API")
    env: str = os.getenv("ENV", "dev")

    # Host & Port settings
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "5000"))

    # CORS origins for frontend (cookies are sent cross-origin, so origins must be explicit)
    CORS_ORIGINS: list[str] = [
        o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",") if o.strip()
    ]

    # Create tables on startup (dev only; use Aerich migrations otherwise)
    generate_schemas: bool = _env_flag("GENERATE_SCHEMAS")

    # Session settings
    # Both secrets are required, see missing_secrets()
    jwt_secret: str | None = os.getenv("JWT_SECRET")
    cookie_secret: str | None = os.getenv("COOKIE_SECRET")
    cookie_name: str = os.getenv("COOKIE_NAME", "auth_token")
    cookie_domain: str | None = os.getenv("COOKIE_DOMAIN") or None
    cookie_secure: bool = _env_flag("COOKIE_SECURE")
    session_ttl_days: int = int(os.getenv("SESSION_TTL_DAYS", "7"))

    # OpenAI Chat Completions settings
    openai_api_key: str | None = os.getenv("OPENAI_API_KEY")
    openai_organization: str | None = os.getenv("OPENAI_ORGANIZATION_ID") or None
    openai_api_url: str = os.getenv("OPENAI_API_URL", "https://api.openai.com/v1/chat/completions")
    chat_model: str = os.getenv("CHAT_MODEL", "gpt-3.5-turbo")
    chat_timeout_sec: float = float(os.getenv("CHAT_TIMEOUT_SEC", "30"))

    def missing_secrets(self) -> list[str]:
        """Names of required secrets that are not configured."""
        missing = []
        if not self.jwt_secret:
            missing.append("JWT_SECRET")
        if not self.cookie_secret:
            missing.append("COOKIE_SECRET")
        return missing


settings = Settings()  # Instantiate configuration
