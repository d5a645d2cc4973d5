from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# shared/shared/auth/config.py -> backend root
_BACKEND_ROOT = Path(__file__).resolve().parents[3]


class AuthSettings(BaseSettings):
    """Token verification settings (JWT_* env vars).

    Must agree with the values the issuing service signs with.
    """

    model_config = SettingsConfigDict(
        env_prefix="JWT_",
        env_file=[str(_BACKEND_ROOT / ".env"), ".env"],
        env_file_encoding="utf-8",
        extra="ignore",
    )

    secret: str = "change-me"
    algorithm: str = "HS256"
    issuer: str = "bloghub-api"
    audience: str = "bloghub-clients"
    # Clock skew tolerated on exp/iat checks
    leeway_seconds: int = 10
