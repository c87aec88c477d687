import json
import secrets
from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CORS_ORIGINS = ["http://localhost:5173"]

DEFAULT_CORRECT_FLOW = ["sensor", "signal", "controller", "communication", "cloud", "actuator"]

DEFAULT_CHALLENGE_LINKS = {
    "Lumina District": "https://unstop.com/your-lumina-challenge",
    "HydroCore": "https://unstop.com/your-hydrocore-challenge",
    "AeroHab": "https://unstop.com/your-aerohab-challenge",
}


def _parse_cors_origins(value: str | List[str] | None) -> List[str] | None:
    if value is None:
        return None

    if isinstance(value, (list, tuple, set)):
        return [str(origin).strip() for origin in value if str(origin).strip()]

    stripped = str(value).strip()
    if not stripped:
        return []

    if stripped.startswith("[") and stripped.endswith("]"):
        try:
            loaded = json.loads(stripped)
        except json.JSONDecodeError:
            inner = stripped[1:-1].strip()
            if not inner:
                return []
            stripped = inner
        else:
            if isinstance(loaded, list):
                return [str(origin).strip() for origin in loaded if str(origin).strip()]

    return [origin.strip() for origin in stripped.split(",") if origin.strip()]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    app_name: str = "Restore Neurovia"
    api_prefix: str = "/api"
    secret_key: str = Field(default_factory=lambda: secrets.token_urlsafe(32))
    access_token_expire_minutes: int = 60 * 24 * 30
    database_url: str = "sqlite+aiosqlite:///./neurovia.db"
    cors_origins_raw: str | None = Field(default=None, alias="CORS_ORIGINS")
    log_level: str = "INFO"
    db_init_max_retries: int = 5
    db_init_retry_interval_seconds: float = 2.0
    seed_catalog: bool = True
    bootstrap_admin_username: str | None = None
    bootstrap_admin_password: str | None = None

    # Game rules
    quiz_question_limit: int = 12
    quiz_points_per_answer: int = 100
    quiz_bonus: int = Field(default=1200, alias="QUIZ_BONUS")
    purchase_component_count: int = 6
    correct_flow: List[str] = Field(default_factory=lambda: list(DEFAULT_CORRECT_FLOW))
    round2_points_per_placement: int = 15
    round2_time_bonus_tiers: List[List[float]] = Field(
        default_factory=lambda: [[5, 10], [10, 8], [15, 5], [20, 3]]
    )
    registration_sectors: List[str] = Field(default_factory=lambda: ["Lumina District", "HydroCore"])
    challenge_links: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_CHALLENGE_LINKS))
    challenge_time_limit_minutes: int = 30
    round3_max_tests: int = 10
    round3_submission_time_cap_minutes: int = 30
    round3_override_time_cap_minutes: int = 25

    @field_validator("database_url")
    @classmethod
    def ensure_async_driver(cls, value: str) -> str:
        """
        Hosted Postgres providers hand out postgres:// or postgresql:// URLs;
        rewrite them to the asyncpg driver the engine expects.
        """
        if not value:
            return value

        if value.startswith("postgres://"):
            return "postgresql+asyncpg://" + value[len("postgres://") :]

        if value.startswith("postgresql://") and "+asyncpg" not in value.split("://", 1)[0]:
            return value.replace("postgresql://", "postgresql+asyncpg://", 1)

        return value

    @field_validator("correct_flow")
    @classmethod
    def ensure_flow_length(cls, value: List[str]) -> List[str]:
        if len(value) != 6:
            raise ValueError("correct_flow must list exactly 6 component types")
        return value

    @property
    def cors_origins(self) -> List[str]:
        parsed = _parse_cors_origins(self.cors_origins_raw)
        if not parsed:
            return DEFAULT_CORS_ORIGINS
        return parsed


@lru_cache
def get_settings() -> Settings:
    return Settings()
