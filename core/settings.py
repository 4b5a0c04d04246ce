"""Application settings and shared unit helpers."""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    app_name: str = "Filament Ledger"
    database_url: Optional[str] = Field(None, description="Full SQLAlchemy URL, overrides DB_* fields")
    db_driver: str = "postgresql+psycopg2"
    db_host: Optional[str] = None
    db_user: Optional[str] = None
    db_password: Optional[str] = None
    db_name: Optional[str] = None
    db_port: Optional[int] = None
    db_pool_size: int = 10
    db_pool_timeout: float = 10.0
    sqlite_path: str = "./filament_ledger.db"
    log_level: str = "INFO"
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    @field_validator("db_pool_size")
    @classmethod
    def validate_pool_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError("db_pool_size must be at least 1")
        return v

    @property
    def sqlalchemy_url(self) -> str:
        if self.database_url:
            return self.database_url
        if self.db_host:
            return URL.create(
                self.db_driver,
                username=self.db_user,
                password=self.db_password,
                host=self.db_host,
                port=self.db_port,
                database=self.db_name,
            ).render_as_string(hide_password=False)
        return f"sqlite:///{self.sqlite_path}"


def per_kg_to_per_gram(value_per_kg: float) -> float:
    return value_per_kg / 1000.0


def w_to_kw(value_w: float) -> float:
    return value_w / 1000.0


@lru_cache
def get_settings() -> Settings:
    return Settings()
