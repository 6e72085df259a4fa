import json
import os
import re
from pathlib import Path
from typing import Annotated, List, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = Field(default="Finboard API", alias="PROJECT_NAME")
    environment: str = Field(default="dev", alias="ENVIRONMENT")
    build_version: Optional[str] = Field(default=None, alias="BUILD_VERSION")
    database_url: str = Field(
        default="sqlite+pysqlite:///./dev-local.db", alias="DATABASE_URL"
    )
    # Router prefix, e.g. "/api".
    api_prefix: str = Field(default="/api", alias="API_V1_STR")
    enable_docs: Optional[bool] = Field(default=None, alias="ENABLE_DOCS")
    secret_key: str = Field(default="change-me", alias="SECRET_KEY")
    access_token_expire_minutes: int = Field(default=60 * 8, alias="ACCESS_TOKEN_EXPIRE_MINUTES")
    algorithm: str = Field(default="HS256", alias="ALGORITHM")
    cors_origins: Annotated[List[str], NoDecode] = Field(
        default_factory=list, alias="CORS_ORIGINS"
    )

    # Display name used when an installment's contract or client cannot be resolved.
    unknown_client_name: str = Field(default="unknown", alias="UNKNOWN_CLIENT_NAME")
    slow_request_ms: int = Field(default=2000, alias="SLOW_REQUEST_MS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, value):
        def _normalize_origin(o: str) -> str:
            s = str(o).strip().strip('"').strip("'")
            # Browsers send the Origin header without a trailing slash.
            if s.endswith("/"):
                s = s[:-1]
            return s

        if value is None or value == "":
            return []

        if isinstance(value, str):
            s = value.strip()
            if (s.startswith('"') and s.endswith('"')) or (s.startswith("'") and s.endswith("'")):
                s = s[1:-1].strip()

            try:
                parsed = json.loads(s)
                if isinstance(parsed, str):
                    return [_normalize_origin(parsed)]
                if isinstance(parsed, list):
                    return [_normalize_origin(v) for v in parsed if str(v).strip()]
                return [_normalize_origin(str(parsed))]
            except json.JSONDecodeError:
                pass

            return [_normalize_origin(v) for v in s.split(",") if str(v).strip()]

        return [_normalize_origin(v) for v in value if str(v).strip()]

    @field_validator("api_prefix", mode="before")
    @classmethod
    def normalize_api_prefix(cls, v) -> str:
        if v is None:
            return ""
        s = str(v).strip()
        if not s:
            return ""

        if s.startswith("/api/") or s == "/api":
            return s

        # Git Bash on Windows may rewrite "/api/v1" into a filesystem path.
        m = re.search(r"(/api(?:/[^\s]*)?)$", s.replace("\\", "/"))
        if m:
            return m.group(1)

        if not s.startswith("/"):
            return f"/{s}"
        return s

    @field_validator("database_url", mode="before")
    @classmethod
    def normalize_database_url(cls, v) -> str:
        """Normalise Postgres URLs for psycopg3 and anchor relative SQLite paths.

        A relative path like ``sqlite+pysqlite:///./dev-local.db`` would resolve
        against whatever directory uvicorn was started from; rewrite it to an
        absolute path under the backend folder.
        """

        if v is None:
            return v

        s = str(v).strip()
        if not s:
            return s

        if s.startswith("postgres://"):
            s = "postgresql://" + s[len("postgres://") :]
        if s.startswith("postgresql://"):
            return "postgresql+psycopg://" + s[len("postgresql://") :]
        if s.startswith("postgresql+psycopg2://"):
            return "postgresql+psycopg://" + s[len("postgresql+psycopg2://") :]

        if not s.startswith("sqlite"):
            return s

        marker = ":///"
        i = s.find(marker)
        if i == -1:
            return s

        path_part = s[i + len(marker) :]
        if path_part.startswith(":memory:") or path_part.startswith("/"):
            return s
        if re.match(r"^[A-Za-z]:/", path_part):
            return s

        if path_part.startswith("./") or path_part.startswith(".\\"):
            backend_root = Path(__file__).resolve().parents[1]
            abs_path = (backend_root / path_part[2:]).resolve().as_posix()
            return f"{s[: i + len(marker)]}{abs_path}"

        return s

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v: str) -> str:
        if not v or v.lower() in {"change-me", "secret", "changeme"}:
            raise ValueError("SECRET_KEY must be set to a strong value")
        return v

    @model_validator(mode="after")
    def apply_environment_rules(self):
        env = str(self.environment or "dev").strip().lower()

        if self.enable_docs is None:
            self.enable_docs = env in {"dev", "development", "test"}

        if env in {"prod", "production"}:
            if not os.getenv("DATABASE_URL"):
                raise ValueError("DATABASE_URL must be explicitly set in production")
            if self.database_url.startswith("sqlite"):
                raise ValueError("SQLite DATABASE_URL is not allowed in production")
            if not self.cors_origins:
                raise ValueError("CORS_ORIGINS must be explicitly set in production")
        elif not self.cors_origins:
            self.cors_origins = [
                "http://localhost:5173",
                "http://localhost:8080",
                "http://localhost:3000",
                "http://127.0.0.1:5173",
                "http://127.0.0.1:8080",
            ]

        return self


settings = Settings()
