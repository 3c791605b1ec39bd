from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Detect settings loaded from environment variables.

    Every field can be set as BUNDLE_INSTALL_<FIELD>, e.g.
    BUNDLE_INSTALL_RUBY_VERSION_IN_WORKING_DIR=true.

    .ruby-version lookup
    ────────────────────
    • ruby_version_in_working_dir=false  (default): resolved against the
      process working directory, matching the historical behaviour.
    • ruby_version_in_working_dir=true: resolved inside working_dir, next
      to the Gemfile.
    """

    model_config = SettingsConfigDict(
        env_prefix="BUNDLE_INSTALL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Source tree to inspect. None means the process working directory.
    working_dir: Optional[Path] = None

    ruby_version_in_working_dir: bool = False

    # Console log renderer when true, JSON otherwise.
    debug: bool = True

    # DEBUG shows parser diagnostics.
    log_level: str = "INFO"

    @field_validator("working_dir", mode="before")
    @classmethod
    def blank_working_dir_is_unset(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level: {v}")
        return level

    def resolve_working_dir(self) -> Path:
        return self.working_dir or Path.cwd()


def get_settings() -> Settings:
    return Settings()
