"""Runtime settings.

One ``RuntimeSettings`` per session, built from an optional TOML file and
``SCORM_*`` environment variables (nested with ``__``, e.g.
``SCORM_AUTOCOMMIT__INTERVAL_MS``) through pydantic-settings.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from .enums import CommitFormat, LogLevel


# ---------------------------------------------------------------------------
# Sub-configs
# ---------------------------------------------------------------------------

class AutocommitConfig(BaseModel):
    enabled: bool = False
    interval_ms: int = Field(default=60_000, gt=0)


class CommitConfig(BaseModel):
    url: str | None = None  # None disables the transport
    format: CommitFormat = CommitFormat.STRUCTURED
    timeout_seconds: float = 10.0


class ObservabilityConfig(BaseModel):
    log_level: LogLevel = LogLevel.ERROR
    log_format: Literal["console", "json"] = "console"


class Scorm12Config(BaseModel):
    mastery_override: bool = False  # Derive passed/failed from mastery_score


# ---------------------------------------------------------------------------
# Top-level settings
# ---------------------------------------------------------------------------

class RuntimeSettings(BaseSettings):
    """Settings for one run-time session."""

    autocommit: AutocommitConfig = Field(default_factory=AutocommitConfig)
    commit: CommitConfig = Field(default_factory=CommitConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)
    scorm12: Scorm12Config = Field(default_factory=Scorm12Config)

    model_config = {"env_prefix": "SCORM_", "env_nested_delimiter": "__"}

    @property
    def autocommit_delay_seconds(self) -> float:
        return self.autocommit.interval_ms / 1000


def load_settings(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> RuntimeSettings:
    """Build settings from an optional TOML file plus overrides.

    Values given neither way fall back to environment variables, then defaults.

    A missing file is not an error.  ``overrides`` replaces whole top-level
    sections of the file (``{"commit": {...}}``).
    """
    data: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            import tomli

            with open(path, "rb") as f:
                data = tomli.load(f)

    if overrides:
        data.update(overrides)

    return RuntimeSettings(**data)
