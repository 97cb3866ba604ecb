"""Pydantic schemas for CLI settings validation."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

LogLevel = Literal["debug", "info", "warning", "error", "critical"]


class CliSettings(BaseModel):
    """Settings for the hotprops command line (loaded from hotprops.yaml)."""

    model_config = {"extra": "ignore"}

    source: str | None = Field(None, description="Path to the .properties file; HOTPROPS_SOURCE env overrides")
    interval_ms: int = Field(10000, gt=0, description="Hot-load polling interval in milliseconds; HOTPROPS_INTERVAL_MS env overrides")
    encoding: str = Field("utf-8", description="Encoding of the properties file")
    log_level: LogLevel = Field("info", description="Minimum structlog level: debug | info | warning | error | critical")
