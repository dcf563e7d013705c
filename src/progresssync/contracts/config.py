"""Configuration contracts."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, model_validator


class EngineConfig(BaseModel):
    lock_window_seconds: float = Field(default=5.0, ge=0)
    refetch_after_write: bool = True
    write_zero: bool = False

    model_config = {"frozen": True}


class GatewayConfig(BaseModel):
    kind: Literal["http", "memory"] = "memory"
    base_url: str | None = None
    timeout_seconds: float = Field(default=10.0, gt=0)
    max_retries: int = Field(default=3, ge=0, le=10)
    headers: dict[str, str] = Field(default_factory=dict)
    learner_name: str | None = None

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_base_url(self) -> GatewayConfig:
        base_url = (self.base_url or "").strip()
        if self.kind == "http" and not base_url:
            raise ValueError("http gateway requires a non-empty base_url")
        return self


class SyncConfig(BaseModel):
    engine: EngineConfig = Field(default_factory=EngineConfig)
    gateway: GatewayConfig = Field(default_factory=GatewayConfig)

    model_config = {"frozen": True}
