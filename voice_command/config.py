"""
Runtime configuration, read from VOICE_COMMAND_* environment variables.
"""

import os

from pydantic import BaseModel, Field, field_validator

from .analytics import DEFAULT_RETENTION_DAYS, clamp_retention
from .delivery import DEFAULT_CACHE_TTL


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class VoiceSettings(BaseModel):
    site_url: str = "http://localhost"
    analytics_enabled: bool = False
    analytics_retention_days: int = DEFAULT_RETENTION_DAYS
    smart_speaker_enabled: bool = False
    content_cache_ttl: int = Field(default=DEFAULT_CACHE_TTL, ge=0)
    lookup_timeout: float = Field(default=10.0, gt=0)
    mcp_enabled: bool = False
    mcp_host: str = "0.0.0.0"
    mcp_port: int = 8891

    @field_validator("site_url")
    @classmethod
    def _strip_slash(cls, value: str) -> str:
        return value.strip().rstrip("/") or "http://localhost"

    @field_validator("analytics_retention_days")
    @classmethod
    def _clamp_retention(cls, value: int) -> int:
        return clamp_retention(value)


def get_settings() -> VoiceSettings:
    """Build settings from the environment (re-read on every call)."""
    return VoiceSettings(
        site_url=os.getenv("VOICE_COMMAND_SITE_URL", "http://localhost"),
        analytics_enabled=_env_bool("VOICE_COMMAND_ANALYTICS_ENABLED"),
        analytics_retention_days=int(os.getenv("VOICE_COMMAND_ANALYTICS_RETENTION_DAYS", str(DEFAULT_RETENTION_DAYS))),
        smart_speaker_enabled=_env_bool("VOICE_COMMAND_SMART_SPEAKER_ENABLED"),
        content_cache_ttl=int(os.getenv("VOICE_COMMAND_CONTENT_CACHE_TTL", str(DEFAULT_CACHE_TTL))),
        lookup_timeout=float(os.getenv("VOICE_COMMAND_LOOKUP_TIMEOUT", "10.0")),
        mcp_enabled=_env_bool("VOICE_COMMAND_MCP_ENABLED"),
        mcp_host=os.getenv("VOICE_COMMAND_MCP_HOST", "0.0.0.0"),
        mcp_port=int(os.getenv("VOICE_COMMAND_MCP_PORT", "8891")),
    )
