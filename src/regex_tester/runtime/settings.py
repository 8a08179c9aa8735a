"""Environment-backed settings for the regex tester host."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .telemetry import PRESETS, env, env_flag

DEFAULT_LOG_HOST = "127.0.0.1"
DEFAULT_LOG_PORT = 8765
DEFAULT_UNMATCHED = "<unmatched>"


def env_int(name: str, fallback: int) -> int:
    value = env(name)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


@dataclass(slots=True)
class Settings:
    """Knobs shared by the CLI and the Textual host.

    ``log_port`` of ``None`` disables the TCP debug stream; ``0`` asks for an
    ephemeral port.
    """

    log_host: str = DEFAULT_LOG_HOST
    log_port: Optional[int] = DEFAULT_LOG_PORT
    telemetry_preset: str = "production"
    unmatched_placeholder: str = DEFAULT_UNMATCHED

    def __post_init__(self) -> None:
        if self.telemetry_preset not in PRESETS:
            raise ValueError(f"Unknown telemetry preset '{self.telemetry_preset}'")
        if self.log_port is not None and not 0 <= self.log_port <= 65535:
            raise ValueError(f"log_port out of range: {self.log_port}")

    @classmethod
    def from_env(cls) -> "Settings":
        log_port: Optional[int] = env_int("LOG_PORT", DEFAULT_LOG_PORT)
        if not env_flag("LOG_STREAM", True):
            log_port = None
        return cls(
            log_host=env("LOG_HOST", DEFAULT_LOG_HOST) or DEFAULT_LOG_HOST,
            log_port=log_port,
            telemetry_preset=(env("TELEMETRY_PRESET") or "production").strip().lower(),
            unmatched_placeholder=env("UNMATCHED", DEFAULT_UNMATCHED) or "",
        )


__all__ = ["Settings", "env_int", "DEFAULT_LOG_HOST", "DEFAULT_LOG_PORT", "DEFAULT_UNMATCHED"]
