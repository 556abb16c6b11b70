"""
Taskboard Config — Server Settings
===================================
Where the server listens and how it behaves. `PORT` is the only
environment variable read; everything else comes from CLI flags.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional


DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 5000
LOG_LEVELS = ("critical", "error", "warning", "info", "debug")


@dataclass
class ServerConfig:
    """Configuration for one server process."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    log_level: str = "info"
    seed: bool = True          # Load the two startup tasks

    def __post_init__(self):
        self.port = parse_port(self.port)
        self.log_level = self.log_level.lower()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(
                f"Unknown log level '{self.log_level}'. Available: {list(LOG_LEVELS)}"
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> ServerConfig:
        """Build a config from `PORT` in the environment plus explicit overrides.

        Overrides set to None are ignored, so argparse defaults can be
        passed straight through.
        """
        env = os.environ if environ is None else environ
        values: dict = {}
        if env.get("PORT"):
            values["port"] = env["PORT"]
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    @property
    def base_url(self) -> str:
        host = "localhost" if self.host in ("0.0.0.0", "") else self.host
        return f"http://{host}:{self.port}"


def parse_port(value) -> int:
    try:
        port = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid port '{value}': must be an integer")
    if not 0 <= port <= 65535:
        raise ValueError(f"Invalid port {port}: must be between 0 and 65535")
    return port
