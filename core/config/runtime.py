"""
Runtime Configuration

Central configuration for the HTTP server, the external prover and the
access log.
"""

from __future__ import annotations

import copy
import json
import logging
import os
import shlex
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


# Environment variable prefix
ENV_PREFIX = "BATTLESHIP_"

# The prover crate lives next to the service root, e.g. ../script
_SERVICE_ROOT = Path(__file__).resolve().parent.parent.parent
_DEFAULT_PROVER_WORKDIR = str(_SERVICE_ROOT.parent / "script")

_DEFAULT_PROVER_COMMAND = ["cargo", "run", "--bin", "prove", "--release", "--"]


def _env_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class ServerConfig:
    """Configuration for the HTTP listener."""
    host: str = "0.0.0.0"
    port: int = 4001
    cors_origins: list[str] = field(default_factory=lambda: ["*"])


@dataclass
class ProverConfig:
    """Configuration for the external proof-generation binary."""
    command: list[str] = field(default_factory=lambda: list(_DEFAULT_PROVER_COMMAND))
    working_dir: str = _DEFAULT_PROVER_WORKDIR
    timeout_s: float = 900.0
    max_concurrent: int = 2
    # Echo the unredacted command line in 500 responses
    expose_command: bool = False

    def __post_init__(self):
        if isinstance(self.command, str):
            self.command = shlex.split(self.command)
        if not self.command:
            raise ValueError("prover.command must not be empty")
        if self.timeout_s <= 0:
            raise ValueError("prover.timeout_s must be > 0")
        if self.max_concurrent < 1:
            raise ValueError("prover.max_concurrent must be >= 1")


@dataclass
class AccessLogConfig:
    """Configuration for the per-request access log file."""
    path: str = "battleship_access.log"
    enabled: bool = True


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for the proof API.

    Can be loaded from:
    - Environment variables
    - JSON file
    - Programmatic construction
    """
    server: ServerConfig = field(default_factory=ServerConfig)
    prover: ProverConfig = field(default_factory=ProverConfig)
    access_log: AccessLogConfig = field(default_factory=AccessLogConfig)
    log_level: str = "INFO"

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - BATTLESHIP_HOST / BATTLESHIP_PORT: listen address
        - BATTLESHIP_CORS_ORIGINS: comma-separated allowed origins
        - BATTLESHIP_PROVER_COMMAND: prover command prefix (shell syntax)
        - BATTLESHIP_PROVER_WORKDIR: prover working directory
        - BATTLESHIP_PROVER_TIMEOUT: per-call timeout in seconds
        - BATTLESHIP_PROVER_MAX_CONCURRENT: simultaneous prover processes
        - BATTLESHIP_EXPOSE_COMMAND: echo raw command in errors (true/false)
        - BATTLESHIP_ACCESS_LOG: access log file path
        - BATTLESHIP_ACCESS_LOG_ENABLED: enable the access log (true/false)
        - BATTLESHIP_LOG_LEVEL: console log level
        """
        overrides: dict[str, Any] = {}

        # Server settings
        if os.getenv(f"{ENV_PREFIX}HOST"):
            overrides.setdefault("server", {})["host"] = os.getenv(f"{ENV_PREFIX}HOST")
        if os.getenv(f"{ENV_PREFIX}PORT"):
            overrides.setdefault("server", {})["port"] = int(os.getenv(f"{ENV_PREFIX}PORT"))
        if os.getenv(f"{ENV_PREFIX}CORS_ORIGINS"):
            overrides.setdefault("server", {})["cors_origins"] = [
                origin.strip()
                for origin in os.getenv(f"{ENV_PREFIX}CORS_ORIGINS", "").split(",")
                if origin.strip()
            ]

        # Prover settings
        if os.getenv(f"{ENV_PREFIX}PROVER_COMMAND"):
            overrides.setdefault("prover", {})["command"] = shlex.split(
                os.getenv(f"{ENV_PREFIX}PROVER_COMMAND", "")
            )
        if os.getenv(f"{ENV_PREFIX}PROVER_WORKDIR"):
            overrides.setdefault("prover", {})["working_dir"] = os.getenv(f"{ENV_PREFIX}PROVER_WORKDIR")
        if os.getenv(f"{ENV_PREFIX}PROVER_TIMEOUT"):
            overrides.setdefault("prover", {})["timeout_s"] = float(os.getenv(f"{ENV_PREFIX}PROVER_TIMEOUT"))
        if os.getenv(f"{ENV_PREFIX}PROVER_MAX_CONCURRENT"):
            overrides.setdefault("prover", {})["max_concurrent"] = int(
                os.getenv(f"{ENV_PREFIX}PROVER_MAX_CONCURRENT")
            )
        if os.getenv(f"{ENV_PREFIX}EXPOSE_COMMAND"):
            overrides.setdefault("prover", {})["expose_command"] = _env_bool(
                os.getenv(f"{ENV_PREFIX}EXPOSE_COMMAND", "false")
            )

        # Access log
        if os.getenv(f"{ENV_PREFIX}ACCESS_LOG"):
            overrides.setdefault("access_log", {})["path"] = os.getenv(f"{ENV_PREFIX}ACCESS_LOG")
        if os.getenv(f"{ENV_PREFIX}ACCESS_LOG_ENABLED"):
            overrides.setdefault("access_log", {})["enabled"] = _env_bool(
                os.getenv(f"{ENV_PREFIX}ACCESS_LOG_ENABLED", "true")
            )

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "INFO").upper()

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_json(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        server_data = data.get("server", {})
        prover_data = data.get("prover", {})
        access_log_data = data.get("access_log", {})

        server = ServerConfig(**server_data) if server_data else ServerConfig()
        prover = ProverConfig(**prover_data) if prover_data else ProverConfig()
        access_log = AccessLogConfig(**access_log_data) if access_log_data else AccessLogConfig()

        return cls(
            server=server,
            prover=prover,
            access_log=access_log,
            log_level=str(data.get("log_level", "INFO")).upper(),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        for section in ("server", "prover", "access_log"):
            if section in overrides:
                target = getattr(new_config, section)
                for key, value in overrides[section].items():
                    setattr(target, key, value)
                # Re-run validation on the mutated section
                if hasattr(target, "__post_init__"):
                    target.__post_init__()

        if "log_level" in overrides:
            new_config.log_level = overrides["log_level"]

        return new_config

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def default_config_paths() -> list[Path]:
    """Config file search order."""
    return [
        Path.cwd() / "battleship.json",
        Path.cwd() / ".battleship.json",
        Path.home() / ".config" / "battleship" / "config.json",
    ]


def load_runtime_config(config_path: Optional[Path] = None) -> RuntimeConfig:
    """
    Load RuntimeConfig from a config file, then overlay environment variables.

    When ``config_path`` is None the default locations are searched in order:
      1. ./battleship.json
      2. ./.battleship.json
      3. ~/.config/battleship/config.json

    Environment variables ALWAYS override config file values.
    """
    config: RuntimeConfig | None = None

    if config_path is not None:
        config = RuntimeConfig.from_json(config_path)
        logger.info(f"Loaded config from {config_path}")
    else:
        for path in default_config_paths():
            if path.exists():
                try:
                    config = RuntimeConfig.from_json(path)
                    logger.info(f"Loaded config from {path}")
                    break
                except (ValueError, TypeError) as e:
                    logger.warning(f"Failed to parse {path}: {e}")

    if config is None:
        config = RuntimeConfig()

    return config.with_env_overrides()


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return json.dumps(RuntimeConfig().to_dict(), indent=2) + "\n"
