"""
Runtime Configuration Module

Provides configuration loading and management for the proof API.
"""

from .runtime import (
    AccessLogConfig,
    ProverConfig,
    RuntimeConfig,
    ServerConfig,
    get_default_config_template,
    load_runtime_config,
)

__all__ = [
    "AccessLogConfig",
    "ProverConfig",
    "RuntimeConfig",
    "ServerConfig",
    "get_default_config_template",
    "load_runtime_config",
]
