"""
API Dependencies

Dependency injection for the API.
Provides factories for the prover and access log collaborators, and
request-time accessors for the instances attached to the application.
"""

from __future__ import annotations

import logging

from fastapi import Request

from core.access_log import AccessLog, FileAccessLog, NullAccessLog
from core.config.runtime import RuntimeConfig
from core.prover.generator import ProofGenerator, SubprocessProofGenerator

logger = logging.getLogger(__name__)


def build_proof_generator(config: RuntimeConfig) -> ProofGenerator:
    """Create the subprocess-backed prover from configuration."""
    logger.info(
        f"Prover: {' '.join(config.prover.command)} (cwd={config.prover.working_dir}, "
        f"timeout={config.prover.timeout_s:g}s, max_concurrent={config.prover.max_concurrent})"
    )
    return SubprocessProofGenerator.from_config(config.prover)


def build_access_log(config: RuntimeConfig) -> AccessLog:
    """Create the access log sink from configuration."""
    if not config.access_log.enabled:
        logger.info("Access log disabled")
        return NullAccessLog()
    return FileAccessLog(config.access_log.path)


def get_runtime_config(request: Request) -> RuntimeConfig:
    return request.app.state.config


def get_proof_generator(request: Request) -> ProofGenerator:
    return request.app.state.proof_generator
