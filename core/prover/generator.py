"""
Proof Generator

Collaborator interface for the external proof-generation binary and the
asyncio subprocess implementation used in production.

Usage:
    generator = SubprocessProofGenerator.from_config(config.prover)
    output = await generator.run(args)
    if not output.ok:
        ...  # relay output.stderr
"""

from __future__ import annotations

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from core.config.runtime import ProverConfig
from core.prover.command import ProofCommandArgs, build_argv, format_command
from core.schemas.errors import ProofSpawnError, ProofTimeoutError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessOutput:
    """Captured outcome of one prover process."""
    returncode: int
    stdout: str = ""
    stderr: str = ""
    duration_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class ProofGenerator(ABC):
    """
    Runs the prover for one game result.

    Implementations return a ProcessOutput for any process that ran to
    completion (whatever its exit code) and raise ProofSpawnError when no
    process could be started.
    """

    @abstractmethod
    async def run(self, args: ProofCommandArgs) -> ProcessOutput:
        ...

    def describe(self, args: ProofCommandArgs, *, redact: bool = True) -> str:
        """Human-readable command line for logs and error payloads."""
        return format_command([self.__class__.__name__], args, redact=redact)


class SubprocessProofGenerator(ProofGenerator):
    """
    Launches the prover binary as a child process.

    - No shell is involved; every flag is a separate argv entry
    - At most ``max_concurrent`` provers run at once, later calls wait
    - A run longer than ``timeout_s`` is killed and raises ProofTimeoutError
    - Cancelling the awaiting task kills the child process
    """

    def __init__(
        self,
        command: Sequence[str],
        working_dir: str | Path | None = None,
        timeout_s: float = 900.0,
        max_concurrent: int = 2,
    ):
        if not command:
            raise ValueError("command must not be empty")
        self.command = list(command)
        self.working_dir = str(working_dir) if working_dir is not None else None
        self.timeout_s = timeout_s
        self.max_concurrent = max_concurrent
        self._semaphore = asyncio.Semaphore(max_concurrent)

    @classmethod
    def from_config(cls, config: ProverConfig) -> "SubprocessProofGenerator":
        return cls(
            command=config.command,
            working_dir=config.working_dir,
            timeout_s=config.timeout_s,
            max_concurrent=config.max_concurrent,
        )

    def describe(self, args: ProofCommandArgs, *, redact: bool = True) -> str:
        return format_command(self.command, args, redact=redact)

    async def run(self, args: ProofCommandArgs) -> ProcessOutput:
        argv = build_argv(self.command, args)

        async with self._semaphore:
            logger.debug(f"Starting prover in {self.working_dir}: {self.describe(args)}")
            started = time.perf_counter()
            try:
                process = await asyncio.create_subprocess_exec(
                    *argv,
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE,
                    cwd=self.working_dir,
                )
            except (OSError, ValueError) as e:
                # ValueError: an argument holds a NUL byte
                raise ProofSpawnError(f"Could not start prover '{argv[0]}': {e}") from e

            try:
                stdout, stderr = await asyncio.wait_for(
                    process.communicate(), timeout=self.timeout_s
                )
            except asyncio.TimeoutError:
                await self._kill(process)
                logger.warning(f"Prover exceeded {self.timeout_s:g}s and was killed")
                raise ProofTimeoutError(self.timeout_s) from None
            except asyncio.CancelledError:
                await self._kill(process)
                logger.info("Prover cancelled, child process killed")
                raise

            duration_ms = (time.perf_counter() - started) * 1000.0

        return ProcessOutput(
            returncode=process.returncode,
            stdout=stdout.decode("utf-8", errors="replace"),
            stderr=stderr.decode("utf-8", errors="replace"),
            duration_ms=duration_ms,
        )

    @staticmethod
    async def _kill(process: asyncio.subprocess.Process) -> None:
        if process.returncode is not None:
            return
        try:
            process.kill()
        except ProcessLookupError:
            pass
        await process.wait()
