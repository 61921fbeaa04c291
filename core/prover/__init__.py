"""
External prover integration.

Builds prover command lines and runs the prover as a subprocess.
"""

from .command import REDACTED, ProofCommandArgs, build_argv, format_command
from .generator import ProcessOutput, ProofGenerator, SubprocessProofGenerator
from .service import ProofOutcome, generate_proof

__all__ = [
    "REDACTED",
    "ProofCommandArgs",
    "build_argv",
    "format_command",
    "ProcessOutput",
    "ProofGenerator",
    "SubprocessProofGenerator",
    "ProofOutcome",
    "generate_proof",
]
