"""
Proof Route Unit Tests
Tests for the client-disconnect handling in api/routes/proof.py
"""
import asyncio
import os
import sys

import pytest

from api.routes import proof as proof_route
from api.routes.proof import ClientDisconnectedError, _run_until_disconnect
from core.game.validation import validate_game_payload
from core.prover.command import ProofCommandArgs
from core.prover.generator import SubprocessProofGenerator

from fixtures.common import FakeProofGenerator, make_payload


class StubRequest:
    """Minimal stand-in for starlette's Request.is_disconnected()."""

    def __init__(self, disconnected: bool):
        self.disconnected = disconnected
        self.polls = 0

    async def is_disconnected(self) -> bool:
        self.polls += 1
        return self.disconnected


@pytest.fixture(autouse=True)
def fast_polling(monkeypatch):
    monkeypatch.setattr(proof_route, "DISCONNECT_POLL_S", 0.01)


@pytest.fixture
def args() -> ProofCommandArgs:
    return ProofCommandArgs.from_request(validate_game_payload(make_payload()))


class TestRunUntilDisconnect:
    """Tests for _run_until_disconnect()."""

    def test_returns_result_while_connected(self, args):
        request = StubRequest(disconnected=False)
        generator = FakeProofGenerator(delay_s=0.05)

        output = asyncio.run(_run_until_disconnect(request, generator.run(args)))

        assert output.ok
        assert request.polls >= 1

    def test_disconnect_cancels_work(self, args):
        request = StubRequest(disconnected=True)
        generator = FakeProofGenerator(delay_s=5.0)
        state = {}

        async def work():
            try:
                return await generator.run(args)
            except asyncio.CancelledError:
                state["cancelled"] = True
                raise

        with pytest.raises(ClientDisconnectedError) as exc_info:
            asyncio.run(_run_until_disconnect(request, work()))

        assert state.get("cancelled") is True
        assert exc_info.value.status_code == 499
        assert exc_info.value.code == "CLIENT_DISCONNECTED"
        assert len(generator.calls) == 1

    @pytest.mark.slow
    def test_disconnect_kills_prover_process(self, args, tmp_path):
        pid_file = tmp_path / "prover.pid"
        script = (
            "import os, time\n"
            f"open({str(pid_file)!r}, 'w').write(str(os.getpid()))\n"
            "time.sleep(30)\n"
        )
        generator = SubprocessProofGenerator([sys.executable, "-c", script])

        class ConnectedUntilStarted(StubRequest):
            async def is_disconnected(self) -> bool:
                self.polls += 1
                return pid_file.exists() and bool(pid_file.read_text())

        with pytest.raises(ClientDisconnectedError):
            asyncio.run(
                _run_until_disconnect(ConnectedUntilStarted(disconnected=False), generator.run(args))
            )

        pid = int(pid_file.read_text())
        with pytest.raises(ProcessLookupError):
            os.kill(pid, 0)
