"""
Shared fixtures: an in-memory engine binding that records commands and
answers like a tiny UCI engine.
"""

import asyncio
from typing import List, Optional

import pytest

from aegis.uci.adapter import EngineAdapter

FOOLS_MATE_FEN = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"


class FakeBinding:
    """
    Engine transport stand-in.

    Attributes:
        sent: Every command line the adapter sent
        handshake: Answer 'uci' with id/uciok automatically
        bestmove: Answer 'go' with 'bestmove <bestmove>' (None = stay silent)
        fail_open: Make open() raise as if the binary were missing
    """

    def __init__(
        self,
        handshake: bool = True,
        bestmove: Optional[str] = None,
        fail_open: bool = False,
    ):
        self.sent: List[str] = []
        self.handshake = handshake
        self.bestmove = bestmove
        self.fail_open = fail_open
        self.closed = False
        self.on_line = None
        self.on_closed = None

    async def open(self, on_line, on_closed):
        if self.fail_open:
            raise FileNotFoundError("stockfish: not found")
        self.on_line = on_line
        self.on_closed = on_closed

    def send(self, line: str) -> None:
        self.sent.append(line)
        loop = asyncio.get_running_loop()

        if line == "uci" and self.handshake:
            loop.call_soon(self.on_line, "id name FakeFish 1.0")
            loop.call_soon(self.on_line, "uciok")
        elif line == "isready":
            loop.call_soon(self.on_line, "readyok")
        elif line.startswith("go") and self.bestmove is not None:
            loop.call_soon(self.on_line, "info depth 1 score cp 10")
            loop.call_soon(self.on_line, f"bestmove {self.bestmove}")

    def reply(self, line: str) -> None:
        """Deliver an engine line right now."""
        self.on_line(line)

    async def close(self):
        self.closed = True

    def commands(self, prefix: str) -> List[str]:
        return [line for line in self.sent if line.startswith(prefix)]


async def ready_adapter(binding: FakeBinding, **kwargs) -> EngineAdapter:
    """Adapter that has completed its handshake with binding."""
    adapter = EngineAdapter(binding, **kwargs)
    assert await adapter.wait_ready(timeout=1.0)
    return adapter


@pytest.fixture
def binding():
    """Fake engine that completes the handshake and never answers 'go'."""
    return FakeBinding()
