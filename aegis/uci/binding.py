"""
Transport between the adapter and an engine process.

The adapter never touches the process directly. It sends lines through an
EngineBinding and receives engine output through the callbacks registered
in open(). SubprocessBinding is the real implementation; tests use an
in-memory one.
"""

import asyncio
import logging
import shutil
from pathlib import Path
from typing import Callable, Optional, Protocol, Sequence

logger = logging.getLogger(__name__)

LineCallback = Callable[[str], None]
ClosedCallback = Callable[[], None]


class EngineBinding(Protocol):
    """Minimal transport interface used by :class:`EngineAdapter`."""

    async def open(self, on_line: LineCallback, on_closed: ClosedCallback) -> None: ...

    def send(self, line: str) -> None: ...

    async def close(self) -> None: ...


def find_engine(engine_path: Optional[str] = None) -> Optional[str]:
    """
    Locate a UCI engine binary.

    Args:
        engine_path: Explicit path or command name (None = look for Stockfish)

    Returns:
        Path to the binary, or None if nothing usable was found
    """
    if engine_path is not None:
        if Path(engine_path).exists():
            return engine_path
        return shutil.which(engine_path)

    # Try common locations
    candidates = [
        "stockfish",
        "/usr/local/bin/stockfish",
        "/usr/bin/stockfish",
        "/usr/games/stockfish",
        "/opt/homebrew/bin/stockfish",
    ]

    for candidate in candidates:
        path = shutil.which(candidate)
        if path:
            return path

    return None


class SubprocessBinding:
    """
    Engine process driven through asyncio pipes.

    Attributes:
        engine_path: Binary to launch
        args: Extra command-line arguments for the binary
        process: Running process (None until open())
    """

    def __init__(
        self,
        engine_path: str,
        args: Sequence[str] = (),
        quit_timeout_s: float = 1.0,
    ):
        self.engine_path = engine_path
        self.args = list(args)
        self.quit_timeout_s = quit_timeout_s
        self.process: Optional[asyncio.subprocess.Process] = None
        self._reader: Optional[asyncio.Task] = None

    async def open(self, on_line: LineCallback, on_closed: ClosedCallback) -> None:
        """
        Launch the engine and start delivering its output.

        Raises:
            OSError: If the binary cannot be started
        """
        self.process = await asyncio.create_subprocess_exec(
            self.engine_path,
            *self.args,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.DEVNULL,
        )
        logger.info(f"Started engine process {self.engine_path} (pid {self.process.pid})")
        self._reader = asyncio.create_task(self._read_loop(on_line, on_closed))

    async def _read_loop(self, on_line: LineCallback, on_closed: ClosedCallback) -> None:
        """Forward stdout lines until EOF."""
        try:
            while True:
                raw = await self.process.stdout.readline()
                if not raw:
                    break
                line = raw.decode("utf-8", errors="replace").strip()
                if line:
                    on_line(line)
        finally:
            on_closed()

    def send(self, line: str) -> None:
        """Write one command line to the engine."""
        if self.process is None or self.process.stdin is None:
            raise BrokenPipeError("Engine process is not running")
        if self.process.stdin.is_closing():
            raise BrokenPipeError("Engine stdin is closed")
        self.process.stdin.write((line + "\n").encode("utf-8"))

    async def close(self) -> None:
        """Ask the engine to quit, then terminate it if it does not."""
        if self.process is None:
            return

        if self.process.returncode is None:
            try:
                self.send("quit")
                await self.process.stdin.drain()
            except (BrokenPipeError, ConnectionResetError) as e:
                logger.debug(f"Engine pipe already closed: {e}")

            try:
                await asyncio.wait_for(self.process.wait(), timeout=self.quit_timeout_s)
            except asyncio.TimeoutError:
                logger.warning("Engine did not quit in time, terminating")
                self.process.terminate()
                await self.process.wait()

        if self._reader is not None:
            try:
                await self._reader
            except Exception as e:
                logger.debug(f"Engine reader stopped with error: {e!r}")

        logger.info(f"Engine process exited with code {self.process.returncode}")
