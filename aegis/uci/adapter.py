"""
External Engine Adapter

Owns one session with an external UCI engine and turns move requests into
protocol traffic. The session is an explicit state machine:

    UNINITIALIZED ──start()──► BOOTING ──uciok──► READY ◄──bestmove── SEARCHING
          │                       │                 │                   ▲
          │ (no binding)          │                 └──request_move()───┘
          ▼                       ▼
     UNAVAILABLE ◄── process exit / launch failure / close() (terminal)

Rules:
    - At most one outstanding request. request_move() while SEARCHING raises
      EngineBusyError; it is never queued.
    - The adapter does not time out on its own. The caller waits with its
      own deadline and calls abandon() when it gives up.
    - A bestmove for an abandoned request is discarded. It can never resolve
      a later request: the session stays SEARCHING until that bestmove
      arrives, so no later request exists yet.

Threading:
    All methods run on one asyncio event loop. on_message() is invoked by
    the binding's reader task.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from aegis.config import EngineConfig
from aegis.errors import (
    EngineBusyError,
    EngineProtocolError,
    EngineUnavailableError,
)
from aegis.uci import protocol
from aegis.uci.binding import EngineBinding, SubprocessBinding, find_engine

logger = logging.getLogger(__name__)


class EngineState(Enum):
    """Lifecycle of an engine session."""
    UNINITIALIZED = "uninitialized"
    BOOTING = "booting"
    READY = "ready"
    SEARCHING = "searching"
    UNAVAILABLE = "unavailable"


@dataclass
class EngineRequest:
    """
    One outstanding search request.

    Attributes:
        request_id: Sequence number within the session
        fen: Position sent to the engine
        movetime_ms: Think time sent to the engine
        result: Resolves to the move in coordinate form, or fails with an
            EngineError
        abandoned: Set by abandon(); the reply will be discarded
    """
    request_id: int
    fen: str
    movetime_ms: int
    result: asyncio.Future = field(repr=False)
    abandoned: bool = False


class EngineAdapter:
    """
    Session with an external UCI engine.

    Attributes:
        state: Current EngineState
        threads: Threads option sent after the handshake
        hash_mb: Hash option sent after the handshake
        engine_name: Name reported by the engine ("id name ...")
    """

    def __init__(
        self,
        binding: Optional[EngineBinding],
        threads: int = 2,
        hash_mb: int = 32,
    ):
        """
        Initialize the adapter.

        Args:
            binding: Transport to the engine process (None = no engine; the
                adapter goes straight to UNAVAILABLE)
            threads: Threads option
            hash_mb: Hash option (MB)
        """
        self.binding = binding
        self.threads = threads
        self.hash_mb = hash_mb
        self.engine_name: Optional[str] = None

        self._request_counter = 0
        self._pending: Optional[EngineRequest] = None
        self._ready_event = asyncio.Event()
        self._closed = False

        if binding is None:
            self.state = EngineState.UNAVAILABLE
            self._ready_event.set()
            logger.info("No engine binding available, adapter disabled")
        else:
            self.state = EngineState.UNINITIALIZED

    @property
    def is_ready(self) -> bool:
        """True if a request can be issued right now."""
        return self.state == EngineState.READY

    @property
    def is_available(self) -> bool:
        """False once the session has failed or been closed for good."""
        return self.state != EngineState.UNAVAILABLE

    @property
    def pending_request(self) -> Optional[EngineRequest]:
        """Request awaiting a bestmove, if any."""
        return self._pending

    async def start(self) -> None:
        """
        Open the binding and send the identification command.

        Launch failures make the session UNAVAILABLE instead of raising.
        """
        if self.state != EngineState.UNINITIALIZED:
            return

        try:
            await self.binding.open(self.on_message, self.on_closed)
            self._send(protocol.UCI)
        except OSError as e:
            logger.warning(f"Could not start engine: {e}")
            self._set_unavailable()
            return

        self.state = EngineState.BOOTING
        logger.info("Engine booting")

    async def wait_ready(self, timeout: float) -> bool:
        """
        Wait until the handshake completes or the session fails.

        Returns:
            True if the session is READY
        """
        if self.state == EngineState.UNINITIALIZED:
            await self.start()

        try:
            await asyncio.wait_for(self._ready_event.wait(), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Engine not ready after {timeout:.1f}s")

        return self.is_ready

    def on_message(self, line: str) -> None:
        """
        Handle one line of engine output.

        Args:
            line: Raw line (without newline)
        """
        if self._closed:
            return

        line = line.strip()
        if not line:
            return

        logger.debug(f"<<< {line}")

        if self.state == EngineState.BOOTING:
            self._handle_booting(line)
        elif protocol.is_bestmove(line):
            self._handle_bestmove(line)
        elif line == protocol.READYOK:
            logger.debug("Engine reported readyok")
        # info, option and other lines carry nothing we need

    def _handle_booting(self, line: str) -> None:
        """Handshake: wait for uciok, then configure and probe."""
        if line.startswith("id name "):
            self.engine_name = line[len("id name "):]
            return

        if protocol.UCIOK not in line:
            return

        self._send(protocol.setoption("Threads", self.threads))
        self._send(protocol.setoption("Hash", self.hash_mb))
        self._send(protocol.ISREADY)

        if self.state == EngineState.BOOTING:
            self.state = EngineState.READY
            self._ready_event.set()
            logger.info(f"Engine ready: {self.engine_name or 'unknown engine'}")

    def _handle_bestmove(self, line: str) -> None:
        """Resolve (or discard) the outstanding request."""
        pending = self._pending
        if pending is None or self.state != EngineState.SEARCHING:
            logger.debug(f"Discarding unsolicited bestmove: {line}")
            return

        self._pending = None
        self.state = EngineState.READY

        if pending.abandoned or pending.result.done():
            logger.info(f"Discarding late bestmove for abandoned request #{pending.request_id}")
            return

        try:
            move = protocol.parse_bestmove(line)
        except EngineProtocolError as e:
            logger.warning(f"Request #{pending.request_id}: {e}")
            pending.result.set_exception(e)
            return

        logger.debug(f"Request #{pending.request_id} answered: {move}")
        pending.result.set_result(move)

    def request_move(self, fen: str, movetime_ms: int) -> EngineRequest:
        """
        Ask the engine for a move.

        Args:
            fen: Position in FEN notation
            movetime_ms: Think time in milliseconds

        Returns:
            EngineRequest whose result future resolves to the move

        Raises:
            EngineBusyError: If a request is already outstanding
            EngineUnavailableError: If the session is not READY
        """
        if self.state == EngineState.SEARCHING:
            raise EngineBusyError(
                f"Request #{self._pending.request_id} is still outstanding"
            )

        if self.state != EngineState.READY:
            raise EngineUnavailableError(f"engine not ready (state={self.state.value})")

        self._request_counter += 1
        request = EngineRequest(
            request_id=self._request_counter,
            fen=fen,
            movetime_ms=int(movetime_ms),
            result=asyncio.get_running_loop().create_future(),
        )

        try:
            self._send(protocol.position_fen(fen))
            self._send(protocol.go_movetime(movetime_ms))
        except OSError as e:
            self._set_unavailable()
            raise EngineUnavailableError(f"Could not send request: {e}") from e

        self._pending = request
        self.state = EngineState.SEARCHING
        logger.debug(f"Request #{request.request_id}: movetime={request.movetime_ms}ms")
        return request

    def abandon(self, request_id: int) -> None:
        """
        Give up on a request.

        Its bestmove will be discarded. A 'stop' is sent so the engine
        answers promptly and the session returns to READY.
        """
        pending = self._pending
        if pending is None or pending.request_id != request_id:
            return

        pending.abandoned = True
        if not pending.result.done():
            pending.result.cancel()

        logger.info(f"Abandoned request #{request_id}")
        try:
            self._send(protocol.STOP)
        except OSError as e:
            logger.warning(f"Could not send stop: {e}")
            self._set_unavailable()

    def on_closed(self) -> None:
        """Engine output ended (process exited or crashed)."""
        if self.state != EngineState.UNAVAILABLE:
            logger.warning(f"Engine session ended while {self.state.value}")
        self._set_unavailable()

    async def close(self) -> None:
        """Terminate the session. No further messages are processed."""
        if self._closed:
            return

        self._set_unavailable()
        self._closed = True

        if self.binding is not None:
            await self.binding.close()

    def _set_unavailable(self) -> None:
        """Enter the terminal state and fail any outstanding request."""
        self.state = EngineState.UNAVAILABLE
        self._ready_event.set()

        pending = self._pending
        self._pending = None
        if pending is not None and not pending.result.done():
            pending.result.set_exception(EngineUnavailableError("Engine session ended"))

    def _send(self, line: str) -> None:
        logger.debug(f">>> {line}")
        self.binding.send(line)

    def __repr__(self) -> str:
        return f"EngineAdapter(state={self.state.value}, engine={self.engine_name!r})"


async def open_adapter(config: EngineConfig) -> EngineAdapter:
    """
    Build and boot an adapter from configuration.

    Always returns an adapter. When the engine is disabled, missing or does
    not finish its handshake within boot_timeout_s, the adapter may be
    UNAVAILABLE or still BOOTING and the arbiter will use the local search.
    """
    binding = None
    if config.use_external_engine:
        engine_path = find_engine(config.engine_path)
        if engine_path is None:
            logger.info("No external engine found, using local search only")
        else:
            binding = SubprocessBinding(engine_path)

    adapter = EngineAdapter(binding, threads=config.threads, hash_mb=config.hash_mb)
    if binding is not None:
        await adapter.wait_ready(config.boot_timeout_s)
    return adapter
