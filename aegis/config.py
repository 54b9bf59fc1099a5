"""
Engine configuration for move decisions.
"""

from dataclasses import dataclass
from typing import Optional

from aegis.search.negamax import MAX_SEARCH_DEPTH


@dataclass
class EngineConfig:
    """Configuration for the move arbiter and the external engine session.

    Effort level maps to the external engine's think time; the local
    fallback search always runs at a fixed depth.
    """

    # External engine
    engine_path: Optional[str] = None
    """Path to a UCI engine binary (None = auto-detect Stockfish)"""

    use_external_engine: bool = True
    """Disable to always use the local search"""

    threads: int = 2
    """Threads option sent to the external engine"""

    hash_mb: int = 32
    """Hash (memory budget, MB) option sent to the external engine"""

    boot_timeout_s: float = 2.0
    """How long to wait for the engine handshake before giving up"""

    # Time budget: min(ceiling, floor + effort * step)
    movetime_floor_ms: int = 400
    """Think time at effort level 0"""

    movetime_step_ms: int = 150
    """Extra think time per effort level"""

    movetime_ceiling_ms: int = 4000
    """Upper bound on think time"""

    response_grace_ms: int = 250
    """Slack added to the think time before a request is abandoned"""

    # Local search
    fallback_depth: int = 3
    """Negamax depth used when the external engine cannot answer"""

    # Strength
    default_effort: int = 12
    """Effort level used when the caller does not specify one"""

    max_effort: int = 20
    """Highest accepted effort level"""

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.threads <= 0:
            raise ValueError(f"threads must be positive, got {self.threads}")

        if self.hash_mb <= 0:
            raise ValueError(f"hash_mb must be positive, got {self.hash_mb}")

        if self.movetime_floor_ms <= 0:
            raise ValueError(
                f"movetime_floor_ms must be positive, got {self.movetime_floor_ms}"
            )

        if self.movetime_step_ms < 0:
            raise ValueError(
                f"movetime_step_ms must be non-negative, got {self.movetime_step_ms}"
            )

        if self.movetime_ceiling_ms < self.movetime_floor_ms:
            raise ValueError(
                f"movetime_ceiling_ms ({self.movetime_ceiling_ms}) must be >= "
                f"movetime_floor_ms ({self.movetime_floor_ms})"
            )

        if self.response_grace_ms < 0:
            raise ValueError(
                f"response_grace_ms must be non-negative, got {self.response_grace_ms}"
            )

        if self.boot_timeout_s <= 0:
            raise ValueError(f"boot_timeout_s must be positive, got {self.boot_timeout_s}")

        if not 1 <= self.fallback_depth <= MAX_SEARCH_DEPTH:
            raise ValueError(
                f"fallback_depth should be between 1 and {MAX_SEARCH_DEPTH}, "
                f"got {self.fallback_depth}"
            )

        if not 0 <= self.default_effort <= self.max_effort:
            raise ValueError(
                f"default_effort should be between 0 and {self.max_effort}, "
                f"got {self.default_effort}"
            )

    def clamp_effort(self, effort_level: Optional[int]) -> int:
        """Clamp an effort level into [0, max_effort]."""
        if effort_level is None:
            return self.default_effort
        return max(0, min(self.max_effort, int(effort_level)))

    def movetime_for(self, effort_level: Optional[int], budget_ms: Optional[int] = None) -> int:
        """
        Think time (ms) for an external engine request.

        Args:
            effort_level: Bot strength setting (clamped to [0, max_effort])
            budget_ms: Explicit caller budget; replaces the derived value

        Returns:
            Milliseconds, never above movetime_ceiling_ms
        """
        if budget_ms is not None:
            if budget_ms <= 0:
                raise ValueError(f"budget_ms must be positive, got {budget_ms}")
            return min(self.movetime_ceiling_ms, int(budget_ms))

        effort = self.clamp_effort(effort_level)
        movetime = self.movetime_floor_ms + effort * self.movetime_step_ms
        return min(self.movetime_ceiling_ms, movetime)

    def __repr__(self) -> str:
        """String representation of config."""
        return (
            f"EngineConfig(\n"
            f"  Engine: {self.engine_path or 'auto'} "
            f"(enabled={self.use_external_engine}, threads={self.threads}, hash={self.hash_mb}MB)\n"
            f"  Movetime: {self.movetime_floor_ms}+{self.movetime_step_ms}/level, "
            f"max {self.movetime_ceiling_ms}ms, grace {self.response_grace_ms}ms\n"
            f"  Fallback depth: {self.fallback_depth}\n"
            f")"
        )
