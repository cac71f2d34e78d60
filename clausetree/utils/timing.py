# clausetree/utils/timing.py
"""
Timing helpers for logging how long analysis phases take.
"""
import time
from typing import Dict, List, Optional

from ..logging_config import get_logger

logger = get_logger('timing')


class Timer:
    """
    Context manager for timing code blocks.

    Usage:
        with Timer("Validate response"):
            ...
    """

    def __init__(self, name: str, log_level: str = "INFO"):
        self.name = name
        self.log_level = log_level.upper()
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None

    def _log(self, message: str) -> None:
        getattr(logger, self.log_level.lower(), logger.info)(message)

    def __enter__(self):
        self.start_time = time.perf_counter()
        self._log(f"⏱️  START: {self.name}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.end_time = time.perf_counter()
        elapsed = self.end_time - self.start_time

        if exc_type is not None:
            logger.debug(f"FAILED: {self.name} (after {elapsed:.3f}s) - {exc_type.__name__}: {exc_val}")
        else:
            self._log(f"DONE: {self.name} ({elapsed:.3f}s)")

        return False  # Don't suppress exceptions

    @property
    def elapsed(self) -> float:
        """Elapsed time in seconds."""
        if self.end_time and self.start_time:
            return self.end_time - self.start_time
        elif self.start_time:
            return time.perf_counter() - self.start_time
        return 0.0


class PhaseTimer:
    """
    Records checkpoints for the phases of one multi-step operation.

    Usage:
        timer = PhaseTimer("Analyze Romans 12:1")
        timer.checkpoint("Generate")
        timer.checkpoint("Validate")
        timer.finish()
    """

    def __init__(self, operation_name: str):
        self.operation_name = operation_name
        self.start_time = time.perf_counter()
        self.last_checkpoint = self.start_time
        self.checkpoints: List[Dict] = []
        logger.debug(f"🚀 BEGIN: {operation_name}")

    def checkpoint(self, phase_name: str) -> float:
        """
        Record the end of a phase.

        Returns:
            Seconds since the previous checkpoint
        """
        now = time.perf_counter()
        elapsed_since_last = now - self.last_checkpoint
        self.checkpoints.append({
            'name': phase_name,
            'elapsed_since_last': elapsed_since_last,
            'elapsed_total': now - self.start_time,
        })
        self.last_checkpoint = now
        return elapsed_since_last

    def finish(self) -> dict:
        """
        Log a summary of all phases.

        Returns:
            Dictionary with timing statistics
        """
        total_time = time.perf_counter() - self.start_time
        breakdown = ", ".join(
            f"{cp['name']} {cp['elapsed_since_last']:.2f}s" for cp in self.checkpoints
        )
        logger.debug(f"DONE: {self.operation_name} (total {total_time:.2f}s; {breakdown})")
        return {
            'operation': self.operation_name,
            'total_time': total_time,
            'checkpoints': self.checkpoints,
        }
