"""
Asyncio helpers: off-loop file reads and bounded waits.
"""

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Awaitable, Generic, Optional, Tuple, Type, TypeVar

T = TypeVar("T")


async def read_text(path: Path) -> str:
    """Read a UTF-8 text file without blocking the event loop."""
    return await asyncio.to_thread(Path(path).read_text, encoding="utf-8")


async def read_bytes(path: Path) -> bytes:
    """Read a binary file without blocking the event loop."""
    return await asyncio.to_thread(Path(path).read_bytes)


async def write_bytes(path: Path, data: bytes) -> None:
    """Write a binary file without blocking the event loop."""
    await asyncio.to_thread(Path(path).write_bytes, data)


@dataclass
class WaitOutcome(Generic[T]):
    """
    Result of a bounded wait.

    Attributes:
        value: Value produced by the operation (None when timed out)
        timed_out: True when the budget ran out first
        budget_ms: Budget that applied
    """

    value: Optional[T] = None
    timed_out: bool = False
    budget_ms: int = 0


async def try_with_timeout(
    operation: Awaitable[T],
    budget_ms: int,
    timeout_errors: Tuple[Type[BaseException], ...] = (),
) -> WaitOutcome[T]:
    """
    Await operation within budget_ms, reporting a timeout instead of raising.

    The caller decides whether a timeout is tolerable or fatal. Errors other
    than timeouts propagate unchanged.

    Args:
        operation: Awaitable to run
        budget_ms: Time budget in milliseconds
        timeout_errors: Extra exception types that also mean "timed out"
            (e.g. a browser driver's own timeout error)

    Returns:
        WaitOutcome with either the value or timed_out=True
    """
    try:
        value: Any = await asyncio.wait_for(operation, timeout=budget_ms / 1000)
    except (asyncio.TimeoutError, *timeout_errors):
        return WaitOutcome(timed_out=True, budget_ms=budget_ms)
    return WaitOutcome(value=value, budget_ms=budget_ms)
