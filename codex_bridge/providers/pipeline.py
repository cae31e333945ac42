"""Shared line -> event pipeline.

Turns a child's stdout into the completion event sequence:
- one event per line, decoded by the engine's ``parse_line``
- a single ``Stop(END_TURN)`` as soon as stdout reaches end of output
- a read failure propagates after the events already delivered

Whatever way the sequence ends (exhausted, failed, or closed early by the
consumer) the child is not left running.
"""

from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterator, Callable, Protocol

from codex_bridge.providers.models import CompletionEvent, Stop, StopReason, ToolUse
from codex_bridge.providers.tool_logging import describe_tool_use

log = logging.getLogger("codex.pipeline")

# Seconds a child may keep running after closing stdout before it is killed.
REAP_GRACE = 1.0


class OutputSource(Protocol):
    """A running child whose stdout is consumed line by line."""

    @property
    def pid(self) -> int: ...

    @property
    def returncode(self) -> int | None: ...

    def lines(self) -> AsyncIterator[str]: ...

    async def wait(self) -> int: ...

    def kill(self) -> None: ...


async def _reap(child: OutputSource, reached_eof: bool) -> None:
    if reached_eof and child.returncode is None:
        try:
            await asyncio.wait_for(child.wait(), REAP_GRACE)
        except asyncio.TimeoutError:
            log.warning(f"codex process {child.pid} still running after end of output")

    if child.returncode is None:
        if not reached_eof:
            log.warning(f"Killing abandoned codex process {child.pid}")
        child.kill()
        await child.wait()
    elif reached_eof:
        if child.returncode != 0:
            log.warning(f"codex exited with code {child.returncode}")
        else:
            log.debug("codex exited cleanly")


async def iter_completion_events(
    child: OutputSource,
    parse_line: Callable[[str], CompletionEvent],
) -> AsyncIterator[CompletionEvent]:
    """Yield completion events decoded from ``child``'s output."""

    reached_eof = False
    try:
        async for line in child.lines():
            event = parse_line(line)
            if isinstance(event, ToolUse):
                log.info(describe_tool_use(event.name, event.input))
            yield event

        reached_eof = True
        yield Stop(StopReason.END_TURN)
    finally:
        await _reap(child, reached_eof)
