"""Child process supervision for codex calls.

One call owns one child. The prompt is written to stdin in full and stdin is
closed before any output is read; stdout is then consumed line by line. A
child that is still running when its handle goes away is killed.
"""

from __future__ import annotations

import asyncio
import logging
import os
import shutil
from typing import AsyncIterator

from codex_bridge.errors import InvocationError, StreamReadError
from codex_bridge.providers.codex.command import Command
from codex_bridge.providers.models import CompletionRequest, Role

log = logging.getLogger("codex.process")

# Large JSON lines (tool inputs) must not trip the StreamReader limit.
LINE_LIMIT = 10 * 1024 * 1024

_ROLE_PREFIX = {
    Role.SYSTEM: "system:",
    Role.USER: "user:",
    Role.ASSISTANT: "assistant:",
    Role.TOOL: "tool:",
}


def serialize_prompt(request: CompletionRequest) -> str:
    """Render messages as ``<role>: <content>`` lines, in request order."""
    return "".join(
        f"{_ROLE_PREFIX[Role(m.role)]} {m.string_contents()}\n" for m in request.messages
    )


class ChildProcess:
    """Handle on a running codex child."""

    def __init__(self, process: asyncio.subprocess.Process):
        self._process = process

    @property
    def pid(self) -> int:
        return self._process.pid

    @property
    def returncode(self) -> int | None:
        return self._process.returncode

    async def lines(self) -> AsyncIterator[str]:
        """Yield stdout lines without their terminators."""
        stdout = self._process.stdout
        if stdout is None:
            raise StreamReadError("codex process stdout missing")

        while True:
            try:
                raw_line = await stdout.readline()
            except (OSError, ValueError) as e:
                raise StreamReadError(f"Failed to read codex output: {e}") from e
            if not raw_line:
                return
            try:
                line = raw_line.decode("utf-8")
            except UnicodeDecodeError as e:
                raise StreamReadError(f"codex output is not valid UTF-8: {e}") from e
            yield line.rstrip("\r\n")

    async def wait(self) -> int:
        return await self._process.wait()

    def kill(self) -> None:
        if self._process.returncode is not None:
            return
        try:
            self._process.kill()
        except ProcessLookupError:
            pass

    def __del__(self) -> None:
        # Dropped without being consumed: never leave the child behind.
        process = getattr(self, "_process", None)
        if process is not None and process.returncode is None:
            try:
                process.kill()
            except (ProcessLookupError, RuntimeError):
                pass


def resolve_executable(command: Command, env: dict[str, str]) -> str:
    """Locate the program on the child's PATH."""
    path = shutil.which(command.program, path=env.get("PATH", os.defpath))
    if path is None:
        raise InvocationError(f"{command.program!r} not found or not executable")
    return path


async def spawn_and_feed(command: Command, prompt_text: str) -> ChildProcess:
    """Spawn ``command``, write ``prompt_text`` to its stdin and close it."""
    env = {**os.environ, **command.env}
    executable = resolve_executable(command, env)
    log.debug(f"Spawning: {command.redacted()}")

    try:
        process = await asyncio.create_subprocess_exec(
            executable,
            *command.argv[1:],
            stdin=command.stdin,
            stdout=command.stdout,
            stderr=command.stderr,
            env=env,
            limit=LINE_LIMIT,
        )
    except OSError as e:
        raise InvocationError(f"Failed to start {command.program}: {e}") from e

    child = ChildProcess(process)
    stdin = process.stdin
    if stdin is None:
        child.kill()
        raise InvocationError("codex process stdin missing")

    try:
        stdin.write(prompt_text.encode("utf-8"))
        await stdin.drain()
        stdin.close()
        await stdin.wait_closed()
    except (BrokenPipeError, ConnectionResetError) as e:
        child.kill()
        await child.wait()
        raise InvocationError(f"Failed to write prompt to {command.program}: {e}") from e

    return child
