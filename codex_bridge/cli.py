"""Ask the local codex binary one question and stream the answer.

A thin front-end over CodexCliProvider: authenticates from
~/.codex/config.toml, runs a single completion and prints the text to stdout.
Tool invocations are reported on stderr.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import assert_never

from codex_bridge.errors import AuthenticateError, InvocationError, StreamReadError
from codex_bridge.providers.codex.config import ProviderSettings
from codex_bridge.providers.codex.provider import CodexCliProvider
from codex_bridge.providers.models import CompletionRequest, Message, Role, Stop, Text, ToolUse


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Stream one completion from the codex CLI")
    parser.add_argument("prompt", nargs="+", help="user prompt")
    parser.add_argument(
        "--model",
        "-m",
        default=None,
        help="model name passed to codex (default: the provider's default model)",
    )
    parser.add_argument(
        "--binary",
        default=None,
        help="codex executable (default: CODEX_BINARY_PATH or codex)",
    )
    parser.add_argument("--system", default=None, help="optional system message")
    parser.add_argument("--verbose", "-v", action="store_true", help="debug logging")
    return parser.parse_args(argv)


def _build_request(prompt: str, system: str | None) -> CompletionRequest:
    messages = []
    if system:
        messages.append(Message(Role.SYSTEM, system))
    messages.append(Message(Role.USER, prompt))
    return CompletionRequest(messages=messages)


async def main(argv: list[str]) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    prompt_text = " ".join(args.prompt).strip()
    if not prompt_text:
        print("Error: empty prompt", file=sys.stderr)
        return 1

    settings = ProviderSettings.from_env()
    if args.binary or args.model:
        settings = ProviderSettings(
            binary_path=args.binary or settings.binary_path,
            mcp_servers=settings.mcp_servers,
            available_models=(args.model,) if args.model else settings.available_models,
        )
    provider = CodexCliProvider(settings)

    try:
        await provider.authenticate()
    except AuthenticateError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    model = provider.default_model()
    try:
        stream = await model.stream_completion(_build_request(prompt_text, args.system))
        async for event in stream:
            match event:
                case Text(text=text):
                    print(text, flush=True)
                case ToolUse(name=name):
                    print(f"[tool:{name}]", file=sys.stderr)
                case Stop():
                    pass
                case _:
                    assert_never(event)
    except InvocationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except StreamReadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 3
    return 0


def run() -> None:
    raise SystemExit(asyncio.run(main(sys.argv[1:])))


if __name__ == "__main__":
    run()
