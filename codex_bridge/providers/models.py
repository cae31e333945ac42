"""Shared request and event data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Sequence, Union


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


class ToolChoice(str, Enum):
    AUTO = "auto"
    ANY = "any"
    NONE = "none"


class StopReason(str, Enum):
    END_TURN = "end_turn"
    MAX_TOKENS = "max_tokens"
    TOOL_USE = "tool_use"


# A content part is either plain text or a typed mapping ({"type": "text", "text": ...}).
ContentPart = Union[str, Mapping[str, Any]]


@dataclass(frozen=True)
class Message:
    """One chat message."""

    role: Role
    content: str | Sequence[ContentPart] = ""

    def string_contents(self) -> str:
        """Flatten the content to text, skipping non-text parts (images etc)."""
        if isinstance(self.content, str):
            return self.content
        out: list[str] = []
        for part in self.content:
            if isinstance(part, str):
                out.append(part)
            elif isinstance(part, Mapping) and part.get("type", "text") == "text":
                text = part.get("text")
                if isinstance(text, str):
                    out.append(text)
        return "".join(out)


@dataclass
class CompletionRequest:
    """An ordered conversation to complete."""

    messages: list[Message] = field(default_factory=list)


@dataclass(frozen=True)
class Text:
    """A fragment of assistant text."""

    text: str


@dataclass(frozen=True)
class ToolUse:
    """A tool invocation requested by the assistant."""

    id: str
    name: str
    input: Any
    raw_input: str = ""
    is_input_complete: bool = True


@dataclass(frozen=True)
class Stop:
    """Terminal event of a completion stream."""

    reason: StopReason = StopReason.END_TURN


CompletionEvent = Union[Text, ToolUse, Stop]
