# src/contextcrafter/models.py
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

_BACKTICK_RUN = re.compile(r"`{3,}")


class Mode(str, Enum):
    RAW = "raw"
    INTELLIGENT = "intelligent"


def fence_for(content: str) -> str:
    """Three backticks, or one more than the longest run inside the content."""
    longest = max((len(m.group()) for m in _BACKTICK_RUN.finditer(content)), default=0)
    return "`" * max(3, longest + 1)


def code_header(path: str) -> str:
    return f"--- File: {path} ---\n"


def render_code(path: str, language: Optional[str], content: str, fence: Optional[str] = None) -> str:
    # Content is followed by exactly one inserted newline before the closing fence.
    fence = fence or fence_for(content)
    return f"{code_header(path)}{fence}{language or ''}\n{content}\n{fence}\n\n"


@dataclass(frozen=True)
class FilePayload:
    """Immutable input file: forward-slash relative path plus decoded text."""
    path: str
    content: str


@dataclass(frozen=True)
class TextPart:
    """Structural text such as the project tree header."""
    content: str

    def render(self) -> str:
        return self.content


@dataclass(frozen=True)
class CodePart:
    """One file's content (or one line-aligned fragment of an oversized file)."""
    path: str
    language: Optional[str]
    content: str

    def render(self) -> str:
        return render_code(self.path, self.language, self.content)


Part = Union[TextPart, CodePart]


@dataclass(frozen=True)
class Chunk:
    parts: Tuple[Part, ...]

    def render(self) -> str:
        return "".join(p.render() for p in self.parts)

    @property
    def paths(self) -> Tuple[str, ...]:
        return tuple(p.path for p in self.parts if isinstance(p, CodePart))


@dataclass(frozen=True)
class ProcessedOutput:
    chunks: Tuple[Chunk, ...]
    token_estimate: int

    @property
    def is_chunked(self) -> bool:
        return len(self.chunks) > 1

    def to_dict(self) -> Dict[str, Any]:
        """Wire shape consumed by the presentation layer."""
        return {
            "chunks": [chunk.render() for chunk in self.chunks],
            "isChunked": self.is_chunked,
            "token_estimate": self.token_estimate,
        }
