# src/contextcrafter/core/engine.py
import logging
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Union

from contextcrafter.config import DEFAULT_MODE, MAX_TOKENS_PER_CHUNK
from contextcrafter.core.formatter import coerce_mode, format_parts, render_parts
from contextcrafter.core.ignore import IgnoreMatcher, normalize_path
from contextcrafter.core.packer import pack
from contextcrafter.errors import EmptyProjectError, InvalidInputError
from contextcrafter.models import FilePayload, Mode, ProcessedOutput
from contextcrafter.utils.tokenizer import Tokenizer

logger = logging.getLogger(__name__)

FileLike = Union[FilePayload, Mapping[str, Any]]


def validate_path(path: Any) -> str:
    if not isinstance(path, str) or not path:
        raise InvalidInputError(f"File path must be a non-empty string, got {path!r}")
    if "\x00" in path or "\\" in path:
        raise InvalidInputError(f"File path {path!r} must be forward-slash delimited")
    if path.startswith("/"):
        raise InvalidInputError(f"File path {path!r} must be relative to the project root")

    path = normalize_path(path)
    segments = path.split("/")
    if any(s in ("", ".", "..") for s in segments):
        raise InvalidInputError(f"File path {path!r} contains an empty, '.' or '..' segment")
    return path


def normalize_files(files: Iterable[FileLike]) -> List[FilePayload]:
    """
    Validates input files and resolves duplicated paths: the last content
    wins and the file keeps the position of its first occurrence.
    """
    by_path = {}
    for f in files:
        if isinstance(f, FilePayload):
            path, content = f.path, f.content
        elif isinstance(f, Mapping):
            path, content = f.get("path"), f.get("content")
        else:
            raise InvalidInputError(f"Expected a FilePayload or a {{path, content}} mapping, got {type(f).__name__}")

        path = validate_path(path)
        if not isinstance(content, str):
            raise InvalidInputError(f"Content of {path} is not decoded text ({type(content).__name__})")
        if path in by_path:
            logger.debug("Duplicate path %s, keeping the last content", path)
        by_path[path] = content

    return [FilePayload(path, content) for path, content in by_path.items()]


def process_project(
    files: Iterable[FileLike],
    project_name: str,
    ignore_patterns: Optional[Sequence[str]] = None,
    mode: Union[Mode, str] = DEFAULT_MODE,
    max_tokens_per_chunk: int = MAX_TOKENS_PER_CHUNK,
) -> ProcessedOutput:
    """
    Filters, formats and packs a project into a ProcessedOutput.

    Raises EmptyProjectError when no file survives the ignore rules, and
    InvalidInputError for malformed paths, content, mode or budget. Nothing
    is returned unless the whole output could be built.
    """
    mode = coerce_mode(mode)
    if max_tokens_per_chunk < 1:
        raise InvalidInputError(f"max_tokens_per_chunk must be positive, got {max_tokens_per_chunk}")

    payloads = normalize_files(files)
    included = IgnoreMatcher(ignore_patterns).filter(payloads)
    if not included:
        raise EmptyProjectError(project_name)

    parts = format_parts(included, project_name, mode)
    token_estimate = Tokenizer.count(render_parts(parts))
    chunks = pack(parts, max_tokens_per_chunk)

    logger.info(
        "Assembled %s: %d/%d files, ~%d tokens, %d chunk(s)",
        project_name, len(included), len(payloads), token_estimate, len(chunks),
    )
    return ProcessedOutput(chunks=tuple(chunks), token_estimate=token_estimate)
