# src/contextcrafter/core/packer.py
import logging
from typing import List, Sequence

from contextcrafter.config import MAX_TOKENS_PER_CHUNK, NO_CONTENT_TEXT
from contextcrafter.core.formatter import render_part
from contextcrafter.errors import InvalidInputError
from contextcrafter.models import Chunk, CodePart, Part, TextPart, fence_for, render_code
from contextcrafter.utils.tokenizer import Tokenizer

logger = logging.getLogger(__name__)


def _split_lines(content: str, overhead: int, budget: int) -> List[str]:
    """
    Groups lines so that overhead + fragment length stays within budget.
    A single line that cannot fit on its own still gets its own fragment.
    """
    fragments: List[str] = []
    current: List[str] = []
    size = 0
    for line in content.splitlines(keepends=True):
        if current and Tokenizer.count_chars(overhead + size + len(line)) > budget:
            fragments.append("".join(current))
            current, size = [], 0
        current.append(line)
        size += len(line)
    if current:
        fragments.append("".join(current))
    return fragments


def split_part(part: Part, budget: int) -> List[Part]:
    """
    Splits an oversized part on line boundaries. Code fragments keep the
    path header and fence of the original file, and their contents
    concatenate back to the original content.
    """
    if isinstance(part, CodePart):
        # A fragment's fence is never longer than the whole file's.
        overhead = len(render_code(part.path, part.language, "", fence_for(part.content)))
        pieces = _split_lines(part.content, overhead, budget)
        fragments: List[Part] = [CodePart(part.path, part.language, piece) for piece in pieces]
    else:
        fragments = [TextPart(piece) for piece in _split_lines(part.content, 0, budget)]
    return fragments or [part]


class _ChunkBuilder:
    def __init__(self, budget: int):
        self.budget = budget
        self.chunks: List[Chunk] = []
        self.current: List[Part] = []
        self.tokens = 0

    def close(self):
        if self.current:
            self.chunks.append(Chunk(tuple(self.current)))
            self.current, self.tokens = [], 0

    def add(self, part: Part, cost: int):
        if cost > self.budget:
            # Unsplittable unit larger than the budget: it gets a chunk to itself.
            label = part.path if isinstance(part, CodePart) else "text"
            logger.warning("A single line of %s needs ~%d tokens, over the %d budget", label, cost, self.budget)
            self.close()
            self.current.append(part)
            self.tokens = cost
            self.close()
            return
        if self.current and self.tokens + cost > self.budget:
            self.close()
        self.current.append(part)
        self.tokens += cost


def pack(parts: Sequence[Part], max_tokens_per_chunk: int = MAX_TOKENS_PER_CHUNK) -> List[Chunk]:
    """
    Greedy, order-preserving packing of parts into chunks.
    Never returns an empty list.
    """
    if max_tokens_per_chunk < 1:
        raise InvalidInputError(f"max_tokens_per_chunk must be positive, got {max_tokens_per_chunk}")

    if not parts:
        return [Chunk((TextPart(NO_CONTENT_TEXT),))]

    builder = _ChunkBuilder(max_tokens_per_chunk)
    for part in parts:
        cost = Tokenizer.count(render_part(part))
        if cost <= max_tokens_per_chunk:
            builder.add(part, cost)
            continue

        fragments = split_part(part, max_tokens_per_chunk)
        if isinstance(part, CodePart):
            logger.info("Splitting %s (~%d tokens) into %d fragments", part.path, cost, len(fragments))
        builder.close()
        for fragment in fragments:
            builder.add(fragment, Tokenizer.count(render_part(fragment)))

    builder.close()
    logger.debug("Packed %d parts into %d chunks", len(parts), len(builder.chunks))
    return builder.chunks
