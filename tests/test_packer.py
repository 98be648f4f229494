# tests/test_packer.py
import logging

import pytest

from contextcrafter.config import NO_CONTENT_TEXT
from contextcrafter.core.formatter import render_part
from contextcrafter.core.packer import pack, split_part
from contextcrafter.errors import InvalidInputError
from contextcrafter.models import CodePart, TextPart
from contextcrafter.utils.tokenizer import Tokenizer

def numbered_lines(count: int) -> str:
    return "".join(f"line {i:03d}\n" for i in range(count))

# --- Test 1: Token estimator ---

def test_tokenizer_ratio():
    assert Tokenizer.count("") == 0
    assert Tokenizer.count("abcd") == 1
    assert Tokenizer.count("abcde") == 2
    assert Tokenizer.count_chars(400) == 100

@pytest.mark.parametrize("a, b", [("", "x"), ("abc", "de"), ("a" * 7, "b" * 9), ("abcd", "efgh")])
def test_tokenizer_is_subadditive_with_bounded_slack(a, b):
    assert Tokenizer.count(a + b) <= Tokenizer.count(a) + Tokenizer.count(b) <= Tokenizer.count(a + b) + 1

# --- Test 2: Greedy packing ---

def test_zero_parts_yield_a_no_content_chunk():
    chunks = pack([], 100)
    assert len(chunks) == 1
    assert chunks[0].parts == (TextPart(NO_CONTENT_TEXT),)

def test_non_positive_budget_is_rejected():
    with pytest.raises(InvalidInputError):
        pack([TextPart("x")], 0)

def test_everything_fits_in_one_chunk():
    parts = [TextPart("header\n"), CodePart("a.py", "python", "print(1)")]
    chunks = pack(parts, 1000)
    assert len(chunks) == 1
    assert chunks[0].parts == tuple(parts)

def test_greedy_order_preserving_split():
    # 40 chars == 10 tokens each
    parts = [TextPart("a" * 40), TextPart("b" * 40), TextPart("c" * 40)]
    chunks = pack(parts, 25)
    assert [c.parts for c in chunks] == [(parts[0], parts[1]), (parts[2],)]

def test_exact_fit_stays_in_chunk():
    parts = [TextPart("a" * 40), TextPart("b" * 40)]
    assert len(pack(parts, 20)) == 1

def test_chunks_respect_budget():
    parts = [CodePart(f"f{i}.py", "python", "x = 1\n" * (i + 1)) for i in range(30)]
    chunks = pack(parts, 60)
    assert len(chunks) > 1
    for chunk in chunks:
        assert Tokenizer.count(chunk.render()) <= 60
    assert [p for c in chunks for p in c.parts] == parts

# --- Test 3: Oversized fallback ---

def test_oversized_file_is_split_on_lines():
    content = numbered_lines(100)
    part = CodePart("big.py", "python", content)
    assert Tokenizer.count(render_part(part)) > 50

    chunks = pack([part], 50)
    fragments = [p for c in chunks for p in c.parts]

    assert len(chunks) > 1
    assert all(f.path == "big.py" and f.language == "python" for f in fragments)
    assert "".join(f.content for f in fragments) == content
    assert all(f.content.endswith("\n") for f in fragments)
    for chunk in chunks:
        assert chunk.render().startswith("--- File: big.py ---\n```python\n")
        assert Tokenizer.count(chunk.render()) <= 50

def test_oversized_file_closes_current_chunk_and_keeps_order():
    small = CodePart("small.py", "python", "a = 1\n")
    big = CodePart("big.py", "python", numbered_lines(100))
    tail = CodePart("tail.py", "python", "b = 2\n")

    chunks = pack([small, big, tail], 50)

    assert chunks[0].parts == (small,)
    paths = [p.path for c in chunks for p in c.parts]
    assert paths[0] == "small.py"
    assert paths[-1] == "tail.py"
    assert set(paths[1:-1]) == {"big.py"}

def test_oversized_text_part_is_split_on_lines():
    text = ("a" * 19 + "\n") * 30
    fragments = split_part(TextPart(text), 40)
    assert len(fragments) == 4
    assert all(isinstance(f, TextPart) for f in fragments)
    assert "".join(f.content for f in fragments) == text

def test_single_line_over_budget_gets_its_own_chunk(caplog):
    head = TextPart("intro\n")
    huge = CodePart("min.js", "javascript", "x" * 1000)
    tail = TextPart("outro\n")

    with caplog.at_level(logging.WARNING, logger="contextcrafter.core.packer"):
        chunks = pack([head, huge, tail], 50)

    assert [c.parts for c in chunks] == [(head,), (huge,), (tail,)]
    assert Tokenizer.count(chunks[1].render()) > 50
    assert "min.js" in caplog.text
