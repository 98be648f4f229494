# tests/test_language.py
import pytest

from contextcrafter.core.language import classify

@pytest.mark.parametrize("path, expected", [
    ("a.py", "python"),
    ("src/index.ts", "typescript"),
    ("src/App.TSX", "tsx"),
    ("crates/core/lib.rs", "rust"),
    ("Dockerfile", "dockerfile"),
    ("deploy/Dockerfile", "dockerfile"),
    ("Makefile", "makefile"),
    ("README.md", "markdown"),
])
def test_known_languages(path, expected):
    assert classify(path) == expected

@pytest.mark.parametrize("path", ["LICENSE", "data.unknownext", ".bashrc", "bin/run"])
def test_unknown_yields_none(path):
    assert classify(path) is None
