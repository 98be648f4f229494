# src/contextcrafter/core/formatter.py
from typing import Iterable, List, Optional, Sequence, Union

from contextcrafter.core.ignore import IgnoreMatcher
from contextcrafter.core.language import classify
from contextcrafter.core.tree import generate_project_tree, tree_sort_key
from contextcrafter.errors import InvalidInputError
from contextcrafter.models import CodePart, FilePayload, Mode, Part, TextPart


def coerce_mode(mode: Union[Mode, str]) -> Mode:
    try:
        return Mode(mode)
    except ValueError:
        raise InvalidInputError(f"Unknown mode '{mode}'; expected 'raw' or 'intelligent'.") from None


def render_part(part: Part) -> str:
    return part.render()


def render_parts(parts: Iterable[Part]) -> str:
    return "".join(render_part(p) for p in parts)


def render_header(project_name: str, paths: List[str]) -> str:
    tree_str = generate_project_tree(paths, project_name)
    return (
        f"# --- {project_name} Context ---\n"
        f"# Files: {len(paths)}\n"
        f"# --- Project Tree ---\n"
        f"{tree_str}"
        f"# --- Context Start ---\n\n"
    )


def format_parts(files: Sequence[FilePayload], project_name: str, mode: Union[Mode, str]) -> List[Part]:
    """Renders already-filtered files into ordered parts."""
    mode = coerce_mode(mode)
    if mode is Mode.RAW:
        ordered = list(files)
        parts: List[Part] = []
    else:
        ordered = sorted(files, key=lambda f: tree_sort_key(f.path))
        parts = [TextPart(render_header(project_name, [f.path for f in ordered]))]

    parts.extend(CodePart(f.path, classify(f.path), f.content) for f in ordered)
    return parts


def format_document(
    files: Sequence[FilePayload],
    project_name: str,
    rules: Optional[Sequence[str]],
    mode: Union[Mode, str],
) -> List[Part]:
    """Filters files through the ignore rules, then formats them."""
    matcher = IgnoreMatcher(rules)
    return format_parts(matcher.filter(files), project_name, mode)
