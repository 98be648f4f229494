# src/contextcrafter/core/tree.py
from typing import Dict, List, Tuple


def tree_sort_key(path: str) -> Tuple[Tuple[int, str], ...]:
    """
    Sort key placing directories before files at every level,
    siblings in code-point order.
    """
    segments = path.split("/")
    key = [(0, name) for name in segments[:-1]]
    key.append((1, segments[-1]))
    return tuple(key)


class _Node:
    __slots__ = ("dirs", "files")

    def __init__(self):
        self.dirs: Dict[str, "_Node"] = {}
        self.files: List[str] = []


def generate_project_tree(file_paths: List[str], root_name: str) -> str:
    """Generates a string representation of the project tree."""
    root = _Node()
    for path in file_paths:
        *dirs, filename = path.split("/")
        current = root
        for part in dirs:
            current = current.dirs.setdefault(part, _Node())
        current.files.append(filename)

    lines = [f"{root_name}/"]

    def _generate_lines_recursive(node: _Node, prefix: str):
        entries = [(name, node.dirs[name]) for name in sorted(node.dirs)]
        entries += [(name, None) for name in sorted(set(node.files))]
        for i, (name, child) in enumerate(entries):
            is_last = (i == len(entries) - 1)
            connector = "└── " if is_last else "├── "
            lines.append(f"{prefix}{connector}{name}/" if child else f"{prefix}{connector}{name}")

            if child:
                new_prefix = prefix + ("    " if is_last else "│   ")
                _generate_lines_recursive(child, new_prefix)

    _generate_lines_recursive(root, "")
    return "\n".join(lines) + "\n"
