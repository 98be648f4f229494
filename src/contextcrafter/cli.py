# src/contextcrafter/cli.py
import sys
import argparse
import json
import logging
import os
from pathlib import Path
from typing import List

# Module imports
from contextcrafter.config import DEFAULT_MODE
from contextcrafter.core.engine import process_project
from contextcrafter.core.ignore import IgnoreMatcher
from contextcrafter.core.scanner import ProjectScanner, load_ignore_patterns
from contextcrafter.errors import ContextCrafterError
from contextcrafter.models import FilePayload, Mode, ProcessedOutput
from contextcrafter.utils.tokenizer import Tokenizer

def create_arg_parser():
    parser = argparse.ArgumentParser(
        description="Package a project's source files into LLM-sized prompt chunks."
    )
    parser.add_argument("root_dir", type=str, nargs="?", default=os.getcwd(), help="Project root directory")
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Output filename (default: {folder_name}_context.txt, or .json with --json)"
    )
    parser.add_argument(
        "-m", "--mode",
        choices=[m.value for m in Mode],
        default=DEFAULT_MODE,
        help="'intelligent' adds a project tree and sorts files; 'raw' keeps scan order"
    )
    parser.add_argument(
        "-i", "--ignore",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Extra gitignore-style pattern (repeatable; '!pattern' re-includes)"
    )
    parser.add_argument("--no-gitignore", action="store_true", help="Do not read the project's .gitignore")
    parser.add_argument("--json", action="store_true", help="Write the chunks as a single JSON document")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    return parser

def get_default_output_name(root_dir: Path, as_json: bool = False) -> str:
    """Generates a dynamic filename based on the directory name."""
    folder_name = root_dir.name

    # Root directory has no name
    if not folder_name:
        folder_name = "project"

    safe_name = folder_name.replace(" ", "_")
    return f"{safe_name}_context.json" if as_json else f"{safe_name}_context.txt"

def chunk_file_names(output_name: str, count: int) -> List[str]:
    """'x_context.txt' -> ['x_context_part1.txt', ...] when there is more than one chunk."""
    if count == 1:
        return [output_name]
    stem, dot, suffix = output_name.rpartition(".")
    if not dot:
        stem, suffix = output_name, ""
    ext = f".{suffix}" if suffix else ""
    return [f"{stem}_part{i}{ext}" for i in range(1, count + 1)]

def print_stats(files: List[FilePayload], output: ProcessedOutput):
    largest = sorted(files, key=lambda f: Tokenizer.count(f.content), reverse=True)

    print("\n--- Top 10 Largest Files (Est. Tokens) ---")
    print(f"{'Rank':<5} | {'Tokens':<10} | {'File Path'}")
    print("-" * 60)
    for i, f in enumerate(largest[:10]):
        print(f"{i+1:<5} | {Tokenizer.count(f.content):<10} | {f.path}")
    print("-" * 60)
    print(f"Total files: {len(files)}")
    print(f"Total tokens: ~{output.token_estimate}")
    print(f"Chunks: {len(output.chunks)}")
    print("-" * 60)

def write_output(root_dir: Path, output_name: str, output: ProcessedOutput, as_json: bool) -> List[Path]:
    if as_json:
        target = root_dir / output_name
        target.write_text(json.dumps(output.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
        return [target]

    written = []
    for name, chunk in zip(chunk_file_names(output_name, len(output.chunks)), output.chunks):
        target = root_dir / name
        # newline="" keeps the files' own line endings
        with open(target, "w", encoding="utf-8", newline="") as f:
            f.write(chunk.render())
        written.append(target)
    return written

def main():
    try:
        # 1. Setup
        parser = create_arg_parser()
        args = parser.parse_args()

        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.WARNING,
            format="%(levelname)s: %(message)s",
            stream=sys.stderr,
        )

        root_dir = Path(args.root_dir).resolve()
        if not root_dir.is_dir():
            print(f"Error: Invalid directory '{root_dir}'", file=sys.stderr)
            sys.exit(1)

        output_file_name = args.output or get_default_output_name(root_dir, args.json)

        print(f"--- contextcrafter ---")
        print(f"Scanning: {root_dir}")
        print(f"Output:   {output_file_name}")
        print(f"Mode:     {args.mode}")

        # 2. Ignore rules: .gitignore, user patterns, then this tool's own output
        stem = output_file_name.rpartition(".")[0] or output_file_name
        patterns = load_ignore_patterns(root_dir, args.ignore, use_gitignore=not args.no_gitignore)
        patterns += [output_file_name, f"{stem}_part*"]

        # 3. Scanning
        scanner = ProjectScanner(root_dir, IgnoreMatcher(patterns))
        files = list(scanner.scan())

        # 4. Assembly
        output = process_project(files, root_dir.name or "project", patterns, args.mode)
        print_stats(files, output)

        # 5. Output Generation
        written = write_output(root_dir, output_file_name, output, args.json)
        for path in written:
            print(f"Success! Context written to: {path.name}")

    except ContextCrafterError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    except KeyboardInterrupt:
        print("\nCancelled.")
        sys.exit(1)

    except OSError as e:
        print(f"Error writing file: {e}", file=sys.stderr)
        sys.exit(1)

if __name__ == "__main__":
    main()
