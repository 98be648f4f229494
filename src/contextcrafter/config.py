# src/contextcrafter/config.py

# Baseline rules, applied before any caller-supplied pattern.
DEFAULT_IGNORE_PATTERNS = [
    "# Version control",
    ".git/",
    ".hg/",
    ".svn/",
    "# Dependencies & virtualenvs",
    "node_modules/",
    "bower_components/",
    "vendor/",
    "venv/",
    ".venv/",
    "__pycache__/",
    "# Build output",
    "dist/",
    "build/",
    "out/",
    "target/",
    ".next/",
    "coverage/",
    ".pytest_cache/",
    ".mypy_cache/",
    "# Editors & OS",
    ".vscode/",
    ".idea/",
    ".DS_Store",
    "# Lock files",
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    "poetry.lock",
    "Cargo.lock",
    "*.lock",
    "# Binaries & media",
    "*.pyc",
    "*.so",
    "*.dll",
    "*.exe",
    "*.bin",
    "*.o",
    "*.class",
    "*.jar",
    "*.zip",
    "*.tar",
    "*.gz",
    "*.png",
    "*.jpg",
    "*.jpeg",
    "*.gif",
    "*.ico",
    "*.pdf",
    "*.woff",
    "*.woff2",
    "*.ttf",
    "*.mp3",
    "*.mp4",
    "*.log",
    "*_context.txt",
    "*_context_part*.txt",
]

# Token budget for a single chunk. Not a user option; tests pass their own.
MAX_TOKENS_PER_CHUNK = 32000

# Average characters per token used by the estimator.
CHARS_PER_TOKEN = 4

# Ceiling on the number of files a collaborator may hand to the engine.
MAX_FILE_COUNT = 5000

# Bytes read from the head of a file to decide whether it is binary.
BINARY_SNIFF_BYTES = 1024

DEFAULT_MODE = "intelligent"

NO_CONTENT_TEXT = "# (no content)\n"
