# src/contextcrafter/errors.py


class ContextCrafterError(Exception):
    """Base class for every error raised by contextcrafter."""


class EmptyProjectError(ContextCrafterError):
    """No file survived ignore filtering."""

    def __init__(self, project_name: str):
        self.project_name = project_name
        super().__init__(f"No files left to assemble for '{project_name}' after applying ignore rules.")


class InvalidInputError(ContextCrafterError):
    """A path, content value, mode or budget handed to the engine is malformed."""


class UpstreamFetchError(ContextCrafterError):
    """Reading the project failed before it reached the engine."""


class FileLimitExceededError(UpstreamFetchError):
    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Project has more than {limit} files; narrow it down with ignore patterns.")
