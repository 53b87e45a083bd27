"""Exceptions raised by the outline pipeline."""


class OutlineError(Exception):
    """Base class for outline generation failures."""


class InvalidInputError(OutlineError, ValueError):
    """The scan root is unusable (relative path, missing directory)."""


class NoSourceFilesError(OutlineError):
    """The scan finished without finding a single C/C++ source file."""


class SymbolProviderError(OutlineError):
    """A symbol provider could not outline one file.

    Always contained by the fetcher; the file is reported with no symbols.
    """


class PipelineError(OutlineError):
    """An unexpected error escaped a pipeline pass."""
