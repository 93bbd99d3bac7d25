"""
Exceptions reported to callers of the parser.

Heuristic ambiguity inside a script never raises; these cover only
precondition failures the caller has to decide about.
"""


class ScriptParseError(Exception):
    """Base class for recoverable parse failures."""


class EmptyScriptError(ScriptParseError):
    """The extracted text is empty or whitespace only."""


class InvalidPageCountError(ScriptParseError):
    """The declared page count is not a positive integer."""


class UnsupportedFormatError(ScriptParseError):
    """The input file type has no text extractor."""


class NoScenesFoundError(ScriptParseError):
    """No scene heading was detected anywhere in the script.

    The degraded result (pages, metadata with warnings) is kept on
    ``result`` so the caller can still show it for manual review.
    """

    def __init__(self, message: str, result=None):
        super().__init__(message)
        self.result = result


class ExtractionError(ScriptParseError):
    """The input file could not be read as a script of its type."""
