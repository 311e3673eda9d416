"""autopch package root."""

from autopch.closure import compute_keepers
from autopch.exceptions import (
    AutoPchError,
    DestinationUnwritable,
    MalformedLog,
    SourceUnreadable,
)
from autopch.graph import IncludeGraph
from autopch.ingest import parse_log, read_log
from autopch.patterns import PatternSet

__all__ = [
    "__version__",
    "AutoPchError",
    "DestinationUnwritable",
    "IncludeGraph",
    "MalformedLog",
    "PatternSet",
    "SourceUnreadable",
    "compute_keepers",
    "parse_log",
    "read_log",
]

__version__ = "0.1.0"
