from autopch.ingest.parser import (
    DEFAULT_MAX_DEPTH,
    LineCursor,
    ParsedLog,
    parse_log,
    parse_log_detailed,
    read_log,
)
from autopch.ingest.registry import detect_format, format_for_id, resolve_format

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "LineCursor",
    "ParsedLog",
    "detect_format",
    "format_for_id",
    "parse_log",
    "parse_log_detailed",
    "read_log",
    "resolve_format",
]
