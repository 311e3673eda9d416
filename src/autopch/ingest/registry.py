from __future__ import annotations

from autopch.exceptions import UnknownLogFormat
from autopch.ingest.format_contract import LogFormat
from autopch.ingest.gcc_format import GCC_NESTING_MARKER, GccLogFormat
from autopch.ingest.msvc_format import MsvcLogFormat

AUTO_FORMAT_ID = "auto"

_FORMATS_BY_ID: dict[str, LogFormat] = {}


def register_format(log_format: LogFormat) -> None:
    _FORMATS_BY_ID[log_format.format_id.lower()] = log_format


def format_for_id(format_id: str) -> LogFormat | None:
    return _FORMATS_BY_ID.get(format_id.lower())


def registered_format_ids() -> list[str]:
    return list(_FORMATS_BY_ID)


def detect_format(first_line: str | None) -> LogFormat:
    """Pick the grammar from the first character of the log.

    A leading nesting dot means gcc; anything else, including an empty log,
    is read as msvc.
    """
    if first_line is not None and first_line.startswith(GCC_NESTING_MARKER):
        return _FORMATS_BY_ID["gcc"]
    return _FORMATS_BY_ID["msvc"]


def resolve_format(
    format_id: str | None,
    *,
    first_line: str | None,
    msvc_prefix: str | None = None,
) -> LogFormat:
    if format_id is None or format_id.lower() == AUTO_FORMAT_ID:
        log_format = detect_format(first_line)
    else:
        found = format_for_id(format_id)
        if found is None:
            raise UnknownLogFormat(format_id)
        log_format = found
    if msvc_prefix is not None and isinstance(log_format, MsvcLogFormat):
        return MsvcLogFormat(prefix=msvc_prefix)
    return log_format


register_format(GccLogFormat())
register_format(MsvcLogFormat())
