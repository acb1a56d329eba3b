import logging
import re
from datetime import datetime, timezone

_logger = logging.getLogger("clinvar_vcv")

DATE_FORMAT = "%Y-%m-%d"


def sanitize_date(s: str) -> str:
    """
    Parse a string which starts with a valid date in format YYYY-MM-DD.

    This function is permissive and discards trailing input because ClinVar has
    some dates like '2018-06-21-05:00'
    """
    if not s:
        return s
    pattern_str = r"^(\d{4}-\d{2}-\d{2})"
    date_pattern = re.compile(pattern_str)
    match = date_pattern.match(s)
    if match:
        if match.span()[1] != len(s):
            _logger.warning(
                f"Trailing content trimmed from date."
                f" Date {match.group(1)} was followed by {s[match.span()[1]:]}"
            )
        return match.group(1)
    else:
        raise ValueError(f"Invalid date: {s}, must match {pattern_str}")


def parse_date(s: str | None) -> int:
    """
    Converts a ClinVar date to seconds since the Unix epoch, at UTC midnight.

    Example:
        >>> parse_date("1970-01-02")
        86400
        >>> parse_date("2018-06-21-05:00")
        1529539200
    """
    if not s:
        raise ValueError(f"Invalid date: {s!r}, a date is required")
    parsed = datetime.strptime(sanitize_date(s), DATE_FORMAT)
    return int(parsed.replace(tzinfo=timezone.utc).timestamp())
