import math
import re

_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ns|us|µs|ms|s|m|h)")

_UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}


def parse_duration(value: str) -> float:
    """
    Parses a Go-style duration string ('30s', '1m30s', '500ms', '2h') into seconds.

    A bare number is read as seconds so that plain environment values like
    SCRAPE_INTERVAL=15 keep working.

    Raises:
        ValueError: If the string is not a valid duration.
    """
    text = (value or "").strip().lower()
    if not text:
        raise ValueError("Invalid duration: empty string.")

    try:
        seconds = float(text)
    except ValueError:
        pass
    else:
        if not math.isfinite(seconds):
            raise ValueError(f"Invalid duration: '{value}' is not finite.")
        return seconds

    total = 0.0
    position = 0
    for match in _DURATION_PART.finditer(text):
        if match.start() != position:
            break
        total += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
        position = match.end()

    if position != len(text):
        raise ValueError(f"Invalid duration format: '{value}'. Use e.g. '30s', '1m30s', '500ms' or '2h'.")
    return total
