"""Time conversion utilities."""

from functools import lru_cache


@lru_cache(maxsize=4096)
def ms_to_display(ms: int) -> str:
    """Convert milliseconds to display string 'MM:SS.mmm'."""
    if ms < 0:
        ms = 0
    minutes, remainder = divmod(ms, 60_000)
    seconds, millis = divmod(remainder, 1000)
    return f"{minutes:02d}:{seconds:02d}.{millis:03d}"


@lru_cache(maxsize=4096)
def ms_to_srt_time(ms: int) -> str:
    """Convert milliseconds to SRT time format 'HH:MM:SS,mmm'."""
    if ms < 0:
        ms = 0
    hours = ms // 3_600_000
    remainder = ms % 3_600_000
    minutes = remainder // 60_000
    remainder = remainder % 60_000
    seconds = remainder // 1000
    millis = remainder % 1000
    return f"{hours:02d}:{minutes:02d}:{seconds:02d},{millis:03d}"


def seconds_to_ms(seconds: float) -> int:
    """Convert seconds (float) to integer milliseconds."""
    return int(round(seconds * 1000))


def srt_time_to_ms(text: str) -> int:
    """Parse SRT time 'HH:MM:SS,mmm' → milliseconds."""
    text = text.strip().replace(",", ".")
    parts = text.split(":")
    if len(parts) != 3:
        raise ValueError(f"Expected HH:MM:SS,mmm format, got '{text}'")
    hours = int(parts[0])
    minutes = int(parts[1])
    sec_ms = float(parts[2])
    return int(round(hours * 3_600_000 + minutes * 60_000 + sec_ms * 1000))
