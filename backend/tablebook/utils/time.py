MINUTES_PER_DAY = 24 * 60


def parse_clock(value: str) -> int:
    """Parse a zero-padded "HH:MM" label into minutes after midnight. "24:00" is accepted as end of day."""
    hours_str, sep, minutes_str = value.partition(":")
    if not sep or len(hours_str) != 2 or len(minutes_str) != 2:
        raise ValueError(f"time must be HH:MM, got {value!r}")
    if not (hours_str.isdigit() and minutes_str.isdigit()):
        raise ValueError(f"time must be HH:MM, got {value!r}")
    hours, minutes = int(hours_str), int(minutes_str)
    if minutes >= 60:
        raise ValueError(f"minute out of range in {value!r}")
    total = hours * 60 + minutes
    if total > MINUTES_PER_DAY:
        raise ValueError(f"time past end of day: {value!r}")
    return total


def format_clock(minutes: int) -> str:
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise ValueError("minutes must fall within a single day")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"
