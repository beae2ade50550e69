"""Human-readable distance and duration text for route displays."""


def format_distance(meters: float) -> str:
    """Format meters as '850 m' below one kilometer, else '12.3 km'."""
    if meters < 1000:
        return f"{round(meters)} m"
    return f"{meters / 1000:.1f} km"


def format_duration(seconds: float) -> str:
    """Format seconds as '45 sec', '12 min' or '1 hr 5 min'."""
    seconds = round(seconds)
    if seconds < 60:
        return f"{seconds} sec"

    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes} min"

    hours = minutes // 60
    remaining_minutes = minutes % 60
    return f"{hours} hr {remaining_minutes} min"
