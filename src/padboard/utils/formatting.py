"""Human-readable formatting helpers."""


def format_bytes(size_bytes: int) -> str:
    """Format a byte count as a short human-readable string.

    Examples:
        >>> format_bytes(512)
        '512 B'
        >>> format_bytes(2048)
        '2.0 KB'
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"
    size = size_bytes / 1024
    for unit in ("KB", "MB"):
        if size < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} GB"


def format_millis(duration_millis: float) -> str:
    """Format a duration in milliseconds as seconds with millisecond precision."""
    return f"{duration_millis / 1000:.3f}s"
