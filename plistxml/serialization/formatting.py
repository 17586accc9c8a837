"""Line wrapping for long text blocks such as base64 data."""

DEFAULT_COLUMNS = 60


def format_block(text: str, depth: int, columns: int = DEFAULT_COLUMNS) -> str:
    """Wrap ``text`` into indented lines for use as element content.

    Every line starts with a newline and ``depth`` tabs followed by at most
    ``columns`` characters of ``text``. A final line holding only the
    indentation puts the closing tag back at ``depth``.

    Args:
        text: The text to wrap
        depth: Number of tabs in front of each line
        columns: Maximum number of text characters per line

    Returns:
        The wrapped block

    Example:
        >>> format_block("QUJD", 1, columns=2)
        '\\n\\tQU\\n\\tJD\\n\\t'
    """
    if columns < 1:
        raise ValueError(f"columns must be positive, got {columns}")
    if depth < 0:
        raise ValueError(f"depth must not be negative, got {depth}")

    indent = "\n" + "\t" * depth
    lines = [indent + text[i:i + columns] for i in range(0, len(text), columns)]
    lines.append(indent)
    return "".join(lines)
