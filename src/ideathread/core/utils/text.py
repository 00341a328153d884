"""Text helpers shared by the document codec and the CLI."""


def is_blank(line: str) -> bool:
    """True for empty or whitespace-only lines."""
    return not line.strip()


def trim_blank_lines(lines: list[str]) -> list[str]:
    """Drop leading and trailing blank lines, keeping blank lines in between."""
    start = 0
    end = len(lines)
    while start < end and is_blank(lines[start]):
        start += 1
    while end > start and is_blank(lines[end - 1]):
        end -= 1
    return lines[start:end]


def first_line(text: str) -> str:
    """Return the first non-blank line of text, stripped."""
    for line in (text or "").splitlines():
        if line.strip():
            return line.strip()
    return ""


def truncate_text(text: str, max_length: int = 100, ellipsis: str = "...") -> str:
    """Truncate text to max_length, appending ellipsis if truncated."""
    if not text:
        return ""
    if len(text) <= max_length:
        return text
    return text[: max_length - len(ellipsis)] + ellipsis
