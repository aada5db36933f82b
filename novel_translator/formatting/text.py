"""Line helpers shared by the formatting passes."""


def normalize_newlines(text: str) -> str:
    """Collapse CRLF (and stray CR) line endings to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def split_lines(text: str) -> list[str]:
    return normalize_newlines(text).split("\n")


def is_blank(line: str) -> bool:
    return not line.strip()


def first_content_index(lines: list[str], start: int = 0) -> int:
    """Index of the first non-blank line at or after ``start``.

    Returns ``len(lines)`` when only blank lines remain.
    """
    i = start
    while i < len(lines) and is_blank(lines[i]):
        i += 1
    return i


def collapse_blank_runs(lines: list[str], max_blank: int) -> list[str]:
    """Limit every run of blank lines to ``max_blank`` empty lines."""
    result: list[str] = []
    run = 0
    for line in lines:
        if is_blank(line):
            run += 1
            if run > max_blank:
                continue
            result.append("")
        else:
            run = 0
            result.append(line)
    return result
