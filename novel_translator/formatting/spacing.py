"""Line spacing conventions for the target publishing style."""

from novel_translator.formatting.text import collapse_blank_runs, is_blank, split_lines

# Opening characters that mark a line of dialogue
DIALOGUE_OPENERS = ('"', "「", "『")

MAX_DIALOGUE_BLANK_RUN = 2


def is_dialogue_line(line: str) -> bool:
    return line.strip().startswith(DIALOGUE_OPENERS)


def normalize_dialogue_spacing(text: str) -> str:
    """Surround every dialogue line with blank lines.

    A blank line is inserted above a dialogue line when the previous output
    line has content, and below it when the next input line has content.
    Runs of three or more blank lines are then collapsed to two and
    trailing whitespace is removed.

    Example:
        >>> normalize_dialogue_spacing('She said.\\n"Hello."\\nHe left.')
        'She said.\\n\\n"Hello."\\n\\nHe left.'
    """
    lines = split_lines(text)
    result: list[str] = []

    for index, line in enumerate(lines):
        if not is_dialogue_line(line):
            result.append(line)
            continue

        if result and not is_blank(result[-1]):
            result.append("")
        result.append(line)
        if index + 1 < len(lines) and not is_blank(lines[index + 1]):
            result.append("")

    return "\n".join(collapse_blank_runs(result, MAX_DIALOGUE_BLANK_RUN)).rstrip()


def ensure_trailing_space_per_line(text: str) -> str:
    """End every non-blank line with exactly one space.

    The target platform treats a trailing space as a soft line break.
    Blank lines are emptied. Applying this twice changes nothing.
    """
    return "\n".join(
        "" if is_blank(line) else line.rstrip() + " " for line in split_lines(text)
    )
