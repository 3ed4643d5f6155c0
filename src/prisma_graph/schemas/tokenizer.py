"""Line tokenizer for Prisma schema text.

Splits raw schema text into trimmed lines and classifies each one. The
format assumes one statement per line, so no lookahead is needed.
"""

from dataclasses import dataclass
from enum import Enum


# Lines starting with any of these are skipped entirely
SKIPPED_PREFIXES = ("//", "generator", "datasource")


class LineKind(str, Enum):
    """Classification of a single schema line."""

    ENUM_OPEN = "enum_open"
    MODEL_OPEN = "model_open"
    BLOCK_CLOSE = "block_close"
    CONTENT = "content"


@dataclass(frozen=True)
class ClassifiedLine:
    """A trimmed, classified schema line."""

    kind: LineKind
    text: str
    number: int
    name: str | None = None


def trim_line(line: str) -> str:
    """Strip whitespace and byte-order marks from both ends of a line."""
    return line.strip().strip("\ufeff").strip()


def _block_name(line: str, keyword: str) -> str:
    return line.replace(keyword, "", 1).replace("{", "", 1).strip()


def classify_line(line: str, number: int = 0) -> ClassifiedLine | None:
    """Classify one line of schema text.

    Args:
        line: Raw line (trimmed here)
        number: 1-based line number in the source text

    Returns:
        ClassifiedLine, or None if the line is blank, a comment, or part of
        a generator/datasource declaration
    """
    line = trim_line(line)

    if not line or line.startswith(SKIPPED_PREFIXES):
        return None

    if line.startswith("enum "):
        return ClassifiedLine(LineKind.ENUM_OPEN, line, number, _block_name(line, "enum "))

    if line.startswith("model "):
        return ClassifiedLine(LineKind.MODEL_OPEN, line, number, _block_name(line, "model "))

    if line == "}":
        return ClassifiedLine(LineKind.BLOCK_CLOSE, line, number)

    return ClassifiedLine(LineKind.CONTENT, line, number)


def tokenize(text: str) -> list[ClassifiedLine]:
    """Split schema text into classified lines, dropping skipped ones."""
    lines = []
    for number, raw in enumerate(text.split("\n"), start=1):
        classified = classify_line(raw, number)
        if classified is not None:
            lines.append(classified)
    return lines
