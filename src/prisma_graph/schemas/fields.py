"""Field line parser.

Parses a single content line inside a model block, e.g.
``author User @relation(fields: [authorId], references: [id])``.
"""

import logging
import re

from prisma_graph.schemas.base import SCALAR_TYPES, FieldSchema, strip_type_markers


logger = logging.getLogger(__name__)

_UPPERCASE_START = re.compile(r"^[A-Z]")


def is_model_type(type_str: str) -> bool:
    """Check whether a type token looks like a reference to another model.

    Model types are not built-in scalars and start with an uppercase letter
    by convention. Enum types match this too; the parser has no way to tell
    them apart from models.
    """
    clean_type = strip_type_markers(type_str)
    return clean_type not in SCALAR_TYPES and bool(_UPPERCASE_START.match(clean_type))


def _collect_modifiers(parts: list[str]) -> list[str]:
    """Collect attribute tokens, re-joining `@relation(...)` split on whitespace."""
    modifiers = []
    i = 0

    while i < len(parts):
        part = parts[i]
        if part.startswith("@relation("):
            relation_text = part
            open_parens = part.count("(")
            close_parens = part.count(")")

            while open_parens > close_parens and i + 1 < len(parts):
                i += 1
                relation_text += " " + parts[i]
                open_parens += parts[i].count("(")
                close_parens += parts[i].count(")")

            modifiers.append(relation_text)
        elif part.startswith("@") or part == "?":
            modifiers.append(part)
        i += 1

    return modifiers


def parse_field(line: str) -> FieldSchema | None:
    """Parse a field line.

    Args:
        line: Trimmed content line from inside a model block

    Returns:
        Parsed FieldSchema, or None if the line has fewer than two tokens
    """
    parts = line.split()
    if len(parts) < 2:
        logger.debug("Dropping field line with fewer than two tokens: %r", line)
        return None

    field_name, field_type = parts[0], parts[1]
    modifiers = _collect_modifiers(parts[2:])

    is_relation = "@relation" in line or is_model_type(field_type)

    return FieldSchema(
        name=field_name,
        type=field_type,
        modifiers=modifiers,
        is_relation=is_relation,
        relation_to=strip_type_markers(field_type) if is_relation else None,
    )
