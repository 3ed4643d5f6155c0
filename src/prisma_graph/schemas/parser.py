"""Main schema parser module.

Runs the single forward pass over classified lines that turns Prisma
schema text into models, enums and relationship edges.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from prisma_graph.errors import SchemaFileError
from prisma_graph.schemas.base import (
    EnumSchema,
    FieldSchema,
    ModelSchema,
    ParsedSchema,
    RelationInfo,
)
from prisma_graph.schemas.edges import build_edges
from prisma_graph.schemas.fields import parse_field
from prisma_graph.schemas.relations import extract_relation_info, resolve_target_fields
from prisma_graph.schemas.tokenizer import ClassifiedLine, LineKind, tokenize


logger = logging.getLogger(__name__)

SCHEMA_FILE_EXTENSIONS = (".prisma", ".txt")


@dataclass
class _ScanState:
    """Accumulated state of one parse pass. Never shared between calls."""

    models: list[ModelSchema] = field(default_factory=list)
    enums: list[EnumSchema] = field(default_factory=list)
    relations: list[RelationInfo] = field(default_factory=list)
    model_name: str | None = None
    model_fields: list[FieldSchema] = field(default_factory=list)
    enum_name: str | None = None
    enum_values: list[str] = field(default_factory=list)


def _open_model(state: _ScanState, line: ClassifiedLine) -> None:
    if state.model_name is not None:
        logger.debug("Discarding unterminated model %r at line %d", state.model_name, line.number)
    state.model_name = line.name
    state.model_fields = []


def _open_enum(state: _ScanState, line: ClassifiedLine) -> None:
    if state.enum_name is not None:
        logger.debug("Discarding unterminated enum %r at line %d", state.enum_name, line.number)
    state.enum_name = line.name
    state.enum_values = []


def _close_block(state: _ScanState) -> None:
    if state.model_name is not None:
        state.models.append(ModelSchema(name=state.model_name, fields=state.model_fields))
        state.model_name = None
        state.model_fields = []
    if state.enum_name is not None:
        state.enums.append(EnumSchema(name=state.enum_name, values=state.enum_values))
        state.enum_name = None
        state.enum_values = []


def _add_content(state: _ScanState, line: ClassifiedLine) -> None:
    if state.enum_name is not None:
        state.enum_values.append(line.text)
        return

    if state.model_name is None:
        return

    parsed = parse_field(line.text)
    if parsed is None:
        return

    state.model_fields.append(parsed)
    if parsed.is_relation and parsed.relation_to:
        state.relations.append(extract_relation_info(parsed, line.text, state.model_name))


def _scan(lines: list[ClassifiedLine]) -> _ScanState:
    state = _ScanState()

    for line in lines:
        if line.kind == LineKind.ENUM_OPEN:
            _open_enum(state, line)
        elif line.kind == LineKind.MODEL_OPEN:
            _open_model(state, line)
        elif line.kind == LineKind.BLOCK_CLOSE:
            _close_block(state)
        else:
            _add_content(state, line)

    if state.model_name is not None:
        logger.debug("Discarding unterminated model %r at end of input", state.model_name)
    if state.enum_name is not None:
        logger.debug("Discarding unterminated enum %r at end of input", state.enum_name)

    return state


def parse_schema(content: str, resolve_reverse_fields: bool = False) -> ParsedSchema:
    """Parse Prisma schema text into models, edges and enums.

    Never raises for string input; malformed lines and unterminated blocks
    are dropped, so the worst case is an empty result.

    Args:
        content: Schema text
        resolve_reverse_fields: Look up each relation's back-reference on the
            target model instead of guessing it from naming conventions

    Returns:
        ParsedSchema with models, edges and enums in declaration order
    """
    state = _scan(tokenize(content))

    relations = state.relations
    if resolve_reverse_fields:
        relations = resolve_target_fields(relations, state.models)

    result = ParsedSchema(
        models=state.models,
        edges=build_edges(relations),
        enums=state.enums,
    )
    logger.info(
        "Parsed %d models, %d enums, %d edges",
        len(result.models),
        len(result.enums),
        len(result.edges),
    )
    return result


def load_schema_file(path: Path | str) -> str:
    """Read schema text from a `.prisma` or `.txt` file.

    Args:
        path: Path to the schema file

    Returns:
        File content
    """
    path = Path(path)
    if path.suffix.lower() not in SCHEMA_FILE_EXTENSIONS:
        raise SchemaFileError(f"Please select a .prisma or .txt file: {path}")

    try:
        return path.read_text(encoding="utf-8-sig")
    except OSError as e:
        raise SchemaFileError(f"Failed to read schema file {path}: {e}") from e


class PrismaSchemaParser:
    """Parser for Prisma schema text."""

    def __init__(
        self,
        content: str,
        source_file: str | None = None,
        resolve_reverse_fields: bool = False,
    ):
        """Initialize parser with schema content.

        Args:
            content: Schema content as string
            source_file: Optional source file path for messages
            resolve_reverse_fields: Resolve back-reference fields by lookup
        """
        self.content = content
        self.source_file = source_file
        self.resolve_reverse_fields = resolve_reverse_fields
        self._result = parse_schema(content, resolve_reverse_fields=resolve_reverse_fields)

    @classmethod
    def from_file(cls, path: Path | str, resolve_reverse_fields: bool = False) -> "PrismaSchemaParser":
        """Load parser from a `.prisma` or `.txt` file."""
        content = load_schema_file(path)
        return cls(content, str(path), resolve_reverse_fields)

    @classmethod
    def from_string(cls, content: str, resolve_reverse_fields: bool = False) -> "PrismaSchemaParser":
        """Load parser from a string."""
        return cls(content, resolve_reverse_fields=resolve_reverse_fields)

    def list_models(self) -> list[str]:
        """List all model names found in the schema."""
        return self._result.list_models()

    def list_enums(self) -> list[str]:
        """List all enum names found in the schema."""
        return self._result.list_enums()

    def parse_model(self, model_name: str) -> ModelSchema:
        """Get a specific model by name.

        Raises:
            ValueError: If no model with that name was parsed
        """
        model = self._result.get_model(model_name)
        if model is None:
            available = ", ".join(self.list_models())
            raise ValueError(f"Model '{model_name}' not found. Available: {available}")
        return model

    def parse(self) -> ParsedSchema:
        """Return the full parse result."""
        return self._result
