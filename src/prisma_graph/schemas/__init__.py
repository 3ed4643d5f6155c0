"""Prisma schema parsing and emission.

Example usage:
    from prisma_graph.schemas import parse_schema, emit_schema

    parsed = parse_schema(schema_text)
    for model in parsed.models:
        print(model.name, [f.name for f in model.fields])

    text = emit_schema(parsed.models, parsed.enums)
"""

from prisma_graph.schemas.base import (
    SCALAR_TYPES,
    Edge,
    EnumSchema,
    FieldSchema,
    ModelSchema,
    ParsedSchema,
    RelationDetails,
    RelationInfo,
    RelationType,
)
from prisma_graph.schemas.edges import EDGE_COLORS, build_edges
from prisma_graph.schemas.emitter import emit_schema
from prisma_graph.schemas.fields import is_model_type, parse_field
from prisma_graph.schemas.parser import PrismaSchemaParser, load_schema_file, parse_schema
from prisma_graph.schemas.relations import (
    determine_relation_type,
    extract_relation_info,
    find_corresponding_field,
    parse_relation_annotation,
    resolve_target_fields,
)
from prisma_graph.schemas.tokenizer import ClassifiedLine, LineKind, classify_line, tokenize, trim_line

__all__ = [
    "SCALAR_TYPES",
    "Edge",
    "EnumSchema",
    "FieldSchema",
    "ModelSchema",
    "ParsedSchema",
    "RelationDetails",
    "RelationInfo",
    "RelationType",
    "EDGE_COLORS",
    "build_edges",
    "emit_schema",
    "is_model_type",
    "parse_field",
    "PrismaSchemaParser",
    "load_schema_file",
    "parse_schema",
    "determine_relation_type",
    "extract_relation_info",
    "find_corresponding_field",
    "parse_relation_annotation",
    "resolve_target_fields",
    "ClassifiedLine",
    "LineKind",
    "classify_line",
    "tokenize",
    "trim_line",
]
