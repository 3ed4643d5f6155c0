"""
prisma-graph - Parse Prisma schema text into a graph of models, enums and relations.

Converts a subset of Prisma's schema language into structured models, fields,
enums and relationship edges for diagramming, and emits the graph back as
canonical schema text.
"""

__version__ = "0.1.0"

from prisma_graph.schemas.base import (
    Edge,
    EnumSchema,
    FieldSchema,
    ModelSchema,
    ParsedSchema,
    RelationType,
)
from prisma_graph.schemas.parser import PrismaSchemaParser, parse_schema
from prisma_graph.schemas.emitter import emit_schema
from prisma_graph.engine.validation_engine import ValidationEngine, validate_schema
from prisma_graph.graph.document import SchemaGraph

__all__ = [
    "Edge",
    "EnumSchema",
    "FieldSchema",
    "ModelSchema",
    "ParsedSchema",
    "RelationType",
    "PrismaSchemaParser",
    "parse_schema",
    "emit_schema",
    "ValidationEngine",
    "validate_schema",
    "SchemaGraph",
]
