"""Diagram graph documents.

A SchemaGraph wraps a parse result and converts it to and from the JSON
document consumed by the diagram surface: model nodes placed on a grid,
field-level relationship edges, and enums.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from prisma_graph.config.base import EmitterConfig, LayoutConfig, ProjectConfig
from prisma_graph.engine.validation_engine import ValidationEngine
from prisma_graph.errors import GraphDocumentError
from prisma_graph.graph.editing import make_field, new_model
from prisma_graph.graph.layout import layout_position
from prisma_graph.schemas.base import (
    Edge,
    EnumSchema,
    FieldSchema,
    ModelSchema,
    ParsedSchema,
    RelationDetails,
    RelationType,
)
from prisma_graph.schemas.edges import EDGE_COLORS
from prisma_graph.schemas.emitter import emit_schema
from prisma_graph.schemas.parser import parse_schema
from prisma_graph.utils.helpers import camel_to_snake


logger = logging.getLogger(__name__)

SOURCE_HANDLE_SUFFIX = "-source"
TARGET_HANDLE_SUFFIX = "-target"


@dataclass
class SearchResult:
    """Models matching a name search.

    An empty query clears the search: nothing is highlighted and nothing
    is faded.
    """

    query: str
    matches: list[str] = field(default_factory=list)

    @property
    def cleared(self) -> bool:
        return not self.query.strip()

    @property
    def first_match(self) -> str | None:
        return self.matches[0] if self.matches else None

    def is_highlighted(self, model_name: str) -> bool:
        return model_name in self.matches

    def is_faded(self, model_name: str) -> bool:
        return not self.cleared and model_name not in self.matches


def _field_to_dict(field_schema: FieldSchema) -> dict[str, Any]:
    return {
        "name": field_schema.name,
        "type": field_schema.type,
        "modifiers": list(field_schema.modifiers),
        "isRelation": field_schema.is_relation,
        "relationTo": field_schema.relation_to,
    }


def _field_from_dict(data: dict[str, Any]) -> FieldSchema:
    derived = make_field(data["name"], data["type"], data.get("modifiers", []))
    if "isRelation" not in data:
        return derived
    return derived.model_copy(update={
        "is_relation": data["isRelation"],
        "relation_to": data.get("relationTo") if data["isRelation"] else None,
    })


def _field_from_handle(handle: str | None, suffix: str) -> str | None:
    if not handle:
        return None
    return handle[:-len(suffix)] if handle.endswith(suffix) else handle


def _edge_from_dict(data: dict[str, Any], index: int) -> Edge:
    edge_data = data.get("data") or {}
    details = edge_data.get("relationDetails") or {}
    style = data.get("style") or {}

    # The diagram writes a placeholder targetField; the handle carries the real one.
    if "targetHandle" in data:
        target_field = _field_from_handle(data["targetHandle"], TARGET_HANDLE_SUFFIX)
    else:
        target_field = edge_data.get("targetField")

    return Edge(
        id=data["id"],
        source=data["source"],
        target=data["target"],
        source_field=edge_data.get("sourceField", ""),
        target_field=target_field,
        relation_type=RelationType(edge_data.get("relationType", RelationType.ONE_TO_ONE.value)),
        relation_details=RelationDetails(**{camel_to_snake(k): v for k, v in details.items()}),
        color=style.get("stroke", EDGE_COLORS[index % len(EDGE_COLORS)]),
    )


class SchemaGraph:
    """Models, edges and enums of one schema, ready for the diagram surface."""

    def __init__(self, parsed: ParsedSchema, layout: LayoutConfig | None = None):
        """Initialize graph from a parse result.

        Args:
            parsed: Parsed schema
            layout: Grid settings for node positions
        """
        self.parsed = parsed
        self.layout = layout or LayoutConfig()

    @classmethod
    def from_text(cls, content: str, config: ProjectConfig | None = None) -> "SchemaGraph":
        """Parse schema text into a graph."""
        config = config or ProjectConfig()
        parsed = parse_schema(content, resolve_reverse_fields=config.parser.resolve_reverse_fields)
        return cls(parsed, config.layout)

    @classmethod
    def from_document(cls, document: Any, layout: LayoutConfig | None = None) -> "SchemaGraph":
        """Rebuild a graph from a diagram document.

        Raises:
            GraphDocumentError: If the document does not match the expected shape
        """
        result = ValidationEngine().validate_graph_document(document)
        if not result.is_valid:
            raise GraphDocumentError("; ".join(result.errors))

        models = [
            ModelSchema(
                name=node["data"]["name"],
                fields=[_field_from_dict(f) for f in node["data"]["fields"]],
            )
            for node in document["nodes"]
        ]
        edges = [_edge_from_dict(e, i) for i, e in enumerate(document.get("edges", []))]
        enums = [EnumSchema(name=e["name"], values=e["values"]) for e in document.get("enums", [])]

        return cls(ParsedSchema(models=models, edges=edges, enums=enums), layout)

    @classmethod
    def from_file(cls, path: Path | str, layout: LayoutConfig | None = None) -> "SchemaGraph":
        """Load a graph document from a JSON or YAML file."""
        path = Path(path)
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise GraphDocumentError(f"Failed to read graph document {path}: {e}") from e

        try:
            if path.suffix.lower() in (".yaml", ".yml"):
                document = yaml.safe_load(content)
            else:
                document = json.loads(content)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise GraphDocumentError(f"Failed to parse graph document {path}: {e}") from e

        return cls.from_document(document, layout)

    @property
    def models(self) -> list[ModelSchema]:
        return self.parsed.models

    @property
    def edges(self) -> list[Edge]:
        return self.parsed.edges

    @property
    def enums(self) -> list[EnumSchema]:
        return self.parsed.enums

    def to_document(self) -> dict[str, Any]:
        """Convert to a JSON-serializable diagram document."""
        nodes = [
            {
                "id": model.name,
                "type": "model",
                "position": layout_position(i, self.layout),
                "data": {
                    "name": model.name,
                    "fields": [_field_to_dict(f) for f in model.fields],
                },
            }
            for i, model in enumerate(self.models)
        ]

        return {
            "nodes": nodes,
            "edges": [e.to_dict() for e in self.edges],
            "enums": [{"name": e.name, "values": list(e.values)} for e in self.enums],
        }

    def to_schema_text(self, config: EmitterConfig | None = None) -> str:
        """Emit the graph's models and enums as schema text."""
        return emit_schema(self.models, self.enums, config)

    def search_models(self, query: str) -> SearchResult:
        """Find models whose name contains `query`, ignoring case."""
        result = SearchResult(query=query)
        if result.cleared:
            return result

        term = query.lower()
        result.matches = [m.name for m in self.models if term in m.name.lower()]
        return result

    def remove_model(self, name: str) -> "SchemaGraph":
        """Return a graph without the named model and every edge touching it."""
        parsed = ParsedSchema(
            models=[m for m in self.models if m.name != name],
            edges=[e for e in self.edges if e.source != name and e.target != name],
            enums=list(self.enums),
        )
        logger.debug(
            "Removed model %s: %d edges dropped",
            name,
            len(self.edges) - len(parsed.edges),
        )
        return SchemaGraph(parsed, self.layout)

    def replace_model(self, name: str, model: ModelSchema) -> "SchemaGraph":
        """Return a graph with the named model replaced by an edited copy.

        Edges follow a rename. Edges leaving the model from a field that is
        no longer a relation field are dropped.
        """
        relation_fields = {f.name for f in model.get_relation_fields()}
        models = [model if m.name == name else m for m in self.models]

        edges = []
        for edge in self.edges:
            if edge.source == name and edge.source_field not in relation_fields:
                continue
            update = {}
            if edge.source == name:
                update["source"] = model.name
            if edge.target == name:
                update["target"] = model.name
            edges.append(edge.model_copy(update=update) if update else edge)

        return SchemaGraph(ParsedSchema(models=models, edges=edges, enums=list(self.enums)), self.layout)

    def add_model(self, model: ModelSchema | None = None) -> "SchemaGraph":
        """Return a graph with `model` appended, or a starter model if omitted."""
        if model is None:
            model = new_model()
        parsed = ParsedSchema(models=[*self.models, model], edges=list(self.edges), enums=list(self.enums))
        return SchemaGraph(parsed, self.layout)

    def connect(
        self,
        source: str,
        source_handle: str | None,
        target: str,
        target_handle: str | None,
    ) -> "SchemaGraph":
        """Return a graph with a user-drawn edge between two model fields.

        Handles are field names with a `-source`/`-target` suffix. The edge
        is oneToOne with empty relation details. Connecting a field that
        already has an edge to the same target returns the graph unchanged.

        Raises:
            ValueError: If either model is not in the graph
        """
        names = {m.name for m in self.models}
        for name in (source, target):
            if name not in names:
                raise ValueError(f"Model '{name}' not found. Available: {', '.join(sorted(names))}")

        source_field = _field_from_handle(source_handle, SOURCE_HANDLE_SUFFIX) or ""
        key = f"{source}-{target}-{source_field}"
        if any(f"{e.source}-{e.target}-{e.source_field}" == key for e in self.edges):
            logger.debug("Connection %s already exists", key)
            return self

        index = len(self.edges)
        edge = Edge(
            id=f"{key}-{index}",
            source=source,
            target=target,
            source_field=source_field,
            target_field=_field_from_handle(target_handle, TARGET_HANDLE_SUFFIX),
            relation_type=RelationType.ONE_TO_ONE,
            relation_details=RelationDetails(),
            color=EDGE_COLORS[index % len(EDGE_COLORS)],
        )
        parsed = ParsedSchema(models=list(self.models), edges=[*self.edges, edge], enums=list(self.enums))
        return SchemaGraph(parsed, self.layout)
