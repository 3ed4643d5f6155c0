"""Base classes for schema representation.

Provides the structured graph that Prisma schema text is parsed into:
models with their fields, enums, and the relationship edges between models.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


SCALAR_TYPES = frozenset({
    "String",
    "Int",
    "Float",
    "Boolean",
    "DateTime",
    "Json",
    "Bytes",
})


def strip_type_markers(type_str: str) -> str:
    """Remove the first list (`[]`) and optional (`?`) markers from a type token."""
    return type_str.replace("[]", "", 1).replace("?", "", 1)


class RelationType(str, Enum):
    """Cardinality of a relationship between two models."""

    ONE_TO_ONE = "oneToOne"
    ONE_TO_MANY = "oneToMany"
    MANY_TO_ONE = "manyToOne"
    MANY_TO_MANY = "manyToMany"


class FieldSchema(BaseModel):
    """A single field declared inside a model block.

    Fields are created once per content line and never mutated; editing
    helpers produce new instances instead.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Field name")
    type: str = Field(..., description="Declared type token, including [] and ? markers")
    modifiers: list[str] = Field(default_factory=list, description="Attributes in declaration order")
    is_relation: bool = Field(default=False, description="Whether the field references another model")
    relation_to: str | None = Field(default=None, description="Target model name for relation fields")

    @property
    def base_type(self) -> str:
        """Declared type without list/optional markers."""
        return strip_type_markers(self.type)

    @property
    def is_list(self) -> bool:
        return "[]" in self.type

    @property
    def is_optional(self) -> bool:
        return "?" in self.type or "?" in self.modifiers

    def render(self) -> str:
        """Render the field as a single schema line (without indentation)."""
        modifiers = f" {' '.join(self.modifiers)}" if self.modifiers else ""
        return f"{self.name} {self.type}{modifiers}"


class ModelSchema(BaseModel):
    """A named model with an ordered list of fields."""

    name: str = Field(..., description="Model name")
    fields: list[FieldSchema] = Field(default_factory=list, description="Fields in declaration order")

    def get_field(self, name: str) -> FieldSchema | None:
        """Get a field by name."""
        for field in self.fields:
            if field.name == name:
                return field
        return None

    def get_relation_fields(self) -> list[FieldSchema]:
        """Get all fields that reference another model."""
        return [f for f in self.fields if f.is_relation]


class EnumSchema(BaseModel):
    """A named enum with its values, kept verbatim."""

    name: str = Field(..., description="Enum name")
    values: list[str] = Field(default_factory=list, description="Enum values in declaration order")


class RelationDetails(BaseModel):
    """Arguments extracted from a `@relation(...)` annotation."""

    fields: list[str] = Field(default_factory=list, description="Owning-side columns")
    references: list[str] = Field(default_factory=list, description="Referenced columns")
    on_delete: str | None = Field(default=None, description="Referential action on delete")
    on_update: str | None = Field(default=None, description="Referential action on update")


class RelationInfo(BaseModel):
    """Relation facts gathered for one relation field during the model pass."""

    source_model: str
    target_model: str
    source_field: str
    target_field: str | None = None
    relation_type: RelationType
    relation_details: RelationDetails = Field(default_factory=RelationDetails)

    @property
    def key(self) -> str:
        """Deduplication key shared by relations that describe the same edge."""
        return f"{self.source_model}-{self.target_model}-{self.source_field}"


class Edge(BaseModel):
    """A deduplicated relationship between two models."""

    id: str = Field(..., description="Edge id, unique within a parse result")
    source: str = Field(..., description="Source model name")
    target: str = Field(..., description="Target model name")
    source_field: str = Field(..., description="Relation field on the source model")
    target_field: str | None = Field(default=None, description="Back-reference field on the target model")
    relation_type: RelationType
    relation_details: RelationDetails = Field(default_factory=RelationDetails)
    color: str = Field(..., description="Stroke color assigned from the edge palette")

    @property
    def source_handle(self) -> str:
        return f"{self.source_field}-source"

    @property
    def target_handle(self) -> str | None:
        if self.target_field:
            return f"{self.target_field}-target"
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the diagram edge representation."""
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "sourceHandle": self.source_handle,
            "targetHandle": self.target_handle,
            "type": "fieldRelationship",
            "animated": True,
            "data": {
                "sourceField": self.source_field,
                "targetField": self.target_field or "id",
                "relationType": self.relation_type.value,
                "relationDetails": {
                    "fields": self.relation_details.fields,
                    "references": self.relation_details.references,
                    "onDelete": self.relation_details.on_delete,
                    "onUpdate": self.relation_details.on_update,
                },
            },
            "style": {
                "stroke": self.color,
                "strokeWidth": 2,
            },
        }


class ParsedSchema(BaseModel):
    """Complete result of parsing schema text."""

    models: list[ModelSchema] = Field(default_factory=list, description="Models in declaration order")
    edges: list[Edge] = Field(default_factory=list, description="Deduplicated relationship edges")
    enums: list[EnumSchema] = Field(default_factory=list, description="Enums in declaration order")

    def list_models(self) -> list[str]:
        """List model names in declaration order."""
        return [m.name for m in self.models]

    def list_enums(self) -> list[str]:
        """List enum names in declaration order."""
        return [e.name for e in self.enums]

    def get_model(self, name: str) -> ModelSchema | None:
        """Get the first model with the given name."""
        for model in self.models:
            if model.name == name:
                return model
        return None

    def get_enum(self, name: str) -> EnumSchema | None:
        """Get the first enum with the given name."""
        for enum in self.enums:
            if enum.name == name:
                return enum
        return None

    @property
    def is_empty(self) -> bool:
        return not self.models and not self.enums
