"""Copy-on-write editing of models.

Every helper returns a new ModelSchema; the input model and its fields are
left untouched. Relation flags are recomputed whenever a field's type or
modifiers change.
"""

from typing import Any

from prisma_graph.schemas.base import FieldSchema, ModelSchema, strip_type_markers
from prisma_graph.schemas.fields import is_model_type


DEFAULT_FIELD_NAME = "newField"
DEFAULT_FIELD_TYPE = "String"
DEFAULT_MODEL_NAME = "NewModel"


def make_field(name: str, type: str, modifiers: list[str] | None = None) -> FieldSchema:
    """Build a field with relation flags derived from its type and modifiers."""
    modifiers = list(modifiers or [])
    is_relation = any("@relation" in m for m in modifiers) or is_model_type(type)
    return FieldSchema(
        name=name,
        type=type,
        modifiers=modifiers,
        is_relation=is_relation,
        relation_to=strip_type_markers(type) if is_relation else None,
    )


def _check_index(model: ModelSchema, index: int) -> None:
    if not 0 <= index < len(model.fields):
        raise IndexError(f"Model '{model.name}' has no field at index {index}")


def _with_fields(model: ModelSchema, fields: list[FieldSchema]) -> ModelSchema:
    return model.model_copy(update={"fields": fields})


def add_field(
    model: ModelSchema,
    name: str = DEFAULT_FIELD_NAME,
    type: str = DEFAULT_FIELD_TYPE,
    modifiers: list[str] | None = None,
) -> ModelSchema:
    """Append a field to the end of the model."""
    return _with_fields(model, [*model.fields, make_field(name, type, modifiers)])


def update_field(model: ModelSchema, index: int, **changes: Any) -> ModelSchema:
    """Change the name, type and/or modifiers of the field at `index`.

    Raises:
        IndexError: If the index is out of range
        ValueError: If a change names anything other than name, type or modifiers
    """
    _check_index(model, index)

    unknown = set(changes) - {"name", "type", "modifiers"}
    if unknown:
        raise ValueError(f"Unsupported field changes: {', '.join(sorted(unknown))}")

    current = model.fields[index]
    updated = make_field(
        changes.get("name", current.name),
        changes.get("type", current.type),
        changes.get("modifiers", current.modifiers),
    )

    fields = list(model.fields)
    fields[index] = updated
    return _with_fields(model, fields)


def remove_field(model: ModelSchema, index: int) -> ModelSchema:
    """Remove the field at `index`."""
    _check_index(model, index)
    return _with_fields(model, [f for i, f in enumerate(model.fields) if i != index])


def toggle_modifier(model: ModelSchema, index: int, modifier: str) -> ModelSchema:
    """Add `modifier` to the field at `index`, or remove it if already present."""
    _check_index(model, index)
    current = model.fields[index]

    if modifier in current.modifiers:
        modifiers = [m for m in current.modifiers if m != modifier]
    else:
        modifiers = [*current.modifiers, modifier]

    return update_field(model, index, modifiers=modifiers)


def rename_model(model: ModelSchema, new_name: str) -> ModelSchema:
    return model.model_copy(update={"name": new_name})


def new_model(name: str = DEFAULT_MODEL_NAME) -> ModelSchema:
    """Starter model with an id and timestamp fields."""
    return ModelSchema(
        name=name,
        fields=[
            make_field("id", "String", ["@id", "@default(cuid())"]),
            make_field("createdAt", "DateTime", ["@default(now())"]),
            make_field("updatedAt", "DateTime", ["@updatedAt"]),
        ],
    )
