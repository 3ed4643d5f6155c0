"""Relation extraction for relation-bearing fields.

Infers cardinality from the field declaration and pulls the explicit
column lists out of a ``@relation(...)`` annotation.
"""

import logging
import re

from prisma_graph.schemas.base import (
    FieldSchema,
    ModelSchema,
    RelationDetails,
    RelationInfo,
    RelationType,
)


logger = logging.getLogger(__name__)

# Only the text up to the first closing paren is considered
RELATION_PATTERN = re.compile(r"@relation\(([^)]+)\)")
FIELDS_PATTERN = re.compile(r"fields:\s*\[([^\]]+)\]")
REFERENCES_PATTERN = re.compile(r"references:\s*\[([^\]]+)\]")
ON_DELETE_PATTERN = re.compile(r"onDelete:\s*(\w+)")
ON_UPDATE_PATTERN = re.compile(r"onUpdate:\s*(\w+)")


def determine_relation_type(field: FieldSchema, line: str) -> RelationType:
    """Infer the cardinality of a relation field.

    The list side of a relation is always the "many" side. A field carrying
    the annotation is the owning side: optional means one-to-one, otherwise
    many-to-one. A bare model-typed field defaults to one-to-one.
    """
    if field.is_list:
        return RelationType.ONE_TO_MANY

    if "@relation" in line:
        return RelationType.ONE_TO_ONE if field.is_optional else RelationType.MANY_TO_ONE

    return RelationType.ONE_TO_ONE


def _split_column_list(raw: str) -> list[str]:
    return [item.strip().replace('"', "").replace("'", "") for item in raw.split(",")]


def parse_relation_annotation(line: str) -> RelationDetails:
    """Extract fields, references and referential actions from a line.

    Missing pieces yield empty lists or None, never an error.
    """
    relation_match = RELATION_PATTERN.search(line)
    if not relation_match:
        return RelationDetails()

    content = relation_match.group(1)
    fields_match = FIELDS_PATTERN.search(content)
    references_match = REFERENCES_PATTERN.search(content)
    on_delete_match = ON_DELETE_PATTERN.search(content)
    on_update_match = ON_UPDATE_PATTERN.search(content)

    return RelationDetails(
        fields=_split_column_list(fields_match.group(1)) if fields_match else [],
        references=_split_column_list(references_match.group(1)) if references_match else [],
        on_delete=on_delete_match.group(1) if on_delete_match else None,
        on_update=on_update_match.group(1) if on_update_match else None,
    )


def find_corresponding_field(
    field: FieldSchema,
    model_name: str,
    relation_details: RelationDetails,
) -> str | None:
    """Guess the back-reference field name on the target model.

    This is a naming-convention heuristic only; the target model's actual
    fields are not consulted. Use resolve_target_fields for a real lookup.
    """
    if field.is_list:
        return model_name.lower()

    if relation_details.references:
        return f"{model_name.lower()}s"

    return None


def extract_relation_info(field: FieldSchema, line: str, model_name: str) -> RelationInfo:
    """Build the relation facts for one relation field.

    Args:
        field: Parsed relation field
        line: Raw field line the field was parsed from
        model_name: Name of the model declaring the field

    Returns:
        RelationInfo for the field
    """
    relation_type = determine_relation_type(field, line)
    relation_details = parse_relation_annotation(line)
    target_field = find_corresponding_field(field, model_name, relation_details)

    return RelationInfo(
        source_model=model_name,
        target_model=field.relation_to or field.base_type,
        source_field=field.name,
        target_field=target_field,
        relation_type=relation_type,
        relation_details=relation_details,
    )


def _find_back_reference(relation: RelationInfo, models: list[ModelSchema]) -> str | None:
    for model in models:
        if model.name != relation.target_model:
            continue
        for candidate in model.get_relation_fields():
            if candidate.relation_to != relation.source_model:
                continue
            if model.name == relation.source_model and candidate.name == relation.source_field:
                continue
            return candidate.name
    return None


def resolve_target_fields(
    relations: list[RelationInfo],
    models: list[ModelSchema],
) -> list[RelationInfo]:
    """Replace guessed target fields with the target model's real back-reference.

    The first relation field on the target model that points back at the
    source model wins. Relations without a back-reference keep their guess.

    Args:
        relations: Relations produced during the model pass
        models: All parsed models

    Returns:
        New list of relations with resolved target fields
    """
    resolved = []
    for relation in relations:
        back_reference = _find_back_reference(relation, models)
        if back_reference is None:
            logger.debug(
                "No back-reference for %s.%s on %s, keeping guess %r",
                relation.source_model,
                relation.source_field,
                relation.target_model,
                relation.target_field,
            )
            resolved.append(relation)
        else:
            resolved.append(relation.model_copy(update={"target_field": back_reference}))
    return resolved
