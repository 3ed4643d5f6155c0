"""Edge synthesis from per-field relation facts."""

import logging

from prisma_graph.schemas.base import Edge, RelationInfo


logger = logging.getLogger(__name__)

EDGE_COLORS = ("#6366f1", "#8b5cf6", "#ec4899", "#10b981", "#f59e0b")


def build_edges(relations: list[RelationInfo]) -> list[Edge]:
    """Consolidate relations into deduplicated edges.

    Relations sharing a (source model, target model, source field) key
    collapse into the first one seen. Colors and ids are derived from a
    relation's index in the input list, so dropped duplicates still
    consume a palette slot.

    Args:
        relations: Relations in declaration order

    Returns:
        Edges in first-seen order
    """
    edges = []
    processed: set[str] = set()

    for index, relation in enumerate(relations):
        if relation.key in processed:
            logger.debug("Dropping duplicate relation %s at index %d", relation.key, index)
            continue

        edges.append(Edge(
            id=f"{relation.key}-{index}",
            source=relation.source_model,
            target=relation.target_model,
            source_field=relation.source_field,
            target_field=relation.target_field,
            relation_type=relation.relation_type,
            relation_details=relation.relation_details,
            color=EDGE_COLORS[index % len(EDGE_COLORS)],
        ))
        processed.add(relation.key)

    return edges
