"""Validation engine for prisma-graph."""

from prisma_graph.engine.validation_engine import (
    ValidationEngine,
    ValidationIssue,
    ValidationResult,
    ValidationSeverity,
    validate_schema,
)

__all__ = [
    "ValidationEngine",
    "ValidationIssue",
    "ValidationResult",
    "ValidationSeverity",
    "validate_schema",
]
