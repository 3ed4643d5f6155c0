"""Validation Engine - structural checks on schema text and graphs.

The Validation Engine covers:
- Pre-parse sanity checks on raw schema text (advisory, never raises)
- Consistency checks on a parse result (duplicate names, dangling relations)
- Shape checks on diagram graph documents loaded from JSON/YAML
"""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import jsonschema

from prisma_graph.schemas.base import ParsedSchema
from prisma_graph.schemas.tokenizer import trim_line


EMPTY_SCHEMA_MESSAGE = "Schema content is empty"
NO_MODELS_MESSAGE = "No models found in schema"
MISMATCHED_BRACES_MESSAGE = "Mismatched braces in schema"


_RELATION_DETAILS_SCHEMA = {
    "type": "object",
    "properties": {
        "fields": {"type": "array", "items": {"type": "string"}},
        "references": {"type": "array", "items": {"type": "string"}},
        "onDelete": {"type": ["string", "null"]},
        "onUpdate": {"type": ["string", "null"]},
    },
}

GRAPH_DOCUMENT_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["nodes"],
    "properties": {
        "nodes": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id", "data"],
                "properties": {
                    "id": {"type": "string"},
                    "data": {
                        "type": "object",
                        "required": ["name", "fields"],
                        "properties": {
                            "name": {"type": "string"},
                            "fields": {
                                "type": "array",
                                "items": {
                                    "type": "object",
                                    "required": ["name", "type"],
                                    "properties": {
                                        "name": {"type": "string"},
                                        "type": {"type": "string"},
                                        "modifiers": {"type": "array", "items": {"type": "string"}},
                                        "isRelation": {"type": "boolean"},
                                        "relationTo": {"type": ["string", "null"]},
                                    },
                                },
                            },
                        },
                    },
                },
            },
        },
        "edges": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id", "source", "target"],
                "properties": {
                    "id": {"type": "string"},
                    "source": {"type": "string"},
                    "target": {"type": "string"},
                    "sourceHandle": {"type": ["string", "null"]},
                    "targetHandle": {"type": ["string", "null"]},
                    "data": {
                        "type": "object",
                        "properties": {
                            "sourceField": {"type": "string"},
                            "targetField": {"type": ["string", "null"]},
                            "relationType": {
                                "enum": ["oneToOne", "oneToMany", "manyToOne", "manyToMany"],
                            },
                            "relationDetails": _RELATION_DETAILS_SCHEMA,
                        },
                    },
                    "style": {
                        "type": "object",
                        "properties": {
                            "stroke": {"type": "string"},
                            "strokeWidth": {"type": "number"},
                        },
                    },
                },
            },
        },
        "enums": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["name", "values"],
                "properties": {
                    "name": {"type": "string"},
                    "values": {"type": "array", "items": {"type": "string"}},
                },
            },
        },
    },
}


class ValidationSeverity(str, Enum):
    """Severity levels for validation issues."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass
class ValidationIssue:
    """A single validation issue."""

    severity: ValidationSeverity
    message: str
    path: str = ""
    context: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "severity": self.severity.value,
            "message": self.message,
            "path": self.path,
            "context": self.context,
        }


@dataclass
class ValidationResult:
    """Result of a validation operation."""

    valid: bool
    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.valid

    @property
    def errors(self) -> list[str]:
        """Messages of error-level issues, in the order they were found."""
        return [i.message for i in self.issues if i.severity == ValidationSeverity.ERROR]

    @property
    def warnings(self) -> list[str]:
        return [i.message for i in self.issues if i.severity == ValidationSeverity.WARNING]

    def add_issue(
        self,
        severity: ValidationSeverity,
        message: str,
        path: str = "",
        **context: Any,
    ) -> None:
        self.issues.append(
            ValidationIssue(
                severity=severity,
                message=message,
                path=path,
                context=context,
            )
        )
        if severity == ValidationSeverity.ERROR:
            self.valid = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "isValid": self.valid,
            "errors": self.errors,
            "issues": [i.to_dict() for i in self.issues],
        }


class ValidationEngine:
    """Engine for validating schema text, parse results and graph documents."""

    def validate_schema(self, content: str) -> ValidationResult:
        """Run structural sanity checks on raw schema text.

        Checks:
        - Content is not empty (exclusive: stops further checks)
        - At least one line starts with `model `
        - Opening and closing brace counts match

        Passing does not guarantee the parser extracts anything.
        """
        result = ValidationResult(valid=True)

        if not trim_line(content):
            result.add_issue(ValidationSeverity.ERROR, EMPTY_SCHEMA_MESSAGE)
            return result

        has_model = any(trim_line(line).startswith("model ") for line in content.split("\n"))
        if not has_model:
            result.add_issue(ValidationSeverity.ERROR, NO_MODELS_MESSAGE)

        open_braces = content.count("{")
        close_braces = content.count("}")
        if open_braces != close_braces:
            result.add_issue(
                ValidationSeverity.ERROR,
                MISMATCHED_BRACES_MESSAGE,
                open_braces=open_braces,
                close_braces=close_braces,
            )

        return result

    def validate_parsed(self, parsed: ParsedSchema) -> ValidationResult:
        """Report consistency problems the parser accepts silently.

        All findings are warnings:
        - No models were extracted
        - Several models or enums share a name
        - A relation field targets a name that is neither a model nor an enum
        """
        result = ValidationResult(valid=True)

        if not parsed.models:
            result.add_issue(ValidationSeverity.WARNING, "No models were extracted", path="models")

        for name, count in Counter(parsed.list_models()).items():
            if count > 1:
                result.add_issue(
                    ValidationSeverity.WARNING,
                    f"Duplicate model name: {name}",
                    path=f"models.{name}",
                    count=count,
                )

        for name, count in Counter(parsed.list_enums()).items():
            if count > 1:
                result.add_issue(
                    ValidationSeverity.WARNING,
                    f"Duplicate enum name: {name}",
                    path=f"enums.{name}",
                    count=count,
                )

        known_names = set(parsed.list_models()) | set(parsed.list_enums())
        for model in parsed.models:
            for field_schema in model.get_relation_fields():
                if field_schema.relation_to not in known_names:
                    result.add_issue(
                        ValidationSeverity.WARNING,
                        f"Unknown relation target: {model.name}.{field_schema.name} -> {field_schema.relation_to}",
                        path=f"models.{model.name}.{field_schema.name}",
                    )

        return result

    def validate_graph_document(self, document: Any) -> ValidationResult:
        """Validate a diagram graph document against GRAPH_DOCUMENT_SCHEMA."""
        result = ValidationResult(valid=True)

        try:
            jsonschema.validate(document, GRAPH_DOCUMENT_SCHEMA)
        except jsonschema.ValidationError as e:
            result.add_issue(
                ValidationSeverity.ERROR,
                f"Graph document validation failed: {e.message}",
                path=".".join(str(p) for p in e.absolute_path),
                schema_path=list(e.schema_path),
            )

        return result


def validate_schema(content: str) -> ValidationResult:
    """Convenience function for ValidationEngine.validate_schema."""
    return ValidationEngine().validate_schema(content)
