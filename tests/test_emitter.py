"""Tests for the schema emitter."""

from pathlib import Path

import pytest

from prisma_graph.config.base import EmitterConfig
from prisma_graph.schemas.base import EnumSchema, FieldSchema, ModelSchema
from prisma_graph.schemas.emitter import emit_schema, render_model
from prisma_graph.schemas.parser import parse_schema


SCHEMAS_DIR = Path(__file__).parent.parent / "examples" / "schemas"
BLOG_FILE = SCHEMAS_DIR / "blog.prisma"

PREAMBLE = (
    "generator client {\n"
    "  provider = \"prisma-client-js\"\n"
    "}\n"
    "\n"
    "datasource db {\n"
    "  provider = \"postgresql\"\n"
    "  url      = env(\"DATABASE_URL\")\n"
    "}\n"
    "\n"
)


def _field_names(models):
    return {m.name: {f.name for f in m.fields} for m in models}


class TestEmitSchema:
    """Tests for emit_schema."""

    def test_models_only(self):
        models = [
            ModelSchema(name="User", fields=[
                FieldSchema(name="id", type="String", modifiers=["@id", "@default(cuid())"]),
                FieldSchema(name="bio", type="String?"),
            ]),
            ModelSchema(name="Tag", fields=[FieldSchema(name="id", type="Int", modifiers=["@id"])]),
        ]

        assert emit_schema(models, []) == PREAMBLE + (
            "model User {\n"
            "  id String @id @default(cuid())\n"
            "  bio String?\n"
            "}\n"
            "\n"
            "model Tag {\n"
            "  id Int @id\n"
            "}"
        )

    def test_enums_come_before_models(self):
        models = [ModelSchema(name="A", fields=[FieldSchema(name="id", type="Int")])]
        enums = [
            EnumSchema(name="Role", values=["USER", "ADMIN"]),
            EnumSchema(name="Status", values=["DRAFT"]),
        ]

        assert emit_schema(models, enums) == PREAMBLE + (
            "enum Role {\n"
            "  USER\n"
            "  ADMIN\n"
            "}\n"
            "\n"
            "enum Status {\n"
            "  DRAFT\n"
            "}\n"
            "\n"
            "model A {\n"
            "  id Int\n"
            "}"
        )

    def test_empty_graph_is_preamble_only(self):
        assert emit_schema([], []) == PREAMBLE

    def test_values_written_verbatim(self):
        model = ModelSchema(name="Odd Name", fields=[FieldSchema(name="x", type="weird type")])
        assert render_model(model) == "model Odd Name {\n  x weird type\n}"

    def test_custom_preamble(self):
        config = EmitterConfig(
            generator_provider="prisma-client-py",
            datasource_provider="sqlite",
            url_env="DB_URL",
        )
        text = emit_schema([], [], config)

        assert "provider = \"prisma-client-py\"" in text
        assert "provider = \"sqlite\"" in text
        assert "url      = env(\"DB_URL\")" in text


class TestRoundTrip:
    """Emitting and re-parsing preserves model and field names."""

    @pytest.mark.parametrize("source", [
        BLOG_FILE.read_text(),
        "model M {\n  id String @id\n}",
        "enum E {\n  A\n}\nmodel M {\n  e E @default(A)\n  n String ? @unique\n}",
    ])
    def test_round_trip_preserves_names(self, source):
        first = parse_schema(source)
        second = parse_schema(emit_schema(first.models, first.enums))

        assert second.list_models() == first.list_models()
        assert _field_names(second.models) == _field_names(first.models)
        assert second.enums == first.enums

    def test_round_trip_preserves_edges(self):
        first = parse_schema(BLOG_FILE.read_text())
        second = parse_schema(emit_schema(first.models, first.enums))
        assert second.edges == first.edges

    def test_comments_are_not_preserved(self):
        source = "// top\nmodel M {\n  // inner\n  id Int\n}"
        parsed = parse_schema(source)
        assert "//" not in emit_schema(parsed.models, parsed.enums)
