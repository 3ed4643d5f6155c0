"""Tests for graph documents, layout, search and model editing."""

import json
from pathlib import Path

import pytest
import yaml

from prisma_graph.config.base import LayoutConfig, ParserConfig, ProjectConfig
from prisma_graph.errors import GraphDocumentError
from prisma_graph.graph import (
    SchemaGraph,
    add_field,
    layout_positions,
    make_field,
    new_model,
    remove_field,
    rename_model,
    toggle_modifier,
    update_field,
)
from prisma_graph.schemas.base import ModelSchema, ParsedSchema, RelationDetails, RelationType


SCHEMAS_DIR = Path(__file__).parent.parent / "examples" / "schemas"
BLOG_FILE = SCHEMAS_DIR / "blog.prisma"


@pytest.fixture
def blog_graph():
    return SchemaGraph.from_text(BLOG_FILE.read_text())


@pytest.fixture
def user_model(blog_graph):
    return blog_graph.parsed.get_model("User")


class TestLayout:
    """Tests for grid placement."""

    def test_default_grid(self):
        positions = layout_positions(6)
        assert positions[0] == {"x": 100, "y": 100}
        assert positions[3] == {"x": 1150, "y": 100}
        assert positions[4] == {"x": 100, "y": 400}
        assert positions[5] == {"x": 450, "y": 400}

    def test_custom_grid(self):
        layout = LayoutConfig(columns=2, column_width=10, row_height=20, margin=0)
        assert layout_positions(3, layout) == [
            {"x": 0, "y": 0},
            {"x": 10, "y": 0},
            {"x": 0, "y": 20},
        ]


class TestSchemaGraphDocument:
    """Tests for document conversion."""

    def test_to_document_nodes(self, blog_graph):
        document = blog_graph.to_document()

        assert [n["id"] for n in document["nodes"]] == ["User", "Profile", "Post", "Category"]
        post = document["nodes"][2]
        assert post["type"] == "model"
        assert post["position"] == {"x": 800, "y": 100}

        author = next(f for f in post["data"]["fields"] if f["name"] == "author")
        assert author["isRelation"] is True
        assert author["relationTo"] == "User"

    def test_to_document_edges(self, blog_graph):
        edges = {e["id"]: e for e in blog_graph.to_document()["edges"]}
        author = edges["Post-User-author-5"]

        assert author["sourceHandle"] == "author-source"
        assert author["targetHandle"] == "posts-target"
        assert author["style"] == {"stroke": "#6366f1", "strokeWidth": 2}
        assert author["data"]["relationType"] == "manyToOne"
        assert author["data"]["relationDetails"]["onDelete"] == "Cascade"

    def test_document_is_json_serializable(self, blog_graph):
        assert json.loads(json.dumps(blog_graph.to_document())) == blog_graph.to_document()

    def test_document_round_trip(self, blog_graph):
        restored = SchemaGraph.from_document(blog_graph.to_document())

        assert restored.models == blog_graph.models
        assert restored.enums == blog_graph.enums
        assert [e.id for e in restored.edges] == [e.id for e in blog_graph.edges]
        assert restored.edges[5].color == blog_graph.edges[5].color
        assert restored.edges[5].relation_details == blog_graph.edges[5].relation_details

    def test_from_document_derives_relation_flags(self):
        document = {
            "nodes": [{
                "id": "Post",
                "data": {"name": "Post", "fields": [
                    {"name": "id", "type": "Int"},
                    {"name": "tags", "type": "Tag[]"},
                ]},
            }],
        }
        graph = SchemaGraph.from_document(document)
        tags = graph.models[0].get_field("tags")

        assert tags.is_relation is True
        assert tags.relation_to == "Tag"
        assert graph.edges == []
        assert graph.enums == []

    def test_round_trip_keeps_target_fields(self, blog_graph):
        restored = SchemaGraph.from_document(blog_graph.to_document())

        assert [e.target_field for e in restored.edges] == [e.target_field for e in blog_graph.edges]
        assert [e.target_handle for e in restored.edges] == [e.target_handle for e in blog_graph.edges]

        profile = next(e for e in restored.edges if e.id == "User-Profile-profile-2")
        assert profile.target_field is None
        assert profile.target_handle is None

    def test_target_field_without_handle(self):
        document = {
            "nodes": [],
            "edges": [{
                "id": "e",
                "source": "A",
                "target": "B",
                "data": {"sourceField": "b", "targetField": "a"},
            }],
        }
        assert SchemaGraph.from_document(document).edges[0].target_field == "a"

    def test_from_invalid_document(self):
        with pytest.raises(GraphDocumentError, match="required"):
            SchemaGraph.from_document({"nodes": [{"id": "A"}]})

    def test_from_document_with_non_object_style(self):
        document = {
            "nodes": [],
            "edges": [{"id": "e", "source": "A", "target": "A", "style": "red"}],
        }
        with pytest.raises(GraphDocumentError, match="not of type 'object'"):
            SchemaGraph.from_document(document)

    def test_from_yaml_file(self, blog_graph, tmp_path):
        path = tmp_path / "graph.yaml"
        path.write_text(yaml.dump(blog_graph.to_document()))

        restored = SchemaGraph.from_file(path)
        assert restored.parsed.list_models() == blog_graph.parsed.list_models()

    def test_from_malformed_json_file(self, tmp_path):
        path = tmp_path / "graph.json"
        path.write_text("{not json")

        with pytest.raises(GraphDocumentError, match="Failed to parse"):
            SchemaGraph.from_file(path)

    def test_from_missing_file(self, tmp_path):
        with pytest.raises(GraphDocumentError, match="Failed to read"):
            SchemaGraph.from_file(tmp_path / "missing.json")

    def test_to_schema_text(self, blog_graph):
        text = blog_graph.to_schema_text()
        assert text.startswith("generator client {")
        assert "model Category {\n  id String @id @default(cuid())" in text

    def test_from_text_uses_parser_config(self):
        config = ProjectConfig(parser=ParserConfig(resolve_reverse_fields=True))
        graph = SchemaGraph.from_text(BLOG_FILE.read_text(), config)

        posts = next(e for e in graph.edges if e.source == "User" and e.source_field == "posts")
        assert posts.target_field == "author"


class TestSearch:
    """Tests for model search."""

    def test_case_insensitive_substring(self, blog_graph):
        result = blog_graph.search_models("PO")
        assert result.matches == ["Post"]
        assert result.first_match == "Post"
        assert result.is_highlighted("Post")
        assert result.is_faded("User")

    def test_multiple_matches_keep_order(self, blog_graph):
        assert blog_graph.search_models("e").matches == ["User", "Profile", "Category"]

    def test_empty_query_clears(self, blog_graph):
        result = blog_graph.search_models("  ")
        assert result.cleared
        assert result.matches == []
        assert result.first_match is None
        assert not result.is_faded("User")

    def test_no_match(self, blog_graph):
        result = blog_graph.search_models("comment")
        assert result.matches == []
        assert result.is_faded("User")


class TestGraphMutation:
    """Tests for removing and replacing models."""

    def test_remove_model_drops_touching_edges(self, blog_graph):
        graph = blog_graph.remove_model("User")

        assert graph.parsed.list_models() == ["Profile", "Post", "Category"]
        assert all("User" not in (e.source, e.target) for e in graph.edges)
        assert len(blog_graph.models) == 4

    def test_replace_model_follows_rename(self, blog_graph, user_model):
        graph = blog_graph.replace_model("User", rename_model(user_model, "Account"))

        assert graph.parsed.list_models()[0] == "Account"
        author = next(e for e in graph.edges if e.source_field == "author")
        assert author.target == "Account"
        posts = next(e for e in graph.edges if e.id == "User-Post-posts-1")
        assert posts.source == "Account"

    def test_replace_model_drops_edges_of_removed_fields(self, blog_graph, user_model):
        index = [f.name for f in user_model.fields].index("posts")
        graph = blog_graph.replace_model("User", remove_field(user_model, index))

        assert not any(e.source == "User" and e.source_field == "posts" for e in graph.edges)
        assert any(e.source == "User" and e.source_field == "profile" for e in graph.edges)

    def test_add_starter_model(self, blog_graph):
        graph = blog_graph.add_model()

        assert graph.parsed.list_models() == ["User", "Profile", "Post", "Category", "NewModel"]
        assert graph.edges == blog_graph.edges
        assert len(blog_graph.models) == 4
        assert graph.to_document()["nodes"][4]["position"] == {"x": 100, "y": 400}

    def test_add_given_model(self, blog_graph):
        graph = blog_graph.add_model(new_model("Comment"))
        assert graph.models[-1].name == "Comment"

    def test_connect_fields(self, blog_graph):
        graph = blog_graph.connect("Category", "owner-source", "User", "id-target")
        edge = graph.edges[-1]

        assert edge.id == "Category-User-owner-8"
        assert edge.source_field == "owner"
        assert edge.target_field == "id"
        assert edge.source_handle == "owner-source"
        assert edge.target_handle == "id-target"
        assert edge.relation_type == RelationType.ONE_TO_ONE
        assert edge.relation_details == RelationDetails()
        assert edge.color == "#10b981"
        assert len(blog_graph.edges) == 8

    def test_connect_without_target_handle(self, blog_graph):
        edge = blog_graph.connect("Category", "owner-source", "User", None).edges[-1]
        assert edge.target_field is None

    def test_connect_existing_relation_is_noop(self, blog_graph):
        graph = blog_graph.connect("Post", "author-source", "User", "id-target")
        assert graph.edges == blog_graph.edges

    def test_connect_unknown_model(self, blog_graph):
        with pytest.raises(ValueError, match="not found"):
            blog_graph.connect("Comment", "post-source", "Post", "id-target")

    def test_connected_graph_round_trips(self, blog_graph):
        graph = blog_graph.connect("Category", "owner-source", "User", "id-target")
        restored = SchemaGraph.from_document(graph.to_document())

        assert restored.edges[-1] == graph.edges[-1]


class TestEditing:
    """Tests for copy-on-write model editing."""

    def test_make_field_relation_flags(self):
        assert make_field("author", "User?").relation_to == "User"
        assert make_field("id", "String").is_relation is False
        assert make_field("x", "string", ["@relation(fields: [xId], references: [id])"]).is_relation is True

    def test_add_field_defaults(self, user_model):
        edited = add_field(user_model)

        assert edited.fields[-1].name == "newField"
        assert edited.fields[-1].type == "String"
        assert edited.fields[-1].modifiers == []
        assert len(user_model.fields) == 7

    def test_update_field_recomputes_relation(self):
        model = ModelSchema(name="Post", fields=[make_field("owner", "String")])
        edited = update_field(model, 0, type="User")

        assert edited.fields[0].is_relation is True
        assert edited.fields[0].relation_to == "User"
        assert model.fields[0].is_relation is False

    def test_update_field_rejects_unknown_change(self, user_model):
        with pytest.raises(ValueError, match="Unsupported"):
            update_field(user_model, 0, is_relation=True)

    def test_update_field_bad_index(self, user_model):
        with pytest.raises(IndexError):
            update_field(user_model, 99, name="x")

    def test_remove_field(self, user_model):
        edited = remove_field(user_model, 0)
        assert edited.fields[0].name == "email"
        assert user_model.fields[0].name == "id"

    def test_toggle_modifier(self, user_model):
        added = toggle_modifier(user_model, 1, "@db.VarChar(255)")
        assert added.fields[1].modifiers == ["@unique", "@db.VarChar(255)"]

        removed = toggle_modifier(added, 1, "@unique")
        assert removed.fields[1].modifiers == ["@db.VarChar(255)"]

    def test_rename_model_keeps_fields(self, user_model):
        renamed = rename_model(user_model, "Account")
        assert renamed.name == "Account"
        assert renamed.fields == user_model.fields
        assert user_model.name == "User"

    def test_edited_model_emits(self):
        graph = SchemaGraph.from_text("model User {\n  id String @id\n}")
        edited = add_field(graph.models[0], "nickname", "String?", ["@unique"])
        graph = graph.replace_model("User", edited)

        assert "  nickname String? @unique\n}" in graph.to_schema_text()

    def test_relation_type_unchanged_by_editing(self, blog_graph):
        author = next(e for e in blog_graph.edges if e.source_field == "author")
        assert author.relation_type == RelationType.MANY_TO_ONE

    def test_new_model_fields(self):
        model = new_model()

        assert model.name == "NewModel"
        assert [(f.name, f.type, f.modifiers) for f in model.fields] == [
            ("id", "String", ["@id", "@default(cuid())"]),
            ("createdAt", "DateTime", ["@default(now())"]),
            ("updatedAt", "DateTime", ["@updatedAt"]),
        ]
        assert model.get_relation_fields() == []

    def test_new_model_emits(self):
        graph = SchemaGraph(ParsedSchema()).add_model()

        assert graph.to_schema_text().endswith(
            "model NewModel {\n"
            "  id String @id @default(cuid())\n"
            "  createdAt DateTime @default(now())\n"
            "  updatedAt DateTime @updatedAt\n"
            "}"
        )
