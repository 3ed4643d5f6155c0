"""Configuration models.

A project config declares how schemas are parsed, how they are emitted
back to text, and how the diagram grid is laid out.
"""

from pydantic import BaseModel, Field


class EmitterConfig(BaseModel):
    """Settings for the generator/datasource preamble of emitted schemas."""

    generator_name: str = Field(default="client", description="Name of the generator block")
    generator_provider: str = Field(default="prisma-client-js", description="Generator provider")
    datasource_name: str = Field(default="db", description="Name of the datasource block")
    datasource_provider: str = Field(default="postgresql", description="Datasource provider")
    url_env: str = Field(default="DATABASE_URL", description="Environment variable holding the database URL")


class ParserConfig(BaseModel):
    """Settings for schema parsing."""

    resolve_reverse_fields: bool = Field(
        default=False,
        description="Look up back-reference fields on the target model instead of guessing",
    )
    validate_first: bool = Field(
        default=True,
        description="Run structural validation before parsing",
    )


class LayoutConfig(BaseModel):
    """Grid placement of model nodes in the diagram document."""

    columns: int = Field(default=4, ge=1, description="Nodes per row")
    column_width: int = Field(default=350, ge=0, description="Horizontal spacing between nodes")
    row_height: int = Field(default=300, ge=0, description="Vertical spacing between rows")
    margin: int = Field(default=100, ge=0, description="Offset of the first node")


class ProjectConfig(BaseModel):
    """Top-level configuration for prisma-graph."""

    name: str = Field(default="prisma-graph", description="Project name")
    emitter: EmitterConfig = Field(default_factory=EmitterConfig)
    parser: ParserConfig = Field(default_factory=ParserConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
