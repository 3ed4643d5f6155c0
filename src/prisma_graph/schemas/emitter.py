"""Schema emitter.

Serializes models and enums back into canonical Prisma schema text:
generator/datasource preamble, then enums, then models. Names, types and
modifiers are written verbatim.
"""

from prisma_graph.config.base import EmitterConfig
from prisma_graph.schemas.base import EnumSchema, FieldSchema, ModelSchema


INDENT = "  "


def render_preamble(config: EmitterConfig) -> str:
    """Render the generator and datasource blocks, followed by a blank line."""
    return (
        f"generator {config.generator_name} {{\n"
        f"{INDENT}provider = \"{config.generator_provider}\"\n"
        f"}}\n"
        f"\n"
        f"datasource {config.datasource_name} {{\n"
        f"{INDENT}provider = \"{config.datasource_provider}\"\n"
        f"{INDENT}url      = env(\"{config.url_env}\")\n"
        f"}}\n"
        f"\n"
    )


def render_enum(enum: EnumSchema) -> str:
    values = "\n".join(f"{INDENT}{value}" for value in enum.values)
    return f"enum {enum.name} {{\n{values}\n}}"


def render_field(field: FieldSchema) -> str:
    return f"{INDENT}{field.render()}"


def render_model(model: ModelSchema) -> str:
    fields = "\n".join(render_field(f) for f in model.fields)
    return f"model {model.name} {{\n{fields}\n}}"


def emit_schema(
    models: list[ModelSchema],
    enums: list[EnumSchema],
    config: EmitterConfig | None = None,
) -> str:
    """Serialize models and enums to schema text.

    The output parses back to the same model names and field names, but
    is not a byte-for-byte round trip: comments, whitespace and anything
    the parser dropped are lost.

    Args:
        models: Models in output order
        enums: Enums in output order
        config: Preamble settings (defaults to prisma-client-js/postgresql)

    Returns:
        Schema text
    """
    config = config or EmitterConfig()

    enums_content = "\n\n".join(render_enum(e) for e in enums)
    models_content = "\n\n".join(render_model(m) for m in models)

    return render_preamble(config) + (enums_content + "\n\n" if enums_content else "") + models_content
