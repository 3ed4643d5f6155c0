"""Exception types raised outside the parsing core.

The parser and validator never raise for string input; these cover file,
configuration and graph document handling.
"""


class PrismaGraphError(Exception):
    """Base class for prisma-graph errors."""


class SchemaFileError(PrismaGraphError):
    """A schema file could not be read or has an unsupported extension."""


class ConfigError(PrismaGraphError):
    """A configuration file is missing or malformed."""


class GraphDocumentError(PrismaGraphError):
    """A graph document does not match the expected structure."""
