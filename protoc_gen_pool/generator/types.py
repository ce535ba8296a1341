"""Type definitions for the descriptor model and code generation."""

from dataclasses import dataclass, field

from dataclasses_json import DataClassJsonMixin


class GenerationError(RuntimeError):
    """Raised when a request cannot be turned into generated files.

    These errors are reported back to protoc inside the response rather than
    terminating the plugin.
    """


class ParameterError(GenerationError):
    """Raised when the request parameter string is invalid."""


class UnsupportedSchemaFeatureError(GenerationError):
    """Raised when a schema uses something the emitter cannot represent."""


class NameCollisionError(UnsupportedSchemaFeatureError):
    """Raised when two generated identifiers in one file would clash."""


@dataclass
class SchemaField(DataClassJsonMixin):
    """Represents a single message field."""

    name: str
    number: int
    type: str


@dataclass
class SchemaMessage(DataClassJsonMixin):
    """Represents a message definition.

    `name` is the declared short name and is the basis of the pool and
    accessor identifiers. `identifier` is how the output language refers to
    the message type (e.g. `Outer_Inner` in Go, `Outer.Inner` in Python).
    """

    full_name: str
    name: str
    identifier: str
    parent: str | None
    fields: list[SchemaField]
    nested: list[str] = field(default_factory=list)


@dataclass
class SchemaFile(DataClassJsonMixin):
    """Represents one requested schema file.

    `messages` is flattened across nesting levels in declaration order.
    """

    name: str
    package: str
    output_package: str
    import_path: str
    messages: list[SchemaMessage]
    enums: list[str]
    dependencies: list[str]
    edition: int


@dataclass(frozen=True)
class GeneratedFile:
    """A generated output file."""

    name: str
    content: str


@dataclass(frozen=True)
class PoolNames:
    """Identifiers emitted for one message."""

    name: str
    pool: str
    getter: str
    putter: str
    type_ref: str

    def identifiers(self) -> tuple[str, str, str]:
        return (self.pool, self.getter, self.putter)
