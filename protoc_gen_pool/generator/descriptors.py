"""Descriptor model construction from protoc file descriptors."""

from collections.abc import Iterator
from types import ModuleType

from google.protobuf import descriptor_pb2

from .naming import relative_name
from .options import PluginOptions
from .types import SchemaField, SchemaFile, SchemaMessage, UnsupportedSchemaFeatureError

_SYNTAX_EDITIONS = {
    "": descriptor_pb2.EDITION_PROTO2,
    "proto2": descriptor_pb2.EDITION_PROTO2,
    "proto3": descriptor_pb2.EDITION_PROTO3,
}


def _field_type(proto: descriptor_pb2.FieldDescriptorProto) -> str:
    if proto.type_name:
        return proto.type_name.lstrip(".")
    return descriptor_pb2.FieldDescriptorProto.Type.Name(proto.type).removeprefix("TYPE_").lower()


def file_edition(proto: descriptor_pb2.FileDescriptorProto) -> int:
    """Return the edition a file is written in."""
    if proto.syntax == "editions":
        return proto.edition
    if proto.syntax not in _SYNTAX_EDITIONS:
        raise UnsupportedSchemaFeatureError(f"{proto.name}: unknown syntax {proto.syntax!r}")
    return _SYNTAX_EDITIONS[proto.syntax]


class DescriptorVisitor:
    """Walk a FileDescriptorProto and build a SchemaFile for one target.

    The target is a generator module (see `golang` and `python`) providing
    `resolve_package`, `message_identifier`, `enum_identifier` and the
    supported edition range.
    """

    def __init__(self, target: ModuleType, options: PluginOptions) -> None:
        self._target = target
        self._options = options

    def visit_file(self, proto: descriptor_pb2.FileDescriptorProto) -> SchemaFile:
        edition = file_edition(proto)
        if not self._target.MINIMUM_EDITION <= edition <= self._target.MAXIMUM_EDITION:
            raise UnsupportedSchemaFeatureError(
                f"{proto.name}: edition {descriptor_pb2.Edition.Name(edition)} is outside the "
                f"supported range {descriptor_pb2.Edition.Name(self._target.MINIMUM_EDITION)} to "
                f"{descriptor_pb2.Edition.Name(self._target.MAXIMUM_EDITION)}"
            )

        output_package, import_path = self._target.resolve_package(proto, self._options)
        package = proto.package
        prefix = f"{package}." if package else ""

        messages: list[SchemaMessage] = []
        enums = [self._target.enum_identifier(e.name) for e in proto.enum_type]
        for message in proto.message_type:
            messages.extend(self.visit_message(message, prefix, None, package, enums))

        return SchemaFile(
            name=proto.name,
            package=package,
            output_package=output_package,
            import_path=import_path,
            messages=messages,
            enums=enums,
            dependencies=list(proto.dependency),
            edition=edition,
        )

    def visit_message(
        self,
        proto: descriptor_pb2.DescriptorProto,
        prefix: str,
        parent: str | None,
        package: str,
        enums: list[str],
    ) -> Iterator[SchemaMessage]:
        """Yield a message and then its nested messages, in declaration order."""
        full_name = prefix + proto.name
        relative = relative_name(full_name, package)
        nested = [n for n in proto.nested_type if not n.options.map_entry]

        yield SchemaMessage(
            full_name=full_name,
            name=proto.name,
            identifier=self._target.message_identifier(relative),
            parent=parent,
            fields=[
                SchemaField(name=f.name, number=f.number, type=_field_type(f)) for f in proto.field
            ],
            nested=[n.name for n in nested],
        )

        for enum in proto.enum_type:
            enums.append(self._target.enum_identifier(f"{relative}.{enum.name}"))
        for child in nested:
            yield from self.visit_message(child, full_name + ".", full_name, package, enums)


def build_file(
    proto: descriptor_pb2.FileDescriptorProto, target: ModuleType, options: PluginOptions
) -> SchemaFile:
    """Build the descriptor model of one file for a target."""
    return DescriptorVisitor(target, options).visit_file(proto)
