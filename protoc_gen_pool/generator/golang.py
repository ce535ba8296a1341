"""Go code generator: sync.Pool backed accessors beside protoc-gen-go output."""

import posixpath

from google.protobuf import descriptor_pb2
from google.protobuf.compiler import plugin_pb2
from jinja2 import Environment, PackageLoader

from .naming import (
    check_unique,
    go_camel_case,
    go_package_name,
    go_sanitized,
    pool_names,
    strip_proto,
)
from .options import PluginOptions
from .types import SchemaFile, UnsupportedSchemaFeatureError

env = Environment(
    loader=PackageLoader("protoc_gen_pool.generator", "templates"),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)

template = env.get_template("go.pool.go.j2")

SUFFIX = ".pb.pool.go"

# Feature negotiation values of protoc-gen-go
SUPPORTED_FEATURES = (
    plugin_pb2.CodeGeneratorResponse.FEATURE_PROTO3_OPTIONAL
    | plugin_pb2.CodeGeneratorResponse.FEATURE_SUPPORTS_EDITIONS
)
MINIMUM_EDITION = descriptor_pb2.EDITION_PROTO2
MAXIMUM_EDITION = descriptor_pb2.EDITION_2023


def resolve_package(
    proto: descriptor_pb2.FileDescriptorProto, options: PluginOptions
) -> tuple[str, str]:
    """Return (package name, import path) for a file.

    An M parameter wins over the go_package option. `path;name` sets the
    package name explicitly, otherwise it is the last path element.
    """
    go_package = options.import_paths.get(proto.name)
    if go_package is None and proto.options.HasField("go_package"):
        go_package = proto.options.go_package
    if not go_package:
        raise UnsupportedSchemaFeatureError(
            f"unable to determine Go import path for {proto.name!r}: "
            f"add 'option go_package' to the file or pass M{proto.name}=<import path>"
        )

    import_path, sep, name = go_package.partition(";")
    if sep and name:
        return go_sanitized(name), import_path
    return go_package_name(import_path), import_path


def message_identifier(relative: str) -> str:
    return go_camel_case(relative)


def enum_identifier(relative: str) -> str:
    return go_camel_case(relative)


def output_name(schema: SchemaFile, options: PluginOptions) -> str:
    """Return the output file name, next to protoc-gen-go's `.pb.go`."""
    if options.paths == "source_relative":
        return strip_proto(schema.name) + SUFFIX

    prefix = posixpath.join(schema.import_path, posixpath.basename(strip_proto(schema.name)))
    if options.module:
        module = options.module.rstrip("/") + "/"
        if not prefix.startswith(module):
            raise UnsupportedSchemaFeatureError(
                f"{schema.name}: generated file {prefix}{SUFFIX} does not match "
                f"prefix {options.module!r}"
            )
        prefix = prefix[len(module) :]
    return prefix + SUFFIX


def reserved_names(schema: SchemaFile) -> dict[str, str]:
    """Return the type identifiers protoc-gen-go declares for this file."""
    reserved = {"sync": "the sync package import"}
    for message in schema.messages:
        reserved[message.identifier] = f"message type {message.full_name}"
    for enum in schema.enums:
        reserved[enum] = f"enum type {enum}"
    return reserved


def render(schema: SchemaFile, options: PluginOptions) -> str:
    """Render the pool file for a schema."""
    pools = [pool_names(message) for message in schema.messages]
    check_unique(
        zip((m.full_name for m in schema.messages), pools),
        reserved_names(schema),
    )
    return template.render(file=schema, pools=pools)
