"""Python code generator: runtime pool backed accessors beside `_pb2` modules."""

import keyword

from google.protobuf import descriptor_pb2
from google.protobuf.compiler import plugin_pb2
from jinja2 import Environment, PackageLoader

from .naming import check_unique, pool_names, python_module_name
from .options import PluginOptions
from .types import SchemaFile, UnsupportedSchemaFeatureError

env = Environment(
    loader=PackageLoader("protoc_gen_pool.generator", "templates"),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)

template = env.get_template("python.pool.py.j2")

SUFFIX = "_pb2_pool.py"

# Feature negotiation values of protoc's built-in Python generator
SUPPORTED_FEATURES = (
    plugin_pb2.CodeGeneratorResponse.FEATURE_PROTO3_OPTIONAL
    | plugin_pb2.CodeGeneratorResponse.FEATURE_SUPPORTS_EDITIONS
)
MINIMUM_EDITION = descriptor_pb2.EDITION_PROTO2
MAXIMUM_EDITION = descriptor_pb2.EDITION_2023

RUNTIME_NAME = "pool_for"


def resolve_package(
    proto: descriptor_pb2.FileDescriptorProto, options: PluginOptions
) -> tuple[str, str]:
    """Return (module alias, dotted module path) of the file's `_pb2` module."""
    module = python_module_name(proto.name)
    for part in module.split("."):
        if not part.isidentifier() or keyword.iskeyword(part):
            raise UnsupportedSchemaFeatureError(
                f"{proto.name}: module path {module!r} is not importable, "
                f"{part!r} is not a valid Python identifier"
            )
    return module.rpartition(".")[2], module


def message_identifier(relative: str) -> str:
    """Return the attribute path of a message inside its `_pb2` module."""
    for part in relative.split("."):
        if keyword.iskeyword(part):
            raise UnsupportedSchemaFeatureError(
                f"message name {part!r} is a Python keyword and cannot be referenced"
            )
    return relative


def enum_identifier(relative: str) -> str:
    return relative


def output_name(schema: SchemaFile, options: PluginOptions) -> str:
    """Return the output file name, next to the baseline `_pb2.py`."""
    return schema.import_path.replace(".", "/").removesuffix("_pb2") + SUFFIX


def _module_import(schema: SchemaFile) -> str:
    package, _, module = schema.import_path.rpartition(".")
    if package:
        return f"from {package} import {module}"
    return f"import {module}"


def reserved_names(schema: SchemaFile) -> dict[str, str]:
    """Return names the generated module imports."""
    return {
        schema.output_package: f"the {schema.import_path} module import",
        RUNTIME_NAME: "the pool runtime import",
    }


def render(schema: SchemaFile, options: PluginOptions) -> str:
    """Render the pool module for a schema."""
    pools = [pool_names(message) for message in schema.messages]
    check_unique(
        zip((m.full_name for m in schema.messages), pools),
        reserved_names(schema),
    )
    return template.render(
        file=schema,
        pools=pools,
        module_import=_module_import(schema),
        runtime_import=options.runtime_import,
        runtime_name=RUNTIME_NAME,
    )
