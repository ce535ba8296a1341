"""Unit tests configuration file."""

import pytest
from google.protobuf import descriptor_pb2
from google.protobuf.compiler import plugin_pb2

FieldProto = descriptor_pb2.FieldDescriptorProto


def pytest_configure(config):
    """Disable verbose output when running tests."""
    terminal = config.pluginmanager.getplugin("terminal")
    if terminal:
        terminal.TerminalReporter.showfspath = False


def message(name, fields=(), nested=(), enums=()):
    """Build a DescriptorProto. `fields` are (name, type) pairs numbered from 1."""
    proto = descriptor_pb2.DescriptorProto(name=name)
    for number, (field_name, field_type) in enumerate(fields, start=1):
        proto.field.add(
            name=field_name,
            number=number,
            type=field_type,
            label=FieldProto.LABEL_OPTIONAL,
        )
    proto.nested_type.extend(nested)
    for enum_name in enums:
        enum = proto.enum_type.add(name=enum_name)
        enum.value.add(name=f"{enum_name.upper()}_UNSPECIFIED", number=0)
    return proto


def schema_file(name, package, messages, go_package=None, syntax="proto3"):
    proto = descriptor_pb2.FileDescriptorProto(name=name, package=package, syntax=syntax)
    if go_package is not None:
        proto.options.go_package = go_package
    proto.message_type.extend(messages)
    return proto


def request(files, generate=None, parameter=""):
    req = plugin_pb2.CodeGeneratorRequest(parameter=parameter)
    req.proto_file.extend(files)
    names = generate if generate is not None else [f.name for f in files]
    req.file_to_generate.extend(names)
    return req


@pytest.fixture
def order_file():
    """shop/order.proto declaring Order{id, note} and Receipt{paid}."""
    return schema_file(
        "shop/order.proto",
        "shop",
        [
            message("Order", [("id", FieldProto.TYPE_INT32), ("note", FieldProto.TYPE_STRING)]),
            message("Receipt", [("paid", FieldProto.TYPE_BOOL)]),
        ],
        go_package="example.com/shop;shop",
    )


@pytest.fixture
def nested_file():
    """A file with two levels of nesting and a map field."""
    entry = message(
        "LabelsEntry", [("key", FieldProto.TYPE_STRING), ("value", FieldProto.TYPE_STRING)]
    )
    entry.options.map_entry = True
    labels = FieldProto(
        name="labels",
        number=2,
        type=FieldProto.TYPE_MESSAGE,
        label=FieldProto.LABEL_REPEATED,
        type_name=".inventory.Warehouse.LabelsEntry",
    )
    bin_ = message("Bin", [("slot", FieldProto.TYPE_UINT32)])
    shelf = message("Shelf", [("row", FieldProto.TYPE_INT32)], nested=[bin_], enums=["Side"])
    warehouse = message(
        "Warehouse", [("name", FieldProto.TYPE_STRING)], nested=[shelf, entry]
    )
    warehouse.field.append(labels)
    return schema_file(
        "inventory/warehouse.proto",
        "inventory",
        [warehouse, message("Truck")],
        go_package="example.com/inventory",
    )


@pytest.fixture
def make_message():
    return message


@pytest.fixture
def make_file():
    return schema_file


@pytest.fixture
def make_request():
    return request
