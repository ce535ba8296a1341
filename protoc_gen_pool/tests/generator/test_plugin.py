"""Tests for the plugin protocol adapter."""

import pytest
from google.protobuf import descriptor_pb2
from google.protobuf.compiler import plugin_pb2

from protoc_gen_pool.generator import golang, python
from protoc_gen_pool.generator.options import PluginOptions
from protoc_gen_pool.generator.plugin import (
    GenerationResult,
    ProtocolDecodeError,
    encode_response,
    generate,
    read_request,
)
from protoc_gen_pool.generator.types import GeneratedFile

Response = plugin_pb2.CodeGeneratorResponse


def describe_read_request():
    def decodes_request(expect, order_file, make_request):
        req = make_request([order_file], parameter="lang=go")
        decoded = read_request(req.SerializeToString())
        expect(decoded) == req

    def accepts_empty_input(expect):
        expect(read_request(b"")) == plugin_pb2.CodeGeneratorRequest()

    def rejects_truncated_input():
        # field 1, length 5, only two bytes follow
        with pytest.raises(ProtocolDecodeError):
            read_request(b"\x0a\x05ab")


def describe_generate():
    def produces_one_file_per_requested_file(expect, order_file, nested_file, make_request):
        result = generate(make_request([order_file, nested_file]))
        expect(result.ok) == True
        expect([f.name for f in result.files]) == [
            "shop/order_pb2_pool.py",
            "inventory/warehouse_pb2_pool.py",
        ]
        expect([s.name for s in result.schemas]) == [
            "shop/order.proto",
            "inventory/warehouse.proto",
        ]

    def skips_files_not_flagged_for_generation(expect, order_file, nested_file, make_request):
        result = generate(make_request([nested_file, order_file], generate=["shop/order.proto"]))
        expect([f.name for f in result.files]) == ["shop/order_pb2_pool.py"]

    def follows_file_to_generate_order(expect, order_file, nested_file, make_request):
        req = make_request(
            [order_file, nested_file],
            generate=["inventory/warehouse.proto", "shop/order.proto"],
        )
        result = generate(req)
        expect([f.name for f in result.files]) == [
            "inventory/warehouse_pb2_pool.py",
            "shop/order_pb2_pool.py",
        ]

    def selects_go_target(expect, order_file, make_request):
        result = generate(make_request([order_file], parameter="lang=go"))
        expect(result.options.lang) == "go"
        expect([f.name for f in result.files]) == ["example.com/shop/order.pb.pool.go"]
        expect(result.files[0].content.startswith("package shop\n")) == True

    def is_deterministic(expect, order_file, nested_file, make_request):
        req = make_request([order_file, nested_file])
        expect(encode_response(generate(req))) == encode_response(generate(req))

    def accepts_strip_flag_without_changing_output(expect, order_file, make_request):
        plain = generate(make_request([order_file]))
        stripped = generate(
            make_request([order_file], parameter="experimental_strip_nonfunctional_codegen=true")
        )
        expect(stripped.options.strip_nonfunctional_codegen) == True
        expect(stripped.files) == plain.files

    def fails_on_bad_parameter(expect, order_file, make_request):
        result = generate(make_request([order_file], parameter="lang=cobol"))
        expect(result.ok) == False
        expect("lang" in result.error) == True
        expect(result.files) == ()

    def fails_on_module_with_source_relative_paths(expect, order_file, make_request):
        params = "lang=go,paths=source_relative,module=example.com"
        result = generate(make_request([order_file], parameter=params))
        expect(result.ok) == False
        expect(result.error) == "cannot use module= with paths=source_relative"
        expect(result.files) == ()

    def fails_whole_request_when_one_file_fails(
        expect, order_file, make_file, make_message, make_request
    ):
        broken = make_file("plain.proto", "plain", [make_message("Thing")])
        result = generate(make_request([order_file, broken], parameter="lang=go"))
        expect(result.ok) == False
        expect("go_package" in result.error) == True
        expect(result.files) == ()

    def fails_on_missing_descriptor(expect, order_file, make_request):
        result = generate(make_request([order_file], generate=["missing.proto"]))
        expect(result.error) == "no descriptor for generated file: missing.proto"


def describe_to_response():
    def copies_feature_support_on_success(expect, order_file, make_request):
        response = generate(make_request([order_file])).to_response()
        expect(response.supported_features) == (
            Response.FEATURE_PROTO3_OPTIONAL | Response.FEATURE_SUPPORTS_EDITIONS
        )
        expect(response.minimum_edition) == python.MINIMUM_EDITION
        expect(response.maximum_edition) == descriptor_pb2.EDITION_2023
        expect(response.HasField("error")) == False
        expect(len(response.file)) == 1

    def carries_error_without_files(expect):
        result = GenerationResult.failure(PluginOptions(lang="go"), "boom")
        response = result.to_response()
        expect(response.error) == "boom"
        expect(len(response.file)) == 0
        expect(response.supported_features) == golang.SUPPORTED_FEATURES

    def writes_file_contents(expect):
        files = [GeneratedFile(name="a_pb2_pool.py", content="x = 1\n")]
        response = GenerationResult.success(PluginOptions(), files, []).to_response()
        expect(response.file[0].name) == "a_pb2_pool.py"
        expect(response.file[0].content) == "x = 1\n"

    def round_trips_through_wire_format(expect, order_file, make_request):
        result = generate(make_request([order_file]))
        decoded = Response.FromString(encode_response(result))
        expect(decoded) == result.to_response()
