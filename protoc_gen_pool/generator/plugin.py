"""protoc plugin protocol: request decoding, generation and response assembly."""

from dataclasses import dataclass, field
from typing import Self

from google.protobuf.compiler import plugin_pb2
from google.protobuf.message import DecodeError

from .descriptors import build_file
from .emitter import emit_file, get_target
from .options import PluginOptions, parse_parameter
from .types import GeneratedFile, GenerationError, SchemaFile


class ProtocolDecodeError(RuntimeError):
    """Raised when the request read from protoc cannot be decoded."""


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of one plugin invocation.

    Either a complete set of files or a single error message, never both.
    Use `success` and `failure` to build one.
    """

    options: PluginOptions
    files: tuple[GeneratedFile, ...] = ()
    schemas: tuple[SchemaFile, ...] = ()
    error: str | None = field(default=None)

    @classmethod
    def success(
        cls, options: PluginOptions, files: list[GeneratedFile], schemas: list[SchemaFile]
    ) -> Self:
        return cls(options=options, files=tuple(files), schemas=tuple(schemas))

    @classmethod
    def failure(cls, options: PluginOptions, error: str) -> Self:
        return cls(options=options, error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_response(self) -> plugin_pb2.CodeGeneratorResponse:
        """Build the response envelope.

        Feature and edition support are copied from the target's baseline
        generator on success and on failure alike.
        """
        target = get_target(self.options.lang)
        response = plugin_pb2.CodeGeneratorResponse(
            supported_features=target.SUPPORTED_FEATURES,
            minimum_edition=target.MINIMUM_EDITION,
            maximum_edition=target.MAXIMUM_EDITION,
        )
        if not self.ok:
            response.error = self.error
            return response

        for generated in self.files:
            response.file.add(name=generated.name, content=generated.content)
        return response


def read_request(data: bytes) -> plugin_pb2.CodeGeneratorRequest:
    """Decode a CodeGeneratorRequest.

    Raises:
        ProtocolDecodeError: If the data is not a valid request.
    """
    request = plugin_pb2.CodeGeneratorRequest()
    try:
        request.ParseFromString(data)
    except DecodeError as e:
        raise ProtocolDecodeError(f"failed to decode CodeGeneratorRequest: {e}") from e
    return request


def generate(request: plugin_pb2.CodeGeneratorRequest) -> GenerationResult:
    """Generate pool files for every file protoc asked for."""
    options = PluginOptions()
    try:
        options = parse_parameter(request.parameter)
        target = get_target(options.lang)
        protos = {proto.name: proto for proto in request.proto_file}

        files: list[GeneratedFile] = []
        schemas: list[SchemaFile] = []
        for name in request.file_to_generate:
            proto = protos.get(name)
            if proto is None:
                raise GenerationError(f"no descriptor for generated file: {name}")
            schema = build_file(proto, target, options)
            files.append(emit_file(schema, options))
            schemas.append(schema)
    except GenerationError as e:
        return GenerationResult.failure(options, str(e))

    return GenerationResult.success(options, files, schemas)


def encode_response(result: GenerationResult) -> bytes:
    return result.to_response().SerializeToString()
