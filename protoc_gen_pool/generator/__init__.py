"""protoc-gen-pool code generator."""

from .descriptors import DescriptorVisitor as DescriptorVisitor
from .descriptors import build_file as build_file
from .emitter import emit_file as emit_file
from .options import PluginOptions as PluginOptions
from .options import parse_parameter as parse_parameter
from .plugin import GenerationResult as GenerationResult
from .plugin import ProtocolDecodeError as ProtocolDecodeError
from .plugin import generate as generate
from .plugin import read_request as read_request
from .types import *
