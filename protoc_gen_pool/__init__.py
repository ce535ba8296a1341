"""protoc-gen-pool - object pool generator for protocol buffer messages."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("protoc-gen-pool")
except PackageNotFoundError:
    __version__ = "(local)"
