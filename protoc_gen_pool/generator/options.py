"""Plugin configuration parsed from the request parameter string."""

import keyword
from dataclasses import dataclass, field

from .types import ParameterError

LANGUAGES = ("python", "go")
PATH_MODES = ("import", "source_relative")
REPORT_FORMATS = ("table", "json")

DEFAULT_RUNTIME_IMPORT = "protoc_gen_pool.runtime"

# Same spellings as Go's strconv.ParseBool, which the Go plugins use
_TRUE = frozenset(["1", "t", "T", "true", "TRUE", "True"])
_FALSE = frozenset(["0", "f", "F", "false", "FALSE", "False"])


@dataclass(frozen=True)
class PluginOptions:
    """Options controlling code generation.

    Attributes:
        lang: Target language ("python" or "go").
        paths: Go output layout ("import" or "source_relative").
        module: Go import path prefix stripped from output names.
        import_paths: Go import path overrides keyed by proto file name.
        runtime_import: Python module providing `pool_for`.
        strip_nonfunctional_codegen: Pass-through flag for parity with the
            baseline generator. Nothing branches on it.
        report: Optional stderr report format ("table" or "json").
    """

    lang: str = "python"
    paths: str = "import"
    module: str | None = None
    import_paths: dict[str, str] = field(default_factory=dict)
    runtime_import: str = DEFAULT_RUNTIME_IMPORT
    strip_nonfunctional_codegen: bool = False
    report: str | None = None


def parse_bool(name: str, value: str) -> bool:
    """Parse a boolean parameter value. A bare key counts as true."""
    if value == "" or value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ParameterError(f"invalid boolean value {value!r} for parameter {name}")


def _choice(name: str, value: str, choices: tuple[str, ...]) -> str:
    if value not in choices:
        raise ParameterError(
            f"invalid value {value!r} for parameter {name} (expected one of: {', '.join(choices)})"
        )
    return value


def _module_path(name: str, value: str) -> str:
    if not value:
        raise ParameterError(f"parameter {name} requires a module name")
    for part in value.split("."):
        if not part.isidentifier() or keyword.iskeyword(part):
            raise ParameterError(f"invalid module name {value!r} for parameter {name}")
    return value


def parse_parameter(parameter: str) -> PluginOptions:
    """Parse a comma separated `key=value` parameter string."""
    values: dict = {}
    import_paths: dict[str, str] = {}

    for chunk in parameter.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        key, _, value = chunk.partition("=")
        key = key.strip()
        value = value.strip()

        if key.startswith("M") and len(key) > 1:
            import_paths[key[1:]] = value
        elif key == "lang":
            values["lang"] = _choice(key, value, LANGUAGES)
        elif key == "paths":
            values["paths"] = _choice(key, value, PATH_MODES)
        elif key == "module":
            values["module"] = value
        elif key == "runtime_import":
            values["runtime_import"] = _module_path(key, value)
        elif key == "experimental_strip_nonfunctional_codegen":
            values["strip_nonfunctional_codegen"] = parse_bool(key, value)
        elif key == "report":
            values["report"] = _choice(key, value, REPORT_FORMATS)
        else:
            raise ParameterError(f"unknown parameter {key!r}")

    if values.get("module") and values.get("paths") == "source_relative":
        raise ParameterError("cannot use module= with paths=source_relative")

    return PluginOptions(import_paths=import_paths, **values)
