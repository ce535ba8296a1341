"""Code emitter: one pool file per requested schema file."""

from types import ModuleType

from . import golang, python
from .options import PluginOptions
from .types import GeneratedFile, ParameterError, SchemaFile

TARGETS: dict[str, ModuleType] = {
    "go": golang,
    "python": python,
}


def get_target(lang: str) -> ModuleType:
    """Return the generator module for a target language."""
    try:
        return TARGETS[lang]
    except KeyError:
        raise ParameterError(f"unknown language: {lang}") from None


def emit_file(schema: SchemaFile, options: PluginOptions) -> GeneratedFile:
    """Render the pool file for a schema.

    The content is fully rendered before the GeneratedFile is created, so a
    failure on any message leaves nothing behind for this file.
    """
    target = get_target(options.lang)
    name = target.output_name(schema, options)
    content = target.render(schema, options)
    return GeneratedFile(name=name, content=content)
