"""
The entry point of the compiler: turn a shader description into HLSL
plus the metadata needed by the graphics backend.
"""

import re

from ._coreutils import logger
from ._module import ShaderInput, CompiledShader
from ._types import VERTEX_ID, vertex_formats
from ._parser import BlockParser
from ._layout import build_vertex_layout, constant_sizes
from ._generator import HLSLGenerator
from ._diagnostics import format_parse_failure


_identifier_re = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def compile_shader(inputs, source, name="shader"):
    """Compile a shader description to a CompiledShader object.

    * inputs: the vertex fields, a sequence of ShaderInput objects.
    * source: the shader description text.
    * name: the name of the shader, used in diagnostics.

    Errors in the description (or in the inputs) are logged, and result
    in an invalid CompiledShader, which evaluates to False.
    """
    if not isinstance(source, str):
        raise TypeError("compile_shader expects the source to be a string.")
    inputs = list(inputs)
    for field in inputs:
        if not isinstance(field, ShaderInput):
            raise TypeError(
                f"compile_shader expects ShaderInput objects, not {type(field)}."
            )

    error = _check_inputs(inputs)
    if error:
        logger.error(f"shader '{name}' input: {error}")
        return CompiledShader.invalid(name)

    parser = BlockParser(source)
    parsed = parser.parse()
    if parsed is None:
        logger.error(format_parse_failure(name, parser.failure))
        return CompiledShader.invalid(name)

    layout = build_vertex_layout(inputs)
    sizes = constant_sizes(parsed.constant_blocks)
    vertex_source, fragment_source = HLSLGenerator(inputs, parsed).generate()

    logger.debug(
        f"shader '{name}' compiled: {len(layout)} vertex attributes, "
        f"{len(sizes)} constant blocks, {len(parsed.inter_fields)} varyings"
    )
    return CompiledShader(
        name, vertex_source, fragment_source, layout, sizes, parsed.inter_fields
    )


def _check_inputs(inputs):
    names = set()
    n_vertex_ids = 0
    for field in inputs:
        if not isinstance(field.name, str) or not _identifier_re.match(field.name):
            return f"invalid field name {field.name!r}"
        if field.name in names:
            return f"duplicate field name '{field.name}'"
        names.add(field.name)
        if field.format not in vertex_formats:
            return f"unknown vertex format {field.format!r} for '{field.name}'"
        if field.format == VERTEX_ID:
            n_vertex_ids += 1
            if n_vertex_ids > 1:
                return "only one field can use the vertex id"
            if field.per_instance:
                return f"vertex id field '{field.name}' cannot be per-instance"
    return None
