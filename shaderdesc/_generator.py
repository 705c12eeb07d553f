"""
Generate HLSL source for the vertex and fragment stage.

The code is composed from the jinja2 templates in the ``hlsl``
directory. Both stages share the helper macros, the frame constants,
the const blocks, and the struct with interpolated fields. The verbatim
stage bodies are wrapped in an entry point that declares the ``output``
variable and returns it.
"""

from collections import namedtuple

import jinja2

from ._types import VERTEX_ID, vertex_format
from ._layout import VERTEX_SEMANTIC
from ._module import ENTRY_POINT


jinja_env = jinja2.Environment(
    block_start_string="{$",
    block_end_string="$}",
    variable_start_string="{{",
    variable_end_string="}}",
    line_statement_prefix="$$",
    undefined=jinja2.StrictUndefined,
    keep_trailing_newline=True,
    loader=jinja2.PackageLoader("shaderdesc", "hlsl"),
)


VertexInputDecl = namedtuple("VertexInputDecl", ["type", "name", "semantic"])


def apply_templating(template_name, **kwargs):
    t = jinja_env.get_template(template_name)
    try:
        return t.render(**kwargs)
    except jinja2.UndefinedError as err:
        raise RuntimeError(f"Cannot generate shader: {err.args[0]}") from None


def vertex_input_decls(inputs):
    """Get the fields of the vertex input struct. The semantic indices
    match those of the vertex layout.
    """
    decls = []
    index = 0
    for field in inputs:
        fmt = vertex_format(field.format)
        if fmt.tag == VERTEX_ID:
            decls.append(VertexInputDecl(fmt.hlsl, field.name, "SV_VertexID"))
        else:
            semantic = f"{VERTEX_SEMANTIC}{index}"
            decls.append(VertexInputDecl(fmt.hlsl, field.name, semantic))
            index += 1
    return decls


class HLSLGenerator:
    """Generate the HLSL for both stages of a parsed shader description."""

    def __init__(self, inputs, parsed, entry_point=ENTRY_POINT):
        self._inputs = list(inputs)
        self._parsed = parsed
        self._entry_point = entry_point

    def _common_vars(self):
        return dict(
            constant_blocks=self._parsed.constant_blocks,
            inter_fields=self._parsed.inter_fields,
            entry_point=self._entry_point,
        )

    def vertex_source(self):
        return apply_templating(
            "vertex.hlsl",
            vertex_inputs=vertex_input_decls(self._inputs),
            varyings_struct="VSOutput",
            body=self._parsed.vertex_body,
            **self._common_vars(),
        )

    def fragment_source(self):
        return apply_templating(
            "fragment.hlsl",
            varyings_struct="PSInput",
            body=self._parsed.fragment_body,
            **self._common_vars(),
        )

    def generate(self):
        """Get a tuple (vertex_source, fragment_source)."""
        return self.vertex_source(), self.fragment_source()
