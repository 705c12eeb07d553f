"""
Build the descriptive metadata that the graphics backend needs to create
the input layout and the constant buffers. Nothing here touches the GPU.
"""

from collections import namedtuple

from ._types import VERTEX_ID, vertex_format


VertexAttribute = namedtuple(
    "VertexAttribute",
    [
        "semantic",
        "semantic_index",
        "format",
        "input_slot",
        "offset",
        "per_instance",
        "step_rate",
    ],
)

VERTEX_SEMANTIC = "VTX"


def build_vertex_layout(inputs):
    """Get a list of VertexAttribute objects for the given ShaderInput's.

    Fields with the VERTEX_ID format are skipped, because the vertex id
    is generated by the GPU rather than read from a buffer. The remaining
    fields get sequential semantic indices, and are packed one after the
    other in input slot 0.
    """
    layout = []
    offset = 0
    for field in inputs:
        fmt = vertex_format(field.format)
        if fmt.tag == VERTEX_ID:
            continue
        per_instance = bool(field.per_instance)
        attribute = VertexAttribute(
            VERTEX_SEMANTIC,
            len(layout),
            fmt.native,
            0,
            offset,
            per_instance,
            1 if per_instance else 0,
        )
        layout.append(attribute)
        offset += fmt.size
    return layout


def vertex_stride(inputs):
    """Get the total byte size of one vertex for the given ShaderInput's."""
    return sum(vertex_format(field.format).size for field in inputs)


def constant_sizes(constant_blocks):
    """Get the byte sizes of the given ConstantBlock's, in order."""
    return [block.size for block in constant_blocks]
