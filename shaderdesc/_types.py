"""
Types known to the shader description language.

There are two tables:

* Field types are used in ``const`` and ``inter`` blocks. The name is
  emitted as-is into the HLSL source, and the byte size determines how
  large the constant buffer backing a ``const`` block is.
* Vertex formats describe how the caller stores a vertex field in a
  vertex buffer. Each format has the HLSL type the vertex stage sees,
  the native (DXGI) format used in the input layout, and its byte size.

Both tables are read-only mappings; they are the only state shared
between compile calls.

"""

from types import MappingProxyType
from collections import namedtuple


# %% Field types (constant buffer layout)

# Scalars and vectors are 4 bytes per component, matrices are 4x4 floats.
# No 16-byte register packing is applied.
field_type_sizes = MappingProxyType(
    {
        "float": 4,
        "float1": 4,
        "float2": 8,
        "float3": 12,
        "float4": 16,
        "int": 4,
        "int1": 4,
        "int2": 8,
        "int3": 12,
        "int4": 16,
        "uint": 4,
        "uint1": 4,
        "uint2": 8,
        "uint3": 12,
        "uint4": 16,
        "matrix": 64,
        "float4x4": 64,
    }
)


def type_size(name):
    """Get the byte size of a field type. Returns 0 for unknown types,
    which callers must treat as an error.
    """
    return field_type_sizes.get(name, 0)


def is_field_type(name):
    """Get whether the given name is a known field type."""
    return name in field_type_sizes


# A matrix occupies four interpolator registers, so it cannot be a varying
matrix_types = frozenset(["matrix", "float4x4"])


# %% Vertex formats (vertex attribute layout)


VertexFormat = namedtuple("VertexFormat", ["tag", "hlsl", "native", "size"])

VERTEX_ID = "vertex_id"
HALF2 = "half2"
HALF4 = "half4"
FLOAT1 = "float1"
FLOAT2 = "float2"
FLOAT3 = "float3"
FLOAT4 = "float4"
SHORT2 = "short2"
SHORT4 = "short4"
SHORT2_NRM = "short2_nrm"
SHORT4_NRM = "short4_nrm"
BYTE4 = "byte4"
BYTE4_NRM = "byte4_nrm"
INTEGER1 = "integer1"
INTEGER2 = "integer2"
INTEGER3 = "integer3"
INTEGER4 = "integer4"

_vertex_formats = [
    # The vertex id is not read from a buffer, so it has no native format
    VertexFormat(VERTEX_ID, "uint", "DXGI_FORMAT_UNKNOWN", 0),
    VertexFormat(HALF2, "float2", "DXGI_FORMAT_R16G16_FLOAT", 4),
    VertexFormat(HALF4, "float4", "DXGI_FORMAT_R16G16B16A16_FLOAT", 8),
    VertexFormat(FLOAT1, "float1", "DXGI_FORMAT_R32_FLOAT", 4),
    VertexFormat(FLOAT2, "float2", "DXGI_FORMAT_R32G32_FLOAT", 8),
    VertexFormat(FLOAT3, "float3", "DXGI_FORMAT_R32G32B32_FLOAT", 12),
    VertexFormat(FLOAT4, "float4", "DXGI_FORMAT_R32G32B32A32_FLOAT", 16),
    VertexFormat(SHORT2, "int2", "DXGI_FORMAT_R16G16_SINT", 4),
    VertexFormat(SHORT4, "int4", "DXGI_FORMAT_R16G16B16A16_SINT", 8),
    VertexFormat(SHORT2_NRM, "float2", "DXGI_FORMAT_R16G16_SNORM", 4),
    VertexFormat(SHORT4_NRM, "float4", "DXGI_FORMAT_R16G16B16A16_SNORM", 8),
    VertexFormat(BYTE4, "uint4", "DXGI_FORMAT_R8G8B8A8_UINT", 4),
    VertexFormat(BYTE4_NRM, "float4", "DXGI_FORMAT_R8G8B8A8_UNORM", 4),
    VertexFormat(INTEGER1, "uint1", "DXGI_FORMAT_R32_UINT", 4),
    VertexFormat(INTEGER2, "uint2", "DXGI_FORMAT_R32G32_UINT", 8),
    VertexFormat(INTEGER3, "uint3", "DXGI_FORMAT_R32G32B32_UINT", 12),
    VertexFormat(INTEGER4, "uint4", "DXGI_FORMAT_R32G32B32A32_UINT", 16),
]

vertex_formats = MappingProxyType({fmt.tag: fmt for fmt in _vertex_formats})


def vertex_format(tag):
    """Get the VertexFormat for the given format tag."""
    try:
        return vertex_formats[tag]
    except KeyError:
        raise ValueError(f"Invalid vertex format '{tag}'") from None
