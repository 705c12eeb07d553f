"""
Compile compact shader descriptions to HLSL and input layout metadata.
"""

# flake8: noqa

__version__ = "0.1.0"
version_info = tuple(map(int, __version__.split(".")))

from ._coreutils import ShaderError, logger
from ._module import ShaderInput, CompiledShader, ENTRY_POINT
from ._compiler import compile_shader
from ._parser import MAX_CONSTANT_BLOCKS, MAX_INTER_FIELDS
from ._layout import VertexAttribute, vertex_stride

from ._types import VERTEX_ID, HALF2, HALF4
from ._types import FLOAT1, FLOAT2, FLOAT3, FLOAT4
from ._types import SHORT2, SHORT4, SHORT2_NRM, SHORT4_NRM
from ._types import BYTE4, BYTE4_NRM
from ._types import INTEGER1, INTEGER2, INTEGER3, INTEGER4

from .stdlib import QUAD_SHADER_INPUTS, QUAD_SHADER_SOURCE

from . import dev
