"""
Standard shaders that come with shaderdesc.
"""

from ._module import ShaderInput
from ._types import VERTEX_ID


# A quad that covers most of the viewport in plain white. The corners
# are derived from the vertex id, so no vertex buffer is needed; draw it
# as a 4-vertex triangle strip.
QUAD_SHADER_INPUTS = (ShaderInput("id", VERTEX_ID),)

QUAD_SHADER_SOURCE = """
inter {}
vssrc {
    float2 vcoord = 1.8f * float2(input.id >> 1, input.id & 0x1) - 0.9f;
    output.position = float4(vcoord.x, vcoord.y, 1.0, 1.0);
}
fssrc {
    output.color = float4(1.0, 1.0, 1.0, 1.0);
}
"""
