"""
Compile the built-in quad shader, and show the generated HLSL.
"""

import shaderdesc


shader = shaderdesc.compile_shader(
    shaderdesc.QUAD_SHADER_INPUTS, shaderdesc.QUAD_SHADER_SOURCE, "quad"
)

print(shader.vertex_source)
print(shader.fragment_source)
