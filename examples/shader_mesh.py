"""
Compile a shader for a textured, instanced mesh, and show the metadata
that a graphics backend needs to create the input layout and constant
buffers. If dxc is available, the generated HLSL is also validated.
"""

import shutil

import shaderdesc
from shaderdesc import ShaderInput, FLOAT3, HALF2, FLOAT4


shader_source = """
const {
    tint : float4
}
inter {
    normal : float3
    texcoord : float2
}
vssrc {
    float3 pos = input.position + input.offset.xyz;
    output.position = _mul(float4(pos, 1.0), _VP);
    output.normal = input.normal;
    output.texcoord = input.texcoord;
}
fssrc {
    float light = saturate(_dot(_norm(input.normal), -_CamDir));
    output.color = tint * _tex2D(input.texcoord) * light;
}
"""

inputs = [
    ShaderInput("position", FLOAT3),
    ShaderInput("normal", FLOAT3),
    ShaderInput("texcoord", HALF2),
    ShaderInput("offset", FLOAT4, per_instance=True),
]

shader = shaderdesc.compile_shader(inputs, shader_source, "mesh")

for attribute in shader.layout:
    print(attribute)
print("vertex stride:", shaderdesc.vertex_stride(inputs))
print("constant buffer sizes:", shader.constant_sizes)
print("varyings:", shader.varyings)

if shutil.which(shaderdesc.dev.get_dxc_command()):
    shaderdesc.dev.validate(shader)
