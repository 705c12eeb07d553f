"""
Tests for the generated HLSL. The structure of the code is validated
here; validation by the native compiler is in test_dev.py.
"""

import shaderdesc
from shaderdesc._parser import BlockParser
from shaderdesc._generator import HLSLGenerator, vertex_input_decls

from testutils import FULL_SOURCE, FULL_INPUTS


PREAMBLE = """
#define _sign(a) sign(a)
#define _mul(a, b) mul(a, b)
#define _dot(a, b) dot(a, b)
#define _norm(a) normalize(a)
#define _lerp(a, b, k) lerp(a, b, k)
#define _tex2D(a) __t0.Sample(__s0, a)
cbuffer FrameData : register(b0) {
matrix _VP;
float3 _CamPos;
float _R0;
float3 _CamDir;
float _R1;
};
""".lstrip()

QUAD_VERTEX_SOURCE = (
    PREAMBLE
    + """
struct VSInput {
uint id : SV_VertexID;
};
struct VSOutput {
float4 position : SV_Position;
};
VSOutput main(VSInput input) {
VSOutput output;
float2 vcoord = 1.8f * float2(input.id >> 1, input.id & 0x1) - 0.9f;
output.position = float4(vcoord.x, vcoord.y, 1.0, 1.0);
return output;
}
""".lstrip()
)

QUAD_FRAGMENT_SOURCE = (
    PREAMBLE
    + """
Texture2D __t0 : register(t0);
SamplerState __s0 : register(s0);
struct PSInput {
float4 position : SV_Position;
};
struct PSOutput {
float4 color : SV_Target;
};
PSOutput main(PSInput input) {
PSOutput output;
output.color = float4(1.0, 1.0, 1.0, 1.0);
return output;
}
""".lstrip()
)


def generate(inputs, source):
    parsed = BlockParser(source).parse()
    assert parsed is not None
    return HLSLGenerator(inputs, parsed).generate()


def test_quad_shader():
    vs, fs = generate(shaderdesc.QUAD_SHADER_INPUTS, shaderdesc.QUAD_SHADER_SOURCE)
    assert vs == QUAD_VERTEX_SOURCE
    assert fs == QUAD_FRAGMENT_SOURCE


def test_both_stages_share_declarations():
    vs, fs = generate(FULL_INPUTS, FULL_SOURCE)

    constants = """
cbuffer ConstData0 : register(b1) {
float4 color;
float4 lights[4];
};
cbuffer ConstData1 : register(b2) {
matrix model;
};
"""
    for code in (vs, fs):
        assert code.startswith(PREAMBLE)
        assert constants in code
        assert "float3 normal : TEXCOORD0;\nfloat2 texcoord : TEXCOORD1;\n};" in code

    assert "struct VSOutput {\nfloat4 position : SV_Position;\n" in vs
    assert "struct PSInput {\nfloat4 position : SV_Position;\n" in fs
    assert "Texture2D __t0" not in vs
    assert "Texture2D __t0" in fs


def test_vertex_input_struct():
    vs, fs = generate(FULL_INPUTS, FULL_SOURCE)
    expected = """
struct VSInput {
float3 position : VTX0;
float3 normal : VTX1;
float2 texcoord : VTX2;
float4 offset : VTX3;
};
"""
    assert expected in vs
    assert "VSInput" not in fs


def test_vertex_id_input():
    inputs = [
        shaderdesc.ShaderInput("position", shaderdesc.FLOAT2),
        shaderdesc.ShaderInput("vid", shaderdesc.VERTEX_ID),
        shaderdesc.ShaderInput("color", shaderdesc.BYTE4_NRM),
    ]
    decls = vertex_input_decls(inputs)
    assert [(d.type, d.name, d.semantic) for d in decls] == [
        ("float2", "position", "VTX0"),
        ("uint", "vid", "SV_VertexID"),
        ("float4", "color", "VTX1"),
    ]

    vs, _ = generate(inputs, "vssrc {} fssrc {}")
    assert "uint vid : SV_VertexID;" in vs
    assert "float4 color : VTX1;" in vs

    # The semantic indices match the layout
    layout = shaderdesc.compile_shader(inputs, "vssrc {} fssrc {}").layout
    assert [a.semantic_index for a in layout] == [0, 1]


def test_entry_points_wrap_bodies():
    vs, fs = generate(FULL_INPUTS, FULL_SOURCE)
    assert vs.endswith(
        "VSOutput main(VSInput input) {\n"
        "VSOutput output;\n"
        "output.position = _mul(float4(input.position, 1.0), _VP);\n"
        "output.normal = input.normal;\n"
        "output.texcoord = input.texcoord;\n"
        "return output;\n"
        "}\n"
    )
    assert fs.endswith(
        "PSOutput main(PSInput input) {\n"
        "PSOutput output;\n"
        "output.color = color * _tex2D(input.texcoord);\n"
        "return output;\n"
        "}\n"
    )


def test_empty_bodies():
    vs, fs = generate([], "vssrc {} fssrc {}")
    assert vs.endswith("VSOutput output;\nreturn output;\n}\n")
    assert fs.endswith("PSOutput output;\nreturn output;\n}\n")
    assert "struct VSInput {\n};" in vs
    assert "cbuffer ConstData" not in vs


def test_custom_entry_point():
    parsed = BlockParser("vssrc {} fssrc {}").parse()
    vs, fs = HLSLGenerator([], parsed, entry_point="vs_main").generate()
    assert "VSOutput vs_main(VSInput input) {" in vs
    assert "PSOutput vs_main(PSInput input) {" in fs


def test_bodies_are_not_templated():
    vs, fs = generate([], "vssrc { x = {{ y; } fssrc { {$ z; }")
    assert "x = {{ y;\n" in vs
    assert "{$ z;\n" in fs


def test_generation_is_deterministic():
    results = set()
    for _ in range(3):
        results.add(generate(FULL_INPUTS, FULL_SOURCE))
    assert len(results) == 1
