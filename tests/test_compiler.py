"""
Tests for compile_shader(), the entry point that ties everything together.
Failures must be logged and result in an invalid CompiledShader.
"""

import logging

import shaderdesc
from shaderdesc import ShaderInput, compile_shader

from pytest import raises, mark
from testutils import FULL_SOURCE, FULL_INPUTS, make_source


@mark.parametrize("n", range(shaderdesc.MAX_CONSTANT_BLOCKS + 1))
def test_constant_sizes(n):
    consts = [[f"a{i} : float4", f"b{i}[{i + 1}] : float2"] for i in range(n)]
    m = compile_shader([], make_source(consts=consts, inter=[]), "sizes")
    assert m
    assert m.constant_sizes == tuple(16 + 8 * (i + 1) for i in range(n))
    assert m.vertex_source.count("cbuffer ConstData") == n


def test_full_shader():
    m = compile_shader(FULL_INPUTS, FULL_SOURCE, "full")
    assert m
    assert m.name == "full"
    assert m.constant_sizes == (80, 64)
    assert [a.offset for a in m.layout] == [0, 12, 24, 28]
    assert [a.per_instance for a in m.layout] == [False, False, False, True]
    assert [(v.name, v.slot) for v in m.varyings] == [("normal", 0), ("texcoord", 1)]
    assert "VSOutput main(VSInput input)" in m.vertex_source
    assert "PSOutput main(PSInput input)" in m.fragment_source


def test_array_field_size():
    source = make_source(consts=[["foo[4] : float4"]])
    m = compile_shader([], source)
    assert m.constant_sizes == (4 * 16,)
    assert "float4 foo[4];" in m.vertex_source
    assert "float4 foo[4];" in m.fragment_source


def test_vertex_id_only():
    inputs = [ShaderInput("id", shaderdesc.VERTEX_ID)]
    source = "inter {}\nvssrc {\noutput.position = float4(0, 0, 0, 1);\n}\nfssrc {\n}\n"
    m = compile_shader(inputs, source, "vid")
    assert m
    assert m.layout == ()
    assert "uint id : SV_VertexID;" in m.vertex_source


def test_compile_twice_gives_same_result():
    m1 = compile_shader(FULL_INPUTS, FULL_SOURCE)
    m2 = compile_shader(FULL_INPUTS, FULL_SOURCE)
    assert m1.vertex_source == m2.vertex_source
    assert m1.fragment_source == m2.fragment_source
    assert m1.layout == m2.layout
    assert m1.constant_sizes == m2.constant_sizes


def test_missing_fssrc(caplog):
    with caplog.at_level(logging.ERROR, logger="shaderdesc"):
        m = compile_shader([], "inter {}\nvssrc {\nx;\n}\n", "nofs")
    assert not m
    with raises(shaderdesc.ShaderError):
        m.vertex_source
    with raises(shaderdesc.ShaderError):
        m.fragment_source
    assert m.layout == () and m.constant_sizes == ()
    assert "shader 'nofs' fssrc: block not found" in caplog.text


def test_missing_colon_is_logged(caplog):
    with caplog.at_level(logging.ERROR, logger="shaderdesc"):
        m = compile_shader([], make_source(consts=[["foo float4"]]), "colon")
    assert not m
    assert len(caplog.records) == 1
    record = caplog.records[0]
    assert record.levelno == logging.ERROR
    assert "shader 'colon' const: syntax error" in record.getMessage()
    assert "(line 2)" in record.getMessage()


def test_ninth_inter_field(caplog):
    inter = [f"v{i} : float4" for i in range(shaderdesc.MAX_INTER_FIELDS + 1)]
    with caplog.at_level(logging.ERROR, logger="shaderdesc"):
        m = compile_shader([], make_source(inter=inter), "varyings")
    assert not m
    assert "shader 'varyings' inter: too many fields" in caplog.text


def test_ninth_const_block(caplog):
    n = shaderdesc.MAX_CONSTANT_BLOCKS
    consts = [[f"a{i} : float4"] for i in range(n)]
    assert compile_shader([], make_source(consts=consts))

    consts.append(["extra : float4"])
    with caplog.at_level(logging.ERROR, logger="shaderdesc"):
        m = compile_shader([], make_source(consts=consts), "consts")
    assert not m
    assert "shader 'consts' const: too many constant blocks" in caplog.text


def test_success_logs_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="shaderdesc"):
        compile_shader(FULL_INPUTS, FULL_SOURCE, "dbg")
    assert "shader 'dbg' compiled" in caplog.text
    assert all(r.levelno == logging.DEBUG for r in caplog.records)


@mark.parametrize(
    "inputs, message",
    [
        ([ShaderInput("pos", "vec3")], "unknown vertex format"),
        ([ShaderInput("my pos", shaderdesc.FLOAT3)], "invalid field name"),
        (
            [ShaderInput("a", shaderdesc.FLOAT3), ShaderInput("a", shaderdesc.FLOAT2)],
            "duplicate field name 'a'",
        ),
        (
            [
                ShaderInput("id1", shaderdesc.VERTEX_ID),
                ShaderInput("id2", shaderdesc.VERTEX_ID),
            ],
            "only one field",
        ),
        ([ShaderInput("id", shaderdesc.VERTEX_ID, True)], "cannot be per-instance"),
    ],
)
def test_invalid_inputs(caplog, inputs, message):
    with caplog.at_level(logging.ERROR, logger="shaderdesc"):
        m = compile_shader(inputs, "vssrc {} fssrc {}", "inputs")
    assert not m
    assert "shader 'inputs' input: " in caplog.text
    assert message in caplog.text


def test_caller_errors_raise():
    with raises(TypeError):
        compile_shader([], b"vssrc {} fssrc {}")
    with raises(TypeError):
        compile_shader([("pos", shaderdesc.FLOAT3)], "vssrc {} fssrc {}")
