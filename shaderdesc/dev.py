"""
Developer functions. These require the DirectX shader compiler (dxc);
don't use in end-user code!
"""

import os
import tempfile
import subprocess

from ._coreutils import ShaderError
from ._module import CompiledShader, ENTRY_POINT, _stage_key
from ._diagnostics import annotate_source, report_native_failure  # noqa: F401


def get_dxc_command():
    """Get the dxc executable, set SHADERDESC_DXC to override."""
    return os.getenv("SHADERDESC_DXC", "") or "dxc"


def compile_stage(shader, stage, shader_model="6_0"):
    """Compile one stage of a CompiledShader with dxc and return the
    binary as bytes. On failure, the numbered source and the compiler
    output are logged, and a ShaderError is raised.

    Note: needs dxc from the DirectX Shader Compiler or the Windows SDK!
    """
    if not isinstance(shader, CompiledShader):
        raise TypeError("compile_stage() function expects a CompiledShader.")
    key = _stage_key(stage)
    source = shader.stage_source(key)
    profile = shader.stage_profile(key, shader_model)

    with tempfile.TemporaryDirectory() as dirname:
        # The source filename is the stage name, so errors read "vssrc(3,5): ..."
        filename1 = os.path.join(dirname, key)
        filename2 = os.path.join(dirname, key + ".bin")

        with open(filename1, "wb") as f:
            f.write(source.encode())

        try:
            stdout = subprocess.check_output(
                [
                    get_dxc_command(),
                    "-T",
                    profile,
                    "-E",
                    ENTRY_POINT,
                    "-Fo",
                    filename2,
                    filename1,
                ],
                stderr=subprocess.STDOUT,
            )
            stdout  # noqa - not used
        except subprocess.CalledProcessError as err:
            output = err.output.decode(errors="replace")
            text = report_native_failure(shader.name, key, source, output)
            raise ShaderError(text) from None

        with open(filename2, "rb") as f:
            binary = f.read()

    return binary


def validate(shader):
    """Compile both stages of a CompiledShader with dxc. Raises a
    ShaderError if the native compiler rejects one of them.

    Note: needs dxc from the DirectX Shader Compiler or the Windows SDK!
    """
    if not isinstance(shader, CompiledShader):
        raise TypeError("validate() function expects a CompiledShader.")
    if not shader:
        raise ShaderError(f"Shader '{shader.name}' failed to compile.")
    for stage in ("vssrc", "fssrc"):
        compile_stage(shader, stage)
    print(f"Shader '{shader.name}' seems valid!")
