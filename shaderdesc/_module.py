from collections import namedtuple

from ._coreutils import ShaderError


ShaderInput = namedtuple("ShaderInput", ["name", "format", "per_instance"])
ShaderInput.__new__.__defaults__ = (False,)
ShaderInput.__doc__ = """A vertex field provided by the caller: its name in the
vertex stage, its vertex format tag, and whether it is per-instance data."""

ENTRY_POINT = "main"

# Stage name -> (long name, profile prefix)
STAGES = {
    "vssrc": ("vertex", "vs"),
    "fssrc": ("fragment", "ps"),
}


def _stage_key(stage):
    for key, (long_name, _) in STAGES.items():
        if stage in (key, long_name):
            return key
    raise ValueError(
        f"Stage must be 'vssrc', 'fssrc', 'vertex' or 'fragment', not {stage!r}."
    )


class CompiledShader:
    """The result of compiling a shader description. It holds the
    generated HLSL for the vertex and fragment stage, plus the metadata
    that the graphics backend needs to create the GPU objects: the vertex
    attribute layout, the sizes of the constant buffers, and the varying
    slots.

    A failed compile produces an invalid (falsy) object; its sources
    cannot be obtained.
    """

    def __init__(
        self,
        name,
        vertex_source=None,
        fragment_source=None,
        layout=(),
        constant_sizes=(),
        varyings=(),
    ):
        if (vertex_source is None) != (fragment_source is None):
            raise ValueError("A CompiledShader needs both sources or neither.")
        self._name = name
        self._vertex_source = vertex_source
        self._fragment_source = fragment_source
        self._layout = tuple(layout)
        self._constant_sizes = tuple(constant_sizes)
        self._varyings = tuple(varyings)

    @classmethod
    def invalid(cls, name):
        """Create the result of a failed compile."""
        return cls(name)

    def __repr__(self):
        state = "" if self.is_valid else " (invalid)"
        return f"<CompiledShader '{self._name}'{state} at {hex(id(self))}>"

    def __bool__(self):
        return self.is_valid

    @property
    def name(self):
        """The name of the shader, as used in diagnostics."""
        return self._name

    @property
    def is_valid(self):
        """Whether the compile succeeded."""
        return self._vertex_source is not None

    @property
    def vertex_source(self):
        """The generated HLSL for the vertex stage."""
        return self.stage_source("vssrc")

    @property
    def fragment_source(self):
        """The generated HLSL for the fragment (pixel) stage."""
        return self.stage_source("fssrc")

    @property
    def layout(self):
        """Tuple of VertexAttribute objects, in input slot order."""
        return self._layout

    @property
    def constant_sizes(self):
        """Tuple with the byte size of each const block, in order."""
        return self._constant_sizes

    @property
    def varyings(self):
        """Tuple of InterField objects with their assigned slots."""
        return self._varyings

    def stage_source(self, stage):
        """Get the generated source for "vssrc"/"vertex" or "fssrc"/"fragment"."""
        key = _stage_key(stage)
        if not self.is_valid:
            raise ShaderError(f"Shader '{self._name}' failed to compile.")
        if key == "vssrc":
            return self._vertex_source
        else:
            return self._fragment_source

    def stage_profile(self, stage, shader_model="6_0"):
        """Get the native compiler profile for a stage, e.g. 'vs_6_0'."""
        prefix = STAGES[_stage_key(stage)][1]
        return f"{prefix}_{shader_model}"
