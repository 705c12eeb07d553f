"""
Parser for the shader description language.

A description consists of blocks in a fixed order:

    const { ... }     zero or more (max MAX_CONSTANT_BLOCKS)
    inter { ... }     optional
    vssrc { ... }     required, verbatim vertex stage statements
    fssrc { ... }     required, verbatim fragment stage statements

Fields in const and inter blocks are declared as ``name : type``. Fields
in a const block can be arrays: ``name[4] : float4``.

The parser is a state machine. Each state handler returns the next
state. Any violation moves the parser to the failed state, which ends
parsing; there is no partial result.
"""

import re
from collections import namedtuple

from ._scanner import Scanner
from ._types import type_size, matrix_types


MAX_CONSTANT_BLOCKS = 8
MAX_INTER_FIELDS = 8

ConstantField = namedtuple("ConstantField", ["name", "type", "array_size", "size"])
ConstantBlock = namedtuple("ConstantBlock", ["index", "fields", "size"])
InterField = namedtuple("InterField", ["name", "type", "slot"])
ParsedShader = namedtuple(
    "ParsedShader", ["constant_blocks", "inter_fields", "vertex_body", "fragment_body"]
)
ParseFailure = namedtuple("ParseFailure", ["block", "rule", "lineno"])

# Parser states
EXPECT_KEYWORD = "expect_keyword"
PARSING_CONST = "parsing_const"
PARSING_INTER = "parsing_inter"
EXPECT_VSSRC = "expect_vssrc"
EXPECT_FSSRC = "expect_fssrc"
DONE = "done"
FAILED = "failed"

PUNCTUATION = ("{", "}", ":")

# The vertex stage output always has this field
RESERVED_INTER_NAMES = ("position",)

# Globals declared by the generated common code
RESERVED_CONST_NAMES = ("_VP", "_CamPos", "_R0", "_CamDir", "_R1", "__t0", "__s0")

_field_name_re = re.compile(r"^([A-Za-z_][A-Za-z0-9_]*)(?:\[([0-9]+)\])?$")


class BlockParser:
    """Parse shader description text into a ParsedShader.

    Call parse(), which returns the ParsedShader, or None if the text is
    invalid. In the latter case the ``failure`` attribute holds a
    ParseFailure describing the block and the violated rule.
    """

    def __init__(self, text):
        self._scanner = Scanner(text)
        self._state = EXPECT_KEYWORD
        self._constant_blocks = []
        self._constant_names = set()
        self._inter_fields = []
        self._bodies = {}
        self.failure = None

    @property
    def state(self):
        return self._state

    def parse(self):
        handlers = {
            EXPECT_KEYWORD: self._expect_keyword,
            PARSING_CONST: self._parse_const,
            PARSING_INTER: self._parse_inter,
            EXPECT_VSSRC: self._expect_vssrc,
            EXPECT_FSSRC: self._expect_fssrc,
        }
        while self._state not in (DONE, FAILED):
            self._state = handlers[self._state]()

        if self._state == FAILED:
            return None
        return ParsedShader(
            tuple(self._constant_blocks),
            tuple(self._inter_fields),
            self._bodies["vssrc"],
            self._bodies["fssrc"],
        )

    def _fail(self, block, rule, lineno=None):
        if lineno is None:
            lineno = self._scanner.lineno
        self.failure = ParseFailure(block, rule, lineno)
        return FAILED

    # %% States

    def _expect_keyword(self):
        token = self._scanner.peek()
        if not token:
            return self._fail("vssrc", "block not found", token.lineno)
        keyword = token.value

        if keyword == "const":
            if len(self._constant_blocks) >= MAX_CONSTANT_BLOCKS:
                return self._fail(
                    "const",
                    f"too many constant blocks (max {MAX_CONSTANT_BLOCKS})",
                    token.lineno,
                )
            self._scanner.next()
            return PARSING_CONST
        elif keyword == "inter":
            self._scanner.next()
            return PARSING_INTER
        elif keyword == "vssrc":
            return EXPECT_VSSRC
        else:
            return self._fail(
                "undefined block",
                f"'const', 'inter' or 'vssrc' expected, got '{keyword}'",
                token.lineno,
            )

    def _parse_const(self):
        fields = []
        for lineno, name, array_size, type_name, size in self._iter_fields("const"):
            if name in RESERVED_CONST_NAMES:
                return self._fail("const", f"field name '{name}' is reserved", lineno)
            if name in self._constant_names:
                return self._fail("const", f"duplicate field name '{name}'", lineno)
            self._constant_names.add(name)
            fields.append(ConstantField(name, type_name, array_size, size))
        if self.failure is not None:
            return FAILED

        index = len(self._constant_blocks)
        size = sum(field.size for field in fields)
        self._constant_blocks.append(ConstantBlock(index, tuple(fields), size))
        return EXPECT_KEYWORD

    def _parse_inter(self):
        names = set()
        for lineno, name, array_size, type_name, size in self._iter_fields("inter"):
            if len(self._inter_fields) >= MAX_INTER_FIELDS:
                return self._fail(
                    "inter", f"too many fields (max {MAX_INTER_FIELDS})", lineno
                )
            if array_size is not None:
                return self._fail(
                    "inter", f"field '{name}' cannot be an array", lineno
                )
            if type_name in matrix_types:
                return self._fail(
                    "inter", f"field '{name}' cannot be a matrix", lineno
                )
            if name in RESERVED_INTER_NAMES:
                return self._fail("inter", f"field name '{name}' is reserved", lineno)
            if name in names:
                return self._fail("inter", f"duplicate field name '{name}'", lineno)
            names.add(name)
            slot = len(self._inter_fields)
            self._inter_fields.append(InterField(name, type_name, slot))
        if self.failure is not None:
            return FAILED
        return EXPECT_VSSRC

    def _expect_vssrc(self):
        return self._read_stage_block("vssrc", EXPECT_FSSRC)

    def _expect_fssrc(self):
        state = self._read_stage_block("fssrc", DONE)
        if state == DONE and not self._scanner.at_end():
            token = self._scanner.peek()
            return self._fail(
                "fssrc", f"unexpected '{token.value}' after block", token.lineno
            )
        return state

    # %% Helpers

    def _read_stage_block(self, keyword, next_state):
        result = self._scanner.expect(keyword, "{")
        if not result:
            return self._fail(
                keyword, f"block not found ({result.error})", result.lineno
            )
        body = self._scanner.read_body()
        if not body:
            return self._fail(keyword, body.error, body.lineno)
        self._bodies[keyword] = body.value
        return next_state

    def _iter_fields(self, block):
        """Generate (lineno, name, array_size, type, size) for each field
        of a brace-delimited block. On a syntax error, sets the failure
        and stops.
        """
        scanner = self._scanner
        result = scanner.expect("{")
        if not result:
            self._fail(block, f"syntax error: {result.error}", result.lineno)
            return

        while True:
            token = scanner.next()
            if not token:
                self._fail(block, f"syntax error: {token.error}", token.lineno)
                return
            if token.value == "}":
                return

            match = _field_name_re.match(token.value)
            if token.value in PUNCTUATION or match is None:
                self._fail(
                    block,
                    f"syntax error: invalid field name '{token.value}'",
                    token.lineno,
                )
                return
            name, array_size = match.group(1), match.group(2)
            if array_size is not None:
                array_size = int(array_size)
                if array_size < 1:
                    self._fail(
                        block,
                        f"array '{name}' must have at least 1 element",
                        token.lineno,
                    )
                    return

            colon = scanner.expect(":")
            if not colon:
                self._fail(block, f"syntax error: {colon.error}", colon.lineno)
                return

            type_token = scanner.next()
            if not type_token or type_token.value in PUNCTUATION:
                self._fail(
                    block, f"syntax error: missing type for '{name}'", token.lineno
                )
                return
            size = type_size(type_token.value)
            if size == 0:
                self._fail(
                    block,
                    f"unknown type '{type_token.value}' for field '{name}'",
                    type_token.lineno,
                )
                return

            size *= array_size or 1
            yield token.lineno, name, array_size, type_token.value, size
