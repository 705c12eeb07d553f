"""
A cursor over the text of a shader description.

Tokens are the punctuation characters ``{``, ``}`` and ``:``, and runs of
any other non-whitespace characters. There is no quoting or escaping.
Each read returns a ScanResult that is truthy on success. When a read
fails, the scanner keeps that failure, and all later reads return it.
"""

import re
from bisect import bisect_right


_token_re = re.compile(r"[{}:]|[^\s{}:]+")
_space_re = re.compile(r"\s*")
_newline_re = re.compile(r"\n")


class ScanResult:
    """The result of a scanner read: either a value or an error."""

    __slots__ = ["value", "lineno", "error"]

    def __init__(self, value=None, lineno=0, error=None):
        self.value = value
        self.lineno = lineno
        self.error = error

    def __bool__(self):
        return self.error is None

    def __repr__(self):
        if self.error is None:
            return f"<ScanResult {self.value!r} at line {self.lineno}>"
        else:
            return f"<ScanResult error {self.error!r} at line {self.lineno}>"


def normalize_body(text):
    """Normalize a verbatim stage body: all line endings become LF,
    surrounding whitespace is stripped from each line, blank lines are
    dropped, and a non-empty body ends with exactly one newline.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    lines = [line.strip() for line in text.split("\n")]
    lines = [line for line in lines if line]
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


class Scanner:
    """Token cursor for shader description text."""

    def __init__(self, text):
        if not isinstance(text, str):
            raise TypeError("Scanner expects a string.")
        self._text = text
        self._line_starts = [0] + [m.end() for m in _newline_re.finditer(text)]
        self._pos = 0
        self._failure = None

    def __repr__(self):
        return f"<Scanner at line {self.lineno}>"

    @property
    def failure(self):
        """The ScanResult of the first failed read, or None."""
        return self._failure

    @property
    def lineno(self):
        """The 1-based line number of the cursor position."""
        return self._lineno_at(self._pos)

    def _lineno_at(self, pos):
        return bisect_right(self._line_starts, pos)

    def _fail(self, error, lineno=None):
        lineno = self.lineno if lineno is None else lineno
        self._failure = ScanResult(None, lineno, error)
        return self._failure

    def _skip_whitespace(self):
        self._pos = _space_re.match(self._text, self._pos).end()

    def _match_token(self):
        self._skip_whitespace()
        return _token_re.match(self._text, self._pos)

    def at_end(self):
        """Get whether only whitespace remains."""
        if self._failure is not None:
            return False
        self._skip_whitespace()
        return self._pos >= len(self._text)

    def peek(self):
        """Get the next token without consuming it. Reaching the end of
        the text gives a falsy result but does not fail the scanner.
        """
        if self._failure is not None:
            return self._failure
        m = self._match_token()
        if m is None:
            return ScanResult(None, self.lineno, "unexpected end of input")
        return ScanResult(m.group(), self._lineno_at(m.start()))

    def next(self):
        """Consume and return the next token."""
        if self._failure is not None:
            return self._failure
        m = self._match_token()
        if m is None:
            return self._fail("unexpected end of input")
        self._pos = m.end()
        return ScanResult(m.group(), self._lineno_at(m.start()))

    def expect(self, *literals):
        """Consume the given literal tokens in order. The result holds
        the last literal on success. On a mismatch the scanner fails.
        """
        if not literals:
            raise TypeError("Scanner.expect() needs at least one literal.")
        result = None
        for literal in literals:
            pos = self._pos
            result = self.next()
            if not result:
                return result
            if result.value != literal:
                self._pos = pos
                return self._fail(
                    f"expected '{literal}' but got '{result.value}'", result.lineno
                )
        return result

    def read_body(self):
        """Consume raw text up to the first closing brace, and return it
        normalized. Nested braces are not supported.
        """
        if self._failure is not None:
            return self._failure
        start = self._pos
        end = self._text.find("}", start)
        if end < 0:
            return self._fail("missing closing '}'")
        self._pos = end + 1
        body = normalize_body(self._text[start:end])
        return ScanResult(body, self._lineno_at(start))
