"""
Formatting of error messages. Parse failures become a single line. When
the native compiler rejects generated code, the generated source is shown
with line numbers, followed by the compiler's own messages.
"""

import re

from ._coreutils import logger


def format_parse_failure(shader_name, failure):
    """Get the message for a ParseFailure."""
    message = f"shader '{shader_name}' {failure.block}: {failure.rule}"
    if failure.lineno:
        message += f" (line {failure.lineno})"
    return message


def number_lines(source):
    """Prefix each line of the source with its 1-based line number."""
    return "\n".join(
        f"{i:3d}  {line}" for i, line in enumerate(source.splitlines(), 1)
    )


def strip_filename_prefix(error_text, source_name):
    """Remove the path that native compilers put in front of the source
    name, so that "C:\\tmp\\x\\vssrc(3,5): error" becomes "vssrc(3,5): error".
    """
    # The shortest path prefix whose last component is the source name
    prefix_re = re.compile(r"^.*?[/\\](?=%s(?:[^/\\]|$))" % re.escape(source_name))
    lines = [prefix_re.sub("", line, count=1) for line in error_text.splitlines()]
    return "\n".join(lines).strip()


def annotate_source(source, error_text, source_name):
    """Get the text that describes a native compile failure: the numbered
    source followed by the cleaned-up error text.
    """
    parts = [
        "Shader compilation errors",
        "",
        number_lines(source),
        "",
        strip_filename_prefix(error_text, source_name),
    ]
    return "\n".join(parts)


def report_native_failure(shader_name, stage, source, error_text):
    """Log a native compile failure and return the logged text."""
    text = f"shader '{shader_name}' {stage}: " + annotate_source(
        source, error_text, stage
    )
    logger.error(text)
    return text
