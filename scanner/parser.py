"""Parsers for extracting directives from a file's leading comment block."""

import re
from typing import List, NamedTuple, Optional


# Recognized commands
REQUIRE = "require"
REQUIRE_DIRECTORY = "require_directory"
REQUIRE_TREE = "require_tree"

# Comment punctuation, '=', then the command text and an optional block close
DIRECTIVE_PATTERN = re.compile(r"^\W*=\s*(\w+.*?)(\*/)?\s*$")
QUOTES_PATTERN = re.compile(r"['\"]")

LINE_COMMENT_MARKERS = ("//", "#")
BLOCK_MARKERS = {"/*": "*/", "###": "###"}


class Directive(NamedTuple):
    """A parsed directive: the command name and its arguments."""

    command: str
    arguments: List[str]


def extract_header(content: str) -> str:
    """
    Return the run of comment lines at the start of content.

    Line comments ('//' and '#'), single-line '### ... ###' comments and
    multi-line '/* ... */' or '### ... ###' blocks are recognized. Blank
    lines inside the run belong to it. The run stops at the first line
    that is neither. A leading byte order mark is ignored.

    Args:
        content: Full file content.

    Returns:
        The header text, or an empty string if content does not start
        with a comment.
    """
    header: List[str] = []
    closing: Optional[str] = None

    if content.startswith("\ufeff"):
        content = content[1:]

    for raw_line in content.splitlines():
        line = raw_line.rstrip()
        stripped = line.lstrip()

        if closing is not None:
            header.append(line)
            if closing in stripped:
                closing = None
            continue

        if not stripped:
            header.append(line)
            continue

        opener = _block_opener(stripped)
        if opener is not None:
            rest = stripped[len(opener):]
            if BLOCK_MARKERS[opener] not in rest:
                closing = BLOCK_MARKERS[opener]
            header.append(line)
            continue

        if stripped.startswith(LINE_COMMENT_MARKERS):
            header.append(line)
            continue

        break

    while header and not header[-1].strip():
        header.pop()

    return "\n".join(header)


def _block_opener(stripped: str) -> Optional[str]:
    """Return the block comment marker a line starts with, if any."""
    for opener in BLOCK_MARKERS:
        if stripped.startswith(opener):
            # '####...' is a line comment, not a CoffeeScript block
            if opener == "###" and stripped[3:4] == "#":
                continue
            return opener
    return None


def parse_directives(header: str) -> List[str]:
    """
    Find directive lines in a header.

    Args:
        header: Header text as returned by extract_header().

    Returns:
        The command text (command name and arguments) of each directive,
        in file order.
    """
    directives: List[str] = []
    for line in header.splitlines():
        match = DIRECTIVE_PATTERN.match(line)
        if match:
            directives.append(match.group(1).strip())
    return directives


def extract_directives(content: str) -> List[str]:
    """Parse the directives found in the header of content."""
    return parse_directives(extract_header(content))


def split_directive(text: str) -> Directive:
    """
    Split directive text into command and arguments.

    Quote characters are removed before splitting on whitespace.
    """
    words = QUOTES_PATTERN.sub("", text).split()
    if not words:
        return Directive("", [])
    return Directive(words[0], words[1:])
