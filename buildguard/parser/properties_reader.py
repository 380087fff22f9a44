"""
Properties Reader
=================
Reads Java ``.properties`` text (spring.factories and friends) into an
ordered dict.

Supported syntax (the java.util.Properties.load contract):
    - Comment lines starting with ``#`` or ``!`` (after leading whitespace)
    - Key/value separators ``=``, ``:`` or whitespace
    - Line continuation with an odd number of trailing backslashes;
      leading whitespace of each continuation line is dropped
    - Escapes ``\\t \\n \\r \\f \\uXXXX``; any other escaped char is itself

Duplicate keys: the last occurrence wins.
"""
import logging
import re

logger = logging.getLogger(__name__)

_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
# Only CR, LF and CRLF end a line; \f is whitespace
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def _ends_with_continuation(line: str) -> bool:
    """True if the line ends with an odd number of backslashes."""
    count = len(line) - len(line.rstrip("\\"))
    return count % 2 == 1


def _logical_lines(text: str) -> list[str]:
    """Join continued physical lines and drop blanks and comments."""
    logical: list[str] = []
    pending: str | None = None

    for raw in _LINE_BREAK.split(text):
        line = raw.lstrip(_WHITESPACE)

        if pending is None:
            if not line or line[0] in "#!":
                continue
            current = line
        else:
            current = pending + line

        if _ends_with_continuation(current):
            pending = current[:-1]
        else:
            logical.append(current)
            pending = None

    # A dangling continuation at EOF still terminates the last entry
    if pending is not None:
        logical.append(pending)

    return logical


def _unescape(text: str) -> str:
    out: list[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch != "\\" or i + 1 >= len(text):
            out.append(ch)
            i += 1
            continue

        nxt = text[i + 1]
        if nxt == "u":
            digits = text[i + 2:i + 6]
            if len(digits) < 4 or any(c not in "0123456789abcdefABCDEF" for c in digits):
                raise ValueError(f"Malformed \\uxxxx encoding: \\u{digits}")
            out.append(chr(int(digits, 16)))
            i += 6
        else:
            out.append(_ESCAPES.get(nxt, nxt))
            i += 2
    return "".join(out)


def _split_entry(line: str) -> tuple[str, str]:
    """Split a logical line at the first unescaped separator."""
    key_end = len(line)
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == "\\":
            i += 2
            continue
        if ch in _SEPARATORS or ch in _WHITESPACE:
            key_end = i
            break
        i += 1

    rest = line[key_end:].lstrip(_WHITESPACE)
    if rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)

    return line[:key_end], rest


def parse_properties(text: str) -> dict[str, str]:
    """
    Parse properties text.

    Parameters
    ----------
    text : str
        Raw file content.

    Returns
    -------
    dict[str, str]
        Unescaped key → value, in first-appearance order.

    Raises
    ------
    ValueError
        On a malformed ``\\uXXXX`` escape.
    """
    properties: dict[str, str] = {}
    for line in _logical_lines(text):
        raw_key, raw_value = _split_entry(line)
        properties[_unescape(raw_key)] = _unescape(raw_value)
    return properties


def load_properties(path: str) -> dict[str, str]:
    """Read and parse a properties file (UTF-8, undecodable bytes replaced)."""
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        content = f.read()
    properties = parse_properties(content)
    logger.debug("Loaded %d propert(ies) from %s", len(properties), path)
    return properties
