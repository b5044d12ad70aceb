"""Reference anchor id derivation.

Reference ids are the anchors the rendered page uses for footnotes
(``cite_note-1``, ``cite_note-smith-2``). API consumers link to them, so the
escaping must match what the renderer emits.
"""

from __future__ import annotations

import re
from typing import Any, Literal
from urllib.parse import quote

from src.references.models import MemberName


IdEncoding = Literal["html5", "legacy"]

_WHITESPACE_RE = re.compile(r"\s")
_UNDERSCORE_RUN_RE = re.compile(r"__+")
_INTEGER_KEY_RE = re.compile(r"^(?:0|-?[1-9][0-9]*)$")
_MAX_INTEGER_KEY = 2**63 - 1

# Characters that are unsafe inside an HTML attribute or that wikitext would
# re-interpret after substitution.
_ATTRIBUTE_ENTITIES = {
    "&": "&amp;",
    '"': "&quot;",
    "'": "&#039;",
    "<": "&lt;",
    ">": "&gt;",
    "\n": "&#10;",
    "\r": "&#13;",
    "\t": "&#9;",
    "{": "&#123;",
    "}": "&#125;",
    "[": "&#91;",
    "]": "&#93;",
    "|": "&#124;",
}


def php_array_key(name: Any) -> MemberName:
    """Normalize a decoded JSON object key the way PHP array keys behave.

    Canonical decimal integer strings within the signed 64-bit range become
    integers; everything else is kept as-is.

    >>> php_array_key("12"), php_array_key("012"), php_array_key("note")
    (12, '012', 'note')
    """
    if isinstance(name, str) and _INTEGER_KEY_RE.match(name):
        key = int(name)
        if -_MAX_INTEGER_KEY - 1 <= key <= _MAX_INTEGER_KEY:
            return key
    return name


def escape_id(value: str, encoding: IdEncoding = "html5") -> str:
    """Escape a string for use as an HTML id attribute."""
    escaped = _WHITESPACE_RE.sub("_", value)
    if encoding == "legacy":
        escaped = quote(escaped, safe="").replace("~", "%7E")
        escaped = escaped.replace("%3A", ":").replace("%", ".")
    return escaped


def encode_attribute(value: str) -> str:
    """Entity-encode characters that are not safe in an attribute value."""
    return "".join(_ATTRIBUTE_ENTITIES.get(char, char) for char in value)


class ReferenceKeyFormatter:
    """Builds reference anchor ids from a stored member name and key.

    Attributes:
        prefix: Text prepended to every id
        suffix: Text appended to every id
        encoding: Id escaping mode ("html5" or "legacy")
    """

    def __init__(
        self,
        prefix: str = "cite_note-",
        suffix: str = "",
        encoding: IdEncoding = "html5",
    ) -> None:
        self.prefix = prefix
        self.suffix = suffix
        self.encoding = encoding

    def normalize(self, key: str) -> str:
        """Escape, collapse underscore runs, then attribute-encode."""
        normalized = escape_id(key, self.encoding)
        normalized = _UNDERSCORE_RUN_RE.sub("_", normalized)
        return encode_attribute(normalized)

    def references_key(self, key: Any) -> str:
        """Return the anchor id for a raw key string."""
        return self.normalize(f"{self.prefix}{key}{self.suffix}")

    def reference_id(self, name: MemberName, key: Any) -> str:
        """Return the anchor id for a stored member.

        Explicitly named references combine name and key; unnamed
        (positional or empty-named) references use the key alone.
        """
        if isinstance(name, str) and name != "":
            return self.references_key(f"{name}-{key}")
        return self.references_key(key)
