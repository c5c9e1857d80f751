"""Placeholder variables embedded in prompt bodies.

A placeholder is a bracketed name such as ``[tone]`` or ``[ first name ]``.
Names may contain ASCII letters, digits, underscores and whitespace; the
surrounding whitespace is not part of the name. Brackets do not nest, the
first ``]`` after a ``[`` closes the token.

Whitespace is the ECMAScript set, the same one the web editor matches, so
the ``\\x1c``-``\\x1f`` separators and ``\\x85`` are not part of it.
"""
import re
from typing import Dict, List, Literal, Mapping

from pydantic import BaseModel

WHITESPACE = "\t\n\v\f\r \u00a0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
VARIABLE_PATTERN = re.compile(r"\[([a-zA-Z0-9_\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]+)\]")

SegmentType = Literal["text", "filled", "unfilled"]


class Segment(BaseModel):
    text: str
    type: SegmentType


def _lookup(values: Mapping[str, str], name: str) -> str:
    # An empty value counts as unset.
    return values.get(name) or ""


def _name(match: "re.Match[str]") -> str:
    return match.group(1).strip(WHITESPACE)


def extract_variables(text: str) -> List[str]:
    """Return the distinct variable names in ``text`` in order of first appearance."""
    names: Dict[str, None] = {}
    for match in VARIABLE_PATTERN.finditer(text or ""):
        names.setdefault(_name(match), None)
    return list(names)


def resolve_prompt(text: str, values: Mapping[str, str]) -> str:
    """Substitute every placeholder that has a non-empty value.

    Placeholders without a value are kept verbatim, brackets included.
    Substituted values are not scanned again.
    """

    def _replace(match: "re.Match[str]") -> str:
        return _lookup(values, _name(match)) or match.group(0)

    return VARIABLE_PATTERN.sub(_replace, text or "")


def render_segments(text: str, values: Mapping[str, str]) -> List[Segment]:
    """Split ``text`` into plain, filled and unfilled segments for a live preview.

    The segments cover the whole input in order.
    """
    text = text or ""
    segments: List[Segment] = []
    last_index = 0
    for match in VARIABLE_PATTERN.finditer(text):
        if match.start() > last_index:
            segments.append(Segment(text=text[last_index:match.start()], type="text"))
        value = _lookup(values, _name(match))
        if value:
            segments.append(Segment(text=value, type="filled"))
        else:
            segments.append(Segment(text=match.group(0), type="unfilled"))
        last_index = match.end()
    if last_index < len(text):
        segments.append(Segment(text=text[last_index:], type="text"))
    return segments
