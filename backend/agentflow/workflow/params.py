# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Parameter value grammar.

On the wire a parameter is a plain JSON scalar; a string of the form
``$<nodeId>.<field>`` refers to another node's result, where the node id is
everything between the ``$`` and the first ``.``. A value that is entirely
such a token parses into a ``Reference``, anything else is a ``Literal``.

Tokens embedded in longer text are found by scanning. Node ids are open
strings, so the scan matches the ids the caller knows about first and only
then falls back to a plain pattern for unknown ids.
"""

import re
from dataclasses import dataclass
from typing import Dict, Iterable, Set, Union

ParamScalar = Union[str, int, float, bool, None]

REFERENCE_PREFIX = "$"
DEFAULT_FIELD = "output"

# A whole-value token: "$ai-1.output", "$fetch page.output"
_REFERENCE_RE = re.compile(r"^\$([^.]+)\.(\w+)$")
# Unknown-id tokens embedded in text: "Here's the summary: $ai-1.output"
_EMBEDDED_RE = re.compile(r"\$([^.\s$]+)\.(\w+)")


@dataclass(frozen=True)
class Literal:
    value: ParamScalar


@dataclass(frozen=True)
class Reference:
    node_id: str
    field: str = DEFAULT_FIELD

    def to_token(self) -> str:
        return f"{REFERENCE_PREFIX}{self.node_id}.{self.field}"


ParamValue = Union[Literal, Reference]


def parse_param(value: ParamScalar) -> ParamValue:
    """Parse a wire value into a Literal or a Reference."""
    if isinstance(value, str) and value.startswith(REFERENCE_PREFIX):
        match = _REFERENCE_RE.match(value)
        if match:
            return Reference(node_id=match.group(1), field=match.group(2))
    return Literal(value)


def reference(node_id: str, field: str = DEFAULT_FIELD) -> str:
    """Build the wire token for a node's result."""
    return Reference(node_id, field).to_token()


def _token_pattern(node_id: str) -> "re.Pattern[str]":
    return re.compile(re.escape(f"{REFERENCE_PREFIX}{node_id}.") + r"\w+")


def referenced_node_ids(value: ParamScalar, known_ids: Iterable[str] = ()) -> Set[str]:
    """
    Node ids named by a parameter value.

    Covers both whole-value references and tokens embedded in longer text.
    Embedded tokens naming one of known_ids are matched exactly, longest id
    first, so ids containing spaces are recognised.
    """
    if not isinstance(value, str) or REFERENCE_PREFIX not in value:
        return set()
    parsed = parse_param(value)
    if isinstance(parsed, Reference):
        return {parsed.node_id}

    found: Set[str] = set()
    for node_id in sorted(set(known_ids), key=len, reverse=True):
        pattern = _token_pattern(node_id)
        if pattern.search(value):
            found.add(node_id)
            value = pattern.sub("", value)
    found |= {match.group(1) for match in _EMBEDDED_RE.finditer(value)}
    return found


def references_node(value: ParamScalar, node_id: str) -> bool:
    return node_id in referenced_node_ids(value, [node_id])


def collect_references(params: Dict[str, ParamScalar], known_ids: Iterable[str] = ()) -> Set[str]:
    """All node ids referenced from a params mapping."""
    known = list(known_ids)
    found: Set[str] = set()
    for value in params.values():
        found |= referenced_node_ids(value, known)
    return found


def dangling_references(params: Dict[str, ParamScalar], known_ids: Iterable[str]) -> Set[str]:
    known = set(known_ids)
    return collect_references(params, known) - known
