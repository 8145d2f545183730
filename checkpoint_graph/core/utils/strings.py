"""String helpers for deriving query and table names from entity names."""

from __future__ import annotations

import re

# Irregular plurals that don't follow standard rules
_IRREGULAR_PLURALS = {
    "person": "people",
    "child": "children",
    "man": "men",
    "woman": "women",
    "mouse": "mice",
    "datum": "data",
    "medium": "media",
    "criterion": "criteria",
    "index": "indices",
    "matrix": "matrices",
    "vertex": "vertices",
}

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_LAST_WORD = re.compile(r"^(.*?)([A-Za-z]+)$")


def pluralize(word: str) -> str:
    """Convert a singular English word to its plural form.

    Only the trailing run of letters is inflected, so prefixes such as the
    leading underscore of internal entities are preserved.

    Examples:
        >>> pluralize("checkpoint")
        'checkpoints'
        >>> pluralize("_checkpoint")
        '_checkpoints'
        >>> pluralize("proxy")
        'proxies'
        >>> pluralize("address")
        'addresses'
    """
    if not word:
        return word
    match = _LAST_WORD.match(word)
    if not match:
        return word + "s"
    prefix, last = match.groups()
    lower = last.lower()

    if lower in _IRREGULAR_PLURALS:
        plural = _IRREGULAR_PLURALS[lower]
        if last[0].isupper():
            plural = plural.capitalize()
        return prefix + plural

    if lower.endswith(("s", "x", "z", "ch", "sh")):
        # bus -> buses, box -> boxes, church -> churches
        return word + "es"
    if lower.endswith("y"):
        # key -> keys, but proxy -> proxies
        if len(lower) > 1 and lower[-2] in "aeiou":
            return word + "s"
        return word[:-1] + "ies"
    if lower.endswith("fe"):
        return word[:-2] + "ves"
    if lower.endswith(("elf", "alf", "olf", "eaf", "oaf", "arf")):
        return word[:-1] + "ves"
    return word + "s"


def is_identifier(name: str) -> bool:
    """Check that ``name`` is a plain SQL/GraphQL identifier."""
    return bool(_IDENTIFIER.match(name))


def table_name_for(entity_name: str) -> str:
    """Table holding records of ``entity_name``: lower-cased, then pluralized.

    Examples:
        >>> table_name_for("Checkpoint")
        'checkpoints'
        >>> table_name_for("_Metadata")
        '_metadatas'
    """
    return pluralize(entity_name.lower())
