"""
datatypes/description.py
------------------------
Splits a textual type description into name, parameters and properties.

Grammar::

    description := NAME ['(' PARAMLIST ')'] ['{' PROPLIST '}']

    varchar(255)
    decimal(10, 2)
    int{unsigned:true, auto_increment:true}
    custom(3){url:http://example.com:8080}

Design Decisions:
    * Single lexical pass; nested brackets and escaped separators are not
      supported.
    * Empty parameter/property tokens are dropped.
    * Property tokens split on the first ``:`` only, so values may contain
      colons.
    * An unclosed ``(`` or ``{`` runs to the end of the string.
"""
from __future__ import annotations

from typing import NamedTuple

from datatypes.exceptions import MalformedDescriptionError


class TypeDescription(NamedTuple):
    """Parsed form of a type description string."""
    name: str
    parameters: tuple[str, ...]
    properties: dict[str, str]

    def __str__(self) -> str:
        text = self.name
        if self.parameters:
            text += f"({', '.join(self.parameters)})"
        if self.properties:
            props = ", ".join(f"{k}:{v}" for k, v in self.properties.items())
            text += f"{{{props}}}"
        return text


def _section(text: str, start: int, closer: str) -> tuple[str, int]:
    """Return the text after *start* up to *closer* and the index just past it."""
    end = text.find(closer, start + 1)
    if end < 0:
        end = len(text)
    return text[start + 1:end], end + 1


def _split_parameters(body: str) -> tuple[str, ...]:
    return tuple(token.strip() for token in body.split(",") if token.strip())


def _split_properties(description: str, body: str) -> dict[str, str]:
    properties: dict[str, str] = {}
    for token in body.split(","):
        token = token.strip()
        if not token:
            continue
        key, sep, value = token.partition(":")
        key = key.strip()
        if not sep or not key:
            raise MalformedDescriptionError(description, token)
        properties[key] = value.strip()
    return properties


def parse_description(text: str) -> TypeDescription:
    """
    Parse *text* into a :class:`TypeDescription`.

    Args:
        text: Raw description, e.g. ``"DECIMAL(10,2)"``.

    Returns:
        The name with its original casing, the positional parameters and
        the properties (last occurrence of a key wins).

    Raises:
        MalformedDescriptionError: If a property token lacks ``name:``.

    Examples::

        parse_description("VARCHAR(10)")
        →  TypeDescription(name="VARCHAR", parameters=("10",), properties={})

        parse_description("custom{scale:2,unsigned:true}")
        →  TypeDescription(name="custom", parameters=(),
                           properties={"scale": "2", "unsigned": "true"})
    """
    openers = [i for i in (text.find("("), text.find("{")) if i >= 0]
    if not openers:
        return TypeDescription(text.strip(), (), {})

    cut = min(openers)
    name = text[:cut].strip()
    parameters: tuple[str, ...] = ()
    position = cut

    if text[cut] == "(":
        body, position = _section(text, cut, ")")
        parameters = _split_parameters(body)

    properties: dict[str, str] = {}
    brace = text.find("{", position)
    if brace >= 0:
        body, _ = _section(text, brace, "}")
        properties = _split_properties(text, body)

    return TypeDescription(name, parameters, properties)
