"""Template compiler — argument grammar strings to definitions.

A template is a run of entries shaped ``&<type>[<detail>] <name>``::

    &string name &int age
    &int n &array<n,string> items
    &array<2> pair

The scan is not anchored: text that never matches the entry pattern is
skipped, so prose between entries is tolerated. Only entries that do
match but declare an invalid type or array clause are errors.
"""

from __future__ import annotations

import functools
import logging
import re

from cmdcore.domain.errors import InvalidTemplate
from cmdcore.domain.expression import referenced_names
from cmdcore.domain.types import (
    ARRAY_TYPE_NAME,
    ArgumentDefinition,
    ArrayKind,
    CompiledTemplate,
    PrimitiveType,
    SimpleKind,
)

logger = logging.getLogger(__name__)

ENTRY_PATTERN = re.compile(r"&(\w+)(?:<([^>]+)>)?\s+([a-zA-Z0-9_]+)")

_PRIMITIVES: dict[str, PrimitiveType] = {p.value: p for p in PrimitiveType}


@functools.lru_cache(maxsize=256)
def compile_template(template: str) -> CompiledTemplate:
    """Compile *template* into an ordered tuple of argument definitions.

    Results are memoised; definitions are immutable so the cached tuple
    is shared safely between callers.

    Raises:
        InvalidTemplate: An entry names an unknown type, an ``array``
            entry has no ``<size[, type]>`` clause, or a size expression
            refers to an argument that is not defined before it.
    """
    definitions: list[ArgumentDefinition] = []
    seen: set[str] = set()

    for match in ENTRY_PATTERN.finditer(template):
        type_name, details, name = match.group(1), match.group(2), match.group(3)

        if type_name == ARRAY_TYPE_NAME:
            kind = _array_kind(name, details, seen)
        else:
            ptype = _PRIMITIVES.get(type_name)
            if ptype is None:
                raise InvalidTemplate(
                    f"Unknown data type '{type_name}' for argument '{name}'.",
                    type=type_name,
                    argument=name,
                )
            kind = SimpleKind(ptype)

        if name in seen:
            logger.warning("Duplicate argument %r in template %r; last value wins", name, template)
        seen.add(name)
        definitions.append(ArgumentDefinition(name=name, kind=kind))

    logger.debug("Compiled template %r into %d definition(s)", template, len(definitions))
    return tuple(definitions)


def _array_kind(name: str, details: str | None, earlier: set[str]) -> ArrayKind:
    if details is None:
        raise InvalidTemplate(
            f"Array '{name}' needs size details like <size> or <size, type>.",
            argument=name,
        )

    parts = [part.strip() for part in details.split(",")]
    size_expression = parts[0]
    if not size_expression:
        raise InvalidTemplate(f"Array '{name}' has an empty size expression.", argument=name)

    element_type: PrimitiveType | None = None
    if len(parts) > 1:
        element_type = _PRIMITIVES.get(parts[1])
        if element_type is None:
            raise InvalidTemplate(
                f"Unknown array element type '{parts[1]}' for '{name}'.",
                type=parts[1],
                argument=name,
            )

    unknown = sorted(referenced_names(size_expression) - earlier)
    if unknown:
        raise InvalidTemplate(
            f"Size expression '{size_expression}' for array '{name}' refers to "
            f"{', '.join(repr(n) for n in unknown)}, which must be defined before it.",
            argument=name,
            names=unknown,
        )
    return ArrayKind(size_expression=size_expression, element_type=element_type)
