"""Write scene trees as YAML mixing block and flow notation.

Shallow levels are written as indented blocks so the top-level sections and
layers stand apart; past :attr:`DumpOptions.flow_level` (and for any key in
:attr:`DumpOptions.always_flow`) values collapse onto one line.  Strings are
quoted only when they are not bare identifiers.
"""

from __future__ import annotations

import json
import math
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Optional, Sequence

from ..config import SCENE_ALWAYS_FLOW, SCENE_EXTRA_LINES, SCENE_FLOW_LEVEL

_BARE_STRING = re.compile(r"^[\w$][\w$\-.]*$", re.ASCII)


@dataclass(frozen=True)
class DumpOptions:
    """Layout switches for :func:`dump_scene`."""

    # Nesting depth from which arrays and mappings are written inline.
    flow_level: int = 100
    # Keys whose values are always written inline.
    always_flow: Sequence[str] = ()
    # Extra blank lines between mapping entries, shrinking by one per level.
    extra_lines: int = 0
    indent: str = "  "
    quote: str = '"'

    @classmethod
    def scene_preset(cls) -> "DumpOptions":
        """Options tuned for readable Tangram scene files."""

        return cls(
            flow_level=SCENE_FLOW_LEVEL,
            always_flow=SCENE_ALWAYS_FLOW,
            extra_lines=SCENE_EXTRA_LINES,
        )


class _SceneWriter:
    def __init__(self, options: DumpOptions) -> None:
        self.options = options
        self.flow_level = options.flow_level
        self.always_flow = frozenset(options.always_flow)

    def spacing(self, level: int) -> str:
        return self.options.indent * level if level < self.flow_level else ""

    def string(self, value: str) -> str:
        if _BARE_STRING.match(value):
            return value
        quote = self.options.quote
        if quote == "'":
            return quote + value.replace("'", "''") + quote
        escaped = (
            value.replace("\\", "\\\\")
            .replace(quote, "\\" + quote)
            .replace("\n", "\\n")
            .replace("\t", "\\t")
        )
        return quote + escaped + quote

    def convert(self, node: Any, level: int) -> str:
        if node is None:
            return "null"
        if isinstance(node, bool):
            return "true" if node else "false"
        if isinstance(node, int):
            return str(node)
        if isinstance(node, float):
            if node.is_integer():
                return str(int(node))
            # YAML 1.1 reads ``1e-05`` as a string, so write digits out.
            return format(Decimal(repr(node)), "f") if math.isfinite(node) else repr(node)
        if isinstance(node, str):
            return self.string(node)
        if isinstance(node, Mapping):
            return self.mapping(node, level)
        if isinstance(node, (list, tuple)):
            return self.array(node, level)
        return self.string(str(node))

    def array(self, items: Sequence[Any], level: int) -> str:
        if not items:
            return "[]"
        if level >= self.flow_level:
            return "[" + ", ".join(self.convert(item, self.flow_level) for item in items) + "]"
        return "\n".join(
            self.spacing(level) + "- " + self.convert(item, self.flow_level) for item in items
        )

    def mapping(self, node: Mapping[Any, Any], level: int) -> str:
        entries = []
        for key, value in node.items():
            prefix = self.spacing(level) + self.string(str(key)) + ":"
            nested = isinstance(value, (Mapping, list, tuple)) and len(value) > 0
            if not nested or level + 1 >= self.flow_level or key in self.always_flow:
                entries.append(prefix + " " + self.convert(value, self.flow_level))
            else:
                entries.append(prefix + "\n" + self.convert(value, level + 1))
        if not entries:
            return "{}"
        if level >= self.flow_level:
            return "{ " + ", ".join(entries) + " }"
        separator = "\n" * max(1, 1 + self.options.extra_lines - level)
        return separator.join(entries)


def dump_scene(tree: Any, options: Optional[DumpOptions] = None) -> str:
    """Render *tree* (or a JSON string holding it) as scene text."""

    if isinstance(tree, str):
        tree = json.loads(tree)
    return _SceneWriter(options or DumpOptions()).convert(tree, 0)


__all__ = ["DumpOptions", "dump_scene"]
