"""C4 transform.

Macro calls are bound to their parameter lists here: positional arguments
fill parameters in order, ``$name=value`` arguments fill them by name.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from mermaid_peg.grammars.c4 import C4Tree, MacroArgTree, MacroTree
from mermaid_peg.models.c4 import (
    C4Boundary,
    C4Diagram,
    C4Element,
    C4ElementType,
    C4Level,
    C4Relationship,
    RelDirection,
)
from mermaid_peg.syntax.common import clean, strip_quotes
from mermaid_peg.transforms.base import pattern
from mermaid_peg.transforms.shared import Setting, SharedRules, apply_setting
from mermaid_peg.types import DiagramKind

_PERSON_PARAMS = ("alias", "label", "descr", "sprite", "tags", "link")
_TECHNOLOGY_PARAMS = ("alias", "label", "techn", "descr", "sprite", "tags", "link")
_BOUNDARY_PARAMS = ("alias", "label", "type", "tags", "link")
_NODE_PARAMS = ("alias", "label", "type", "descr", "sprite", "tags", "link")
_REL_PARAMS = ("from", "to", "label", "techn", "descr", "sprite", "tags", "link")

ELEMENT_MACROS: dict[str, tuple[C4ElementType, bool]] = {
    **{t.name: (t, False) for t in C4ElementType},
    **{f"{t.name}_Ext": (t, True) for t in C4ElementType},
}

BOUNDARY_MACROS: dict[str, str] = {
    "Boundary": "boundary",
    "Enterprise_Boundary": "enterprise",
    "System_Boundary": "system",
    "Container_Boundary": "container",
    "Deployment_Node": "node",
    "Node": "node",
    "Node_L": "node",
    "Node_R": "node",
}

REL_MACROS: dict[str, RelDirection] = {
    "Rel": RelDirection.Default,
    "BiRel": RelDirection.Default,
    "RelIndex": RelDirection.Default,
    "Rel_U": RelDirection.Up,
    "Rel_Up": RelDirection.Up,
    "Rel_D": RelDirection.Down,
    "Rel_Down": RelDirection.Down,
    "Rel_L": RelDirection.Left,
    "Rel_Left": RelDirection.Left,
    "Rel_R": RelDirection.Right,
    "Rel_Right": RelDirection.Right,
    "Rel_Back": RelDirection.Back,
}

STYLE_MACROS = ("UpdateLayoutConfig", "UpdateElementStyle", "UpdateBoundaryStyle", "UpdateRelStyle")


@dataclass
class Macro:
    name: str
    positional: list[str] = field(default_factory=list)
    named: dict[str, str] = field(default_factory=dict)
    body: list[Any] | None = None


class C4Transform(SharedRules):
    kind = DiagramKind.C4

    @pattern(MacroArgTree)
    def macro_arg(self, node: MacroArgTree) -> tuple[str | None, str | None]:
        value = node["arg_value"]
        return node["arg_name"], strip_quotes(value) if value is not None else None

    @pattern(MacroTree)
    def macro(self, node: MacroTree) -> Macro:
        macro = Macro(node["macro"], body=node["body"])
        for name, value in node["args"] or []:
            if name is None:
                if macro.named:
                    raise self.fail(f"{macro.name}: positional argument after a named one")
                macro.positional.append(value or "")
            else:
                macro.named[name] = value or ""
        return macro

    @pattern(C4Tree)
    def diagram(self, node: C4Tree) -> C4Diagram:
        diagram = C4Diagram(level=C4Level(node["c4_kind"]))
        styles: list[Macro] = []
        self._walk(diagram, node["statements"], None, styles)

        ids = diagram.all_ids()
        for rel in diagram.relationships:
            self.require(rel.from_id, ids, "element")
            self.require(rel.to_id, ids, "element")
        for macro in styles:
            self._style(diagram, macro, ids)
        return diagram

    # ─── Statement folding ───────────────────────────────────────────────

    def _walk(self, diagram: C4Diagram, statements: list[Any], boundary: str | None, styles: list[Macro]) -> None:
        for stmt in statements:
            if isinstance(stmt, Setting):
                apply_setting(diagram, stmt)
                continue
            if not isinstance(stmt, Macro):
                continue
            if stmt.body is not None and stmt.name not in BOUNDARY_MACROS:
                raise self.fail(f"{stmt.name} cannot have a body")
            if stmt.name in ELEMENT_MACROS:
                self._declare(diagram, self._element(stmt, boundary))
            elif stmt.name in BOUNDARY_MACROS:
                new = self._boundary(stmt, boundary)
                self._declare(diagram, new)
                self._walk(diagram, stmt.body or [], new.alias, styles)
            elif stmt.name in REL_MACROS:
                diagram.relationships.append(self._relationship(stmt))
            elif stmt.name in STYLE_MACROS:
                styles.append(stmt)
            else:
                raise self.fail(f"unknown C4 macro '{stmt.name}'")

    def _declare(self, diagram: C4Diagram, item: C4Element | C4Boundary) -> None:
        if item.alias in diagram.all_ids():
            raise self.fail(f"'{item.alias}' is declared twice")
        if isinstance(item, C4Element):
            diagram.elements.append(item)
        else:
            diagram.boundaries.append(item)

    def _bind(self, macro: Macro, params: tuple[str, ...], required: int = 1) -> dict[str, str]:
        if len(macro.positional) > len(params):
            raise self.fail(f"{macro.name} takes at most {len(params)} arguments, got {len(macro.positional)}")
        bound = dict(zip(params, macro.positional))
        bound.update(macro.named)
        missing = [name for name in params[:required] if not bound.get(name)]
        if missing:
            raise self.fail(f"{macro.name} needs '{missing[0]}'")
        return bound

    def _element(self, macro: Macro, boundary: str | None) -> C4Element:
        element_type, external = ELEMENT_MACROS[macro.name]
        technical = element_type.name.startswith(("Container", "Component"))
        args = self._bind(macro, _TECHNOLOGY_PARAMS if technical else _PERSON_PARAMS)
        return C4Element(
            alias=args["alias"],
            label=args.get("label") or args["alias"],
            type=element_type,
            external=external,
            description=args.get("descr") or None,
            technology=args.get("techn") or None,
            sprite=args.get("sprite") or None,
            tags=args.get("tags") or None,
            link=args.get("link") or None,
            boundary=boundary,
        )

    def _boundary(self, macro: Macro, parent: str | None) -> C4Boundary:
        kind = BOUNDARY_MACROS[macro.name]
        args = self._bind(macro, _NODE_PARAMS if kind == "node" else _BOUNDARY_PARAMS)
        return C4Boundary(
            alias=args["alias"],
            label=args.get("label") or args["alias"],
            type=clean(args.get("type")) or kind,
            description=args.get("descr") or None,
            tags=args.get("tags") or None,
            link=args.get("link") or None,
            parent=parent,
        )

    def _relationship(self, macro: Macro) -> C4Relationship:
        params = ("index", *_REL_PARAMS) if macro.name == "RelIndex" else _REL_PARAMS
        args = self._bind(macro, params, required=len(params) - len(_REL_PARAMS) + 2)
        return C4Relationship(
            from_id=args["from"],
            to_id=args["to"],
            label=args.get("label") or None,
            technology=args.get("techn") or None,
            description=args.get("descr") or None,
            direction=REL_MACROS[macro.name],
            bidirectional=macro.name == "BiRel",
            index=args.get("index"),
        )

    def _style(self, diagram: C4Diagram, macro: Macro, ids: list[str]) -> None:
        if macro.name == "UpdateLayoutConfig":
            if macro.positional:
                raise self.fail("UpdateLayoutConfig only takes named arguments")
            diagram.layout.update(macro.named)
        elif macro.name == "UpdateRelStyle":
            args = self._bind(macro, ("from", "to"), required=2)
            self.require(args["from"], ids, "element")
            self.require(args["to"], ids, "element")
            diagram.rel_styles[(args["from"], args["to"])] = dict(macro.named)
        else:
            args = self._bind(macro, ("elementName",))
            self.require(args["elementName"], ids, "element")
            diagram.element_styles[args["elementName"]] = dict(macro.named)
