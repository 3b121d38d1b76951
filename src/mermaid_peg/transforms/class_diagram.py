"""Class diagram transform."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from mermaid_peg.grammars.class_diagram import (
    AnnotationTree,
    AttributeTree,
    CallbackTree,
    ClassDeclTree,
    ClassDiagramTree,
    ClickTree,
    CssClassTree,
    DirectionTree,
    LinkTree,
    MemberLineTree,
    MethodTree,
    NamespaceTree,
    NoteTree,
    RelationTree,
    StandaloneClassTree,
)
from mermaid_peg.models.class_diagram import (
    LEFT_POINTING,
    RELATIONSHIP_BY_TOKEN,
    ClassAttribute,
    ClassDiagram,
    ClassEntity,
    ClassMethod,
    ClassNote,
    ClassRelationship,
    Visibility,
)
from mermaid_peg.syntax.common import clean, strip_quotes, unescape
from mermaid_peg.transforms.base import pattern
from mermaid_peg.transforms.shared import ClassDef, Setting, SharedRules, StyleDef, apply_setting, split_list
from mermaid_peg.types import DiagramKind, Direction


@dataclass
class Annotation:
    """A ``<<name>>`` line inside a class body."""

    name: str


@dataclass
class ClassDecl:
    entity: ClassEntity
    members: list[Any] = field(default_factory=list)


@dataclass
class AnnotationStatement:
    class_id: str
    name: str


@dataclass
class MemberLine:
    class_id: str
    member: Any


@dataclass
class ClassRef:
    class_id: str


@dataclass
class Namespace:
    name: str
    body: list[Any]


@dataclass
class Interaction:
    """A ``link``, ``callback`` or ``click`` directive."""

    class_id: str
    link: str | None = None
    callback: str | None = None
    tooltip: str | None = None


@dataclass
class CssAssign:
    targets: list[str]
    name: str


def _visibility(symbol: str | None) -> Visibility | None:
    return Visibility(symbol) if symbol else None


def parse_attribute(text: str, visibility: Visibility | None) -> ClassAttribute | Annotation:
    """Split ``Type name``, ``name: Type`` or ``name`` into an attribute."""
    text = text.strip()
    if text.startswith("<<") and text.endswith(">>"):
        return Annotation(text[2:-2].strip())
    static = text.endswith("$")
    if static:
        text = text[:-1].rstrip()
    if ":" in text:
        name, _, type_ = text.partition(":")
        return ClassAttribute(name.strip(), type_.strip() or None, visibility, static)
    parts = text.rsplit(None, 1)
    if len(parts) == 2:
        return ClassAttribute(parts[1], parts[0].replace("~", "<", 1).replace("~", ">", 1), visibility, static)
    return ClassAttribute(text, None, visibility, static)


class ClassDiagramTransform(SharedRules):
    kind = DiagramKind.ClassDiagram

    @pattern(MethodTree)
    def method(self, node: MethodTree) -> ClassMethod:
        classifier = node["classifier"]
        return ClassMethod(
            name=node["method"],
            parameters=clean(node["params"]),
            return_type=clean(node["returns"]) or None,
            visibility=_visibility(node["visibility"]),
            abstract=classifier == "*",
            static=classifier == "$",
        )

    @pattern(AttributeTree)
    def attribute(self, node: AttributeTree) -> ClassAttribute | Annotation:
        return parse_attribute(node["attribute"], _visibility(node["visibility"]))

    @pattern(ClassDeclTree)
    def class_decl(self, node: ClassDeclTree) -> ClassDecl:
        class_id = node["class_id"]
        entity = ClassEntity(id=class_id, label=strip_quotes(node["label"]) or class_id)
        if node["generic"]:
            entity.generic = clean(node["generic"])
        if node["annotation"]:
            entity.annotations.append(clean(node["annotation"]))
        if node["css_class"]:
            entity.css_classes.append(node["css_class"])
        return ClassDecl(entity, node["members"] or [])

    @pattern(AnnotationTree)
    def annotation(self, node: AnnotationTree) -> AnnotationStatement:
        return AnnotationStatement(node["class_ref"], clean(node["annotation"]))

    @pattern(MemberLineTree)
    def member_line(self, node: MemberLineTree) -> MemberLine:
        return MemberLine(node["owner"], node["member"])

    @pattern(RelationTree)
    def relation(self, node: RelationTree) -> ClassRelationship:
        operator = node["operator"]
        source, target = node["source"], node["target"]
        source_card = strip_quotes(node["source_card"]) or None
        target_card = strip_quotes(node["target_card"]) or None
        if operator in LEFT_POINTING:
            source, target = target, source
            source_card, target_card = target_card, source_card
        return ClassRelationship(
            from_id=source,
            to_id=target,
            relationship_type=RELATIONSHIP_BY_TOKEN[operator],
            label=clean(node["label"]) or None,
            source_cardinality=source_card,
            target_cardinality=target_card,
        )

    @pattern(NamespaceTree)
    def namespace(self, node: NamespaceTree) -> Namespace:
        return Namespace(node["namespace"], node["body"])

    @pattern(LinkTree)
    def link(self, node: LinkTree) -> Interaction:
        return Interaction(node["link"], link=unescape(node["url"]), tooltip=unescape(node["tooltip"]) or None)

    @pattern(CallbackTree)
    def callback(self, node: CallbackTree) -> Interaction:
        return Interaction(
            node["callback"], callback=unescape(node["function"]), tooltip=unescape(node["tooltip"]) or None
        )

    @pattern(ClickTree)
    def click(self, node: ClickTree) -> Interaction:
        action = clean(node["action"])
        keyword, _, rest = action.partition(" ")
        args = rest.strip()
        tooltip = None
        if args.count('"') >= 4:
            first_end = args.index('"', 1)
            tooltip = strip_quotes(args[first_end + 1 :])
            args = args[: first_end + 1]
        if keyword.lower() == "href":
            return Interaction(node["click"], link=strip_quotes(args), tooltip=tooltip)
        if keyword.lower() == "call":
            return Interaction(node["click"], callback=args, tooltip=tooltip)
        raise self.fail(f"click on '{node['click']}' expects 'href' or 'call', got '{keyword}'")

    @pattern(NoteTree)
    def note(self, node: NoteTree) -> ClassNote:
        return ClassNote(unescape(node["note"]), node["note_for"])

    @pattern(CssClassTree)
    def css_class(self, node: CssClassTree) -> CssAssign:
        return CssAssign(split_list(node["css_targets"]), node["css_name"])

    @pattern(DirectionTree)
    def direction(self, node: DirectionTree) -> Direction:
        return Direction.from_token(node["direction"])

    @pattern(StandaloneClassTree)
    def standalone(self, node: StandaloneClassTree) -> ClassRef:
        return ClassRef(node["class_ref"])

    @pattern(ClassDiagramTree)
    def diagram(self, node: ClassDiagramTree) -> ClassDiagram:
        diagram = ClassDiagram()
        self._collect(diagram, node["statements"], None)
        return diagram

    # ─── Statement folding ───────────────────────────────────────────────

    def _ensure(self, diagram: ClassDiagram, class_id: str, namespace: str | None) -> ClassEntity:
        entity = diagram.find_entity(class_id)
        if entity is None:
            entity = ClassEntity(id=class_id, label=class_id, namespace=namespace)
            diagram.entities.append(entity)
            if namespace is not None:
                diagram.namespaces.setdefault(namespace, []).append(class_id)
        return entity

    def _add_member(self, entity: ClassEntity, member: Any) -> None:
        if isinstance(member, ClassMethod):
            entity.methods.append(member)
        elif isinstance(member, ClassAttribute):
            entity.attributes.append(member)
        elif isinstance(member, Annotation) and member.name not in entity.annotations:
            entity.annotations.append(member.name)

    def _collect(self, diagram: ClassDiagram, statements: list[Any], namespace: str | None) -> None:
        for stmt in statements:
            if isinstance(stmt, ClassDecl):
                entity = self._ensure(diagram, stmt.entity.id, namespace)
                if stmt.entity.label != stmt.entity.id:
                    entity.label = stmt.entity.label
                entity.generic = stmt.entity.generic or entity.generic
                for name in stmt.entity.annotations:
                    if name not in entity.annotations:
                        entity.annotations.append(name)
                entity.css_classes.extend(c for c in stmt.entity.css_classes if c not in entity.css_classes)
                for member in stmt.members:
                    self._add_member(entity, member)
            elif isinstance(stmt, AnnotationStatement):
                entity = self._ensure(diagram, stmt.class_id, namespace)
                if stmt.name not in entity.annotations:
                    entity.annotations.append(stmt.name)
            elif isinstance(stmt, MemberLine):
                self._add_member(self._ensure(diagram, stmt.class_id, namespace), stmt.member)
            elif isinstance(stmt, ClassRelationship):
                self._ensure(diagram, stmt.from_id, namespace)
                self._ensure(diagram, stmt.to_id, namespace)
                diagram.relationships.append(stmt)
            elif isinstance(stmt, ClassRef):
                self._ensure(diagram, stmt.class_id, namespace)
            elif isinstance(stmt, Namespace):
                if namespace is not None:
                    raise self.fail(f"namespace '{stmt.name}' cannot be nested in '{namespace}'")
                diagram.namespaces.setdefault(stmt.name, [])
                self._collect(diagram, stmt.body, stmt.name)
            elif isinstance(stmt, Interaction):
                self.require(stmt.class_id, [e.id for e in diagram.entities], "class")
                entity = diagram.find_entity(stmt.class_id)
                if entity is not None:
                    entity.link = stmt.link or entity.link
                    entity.callback = stmt.callback or entity.callback
                    entity.tooltip = stmt.tooltip or entity.tooltip
            elif isinstance(stmt, ClassNote):
                if stmt.class_id is not None:
                    self.require(stmt.class_id, [e.id for e in diagram.entities], "class")
                diagram.notes.append(stmt)
            elif isinstance(stmt, CssAssign):
                for target in stmt.targets:
                    entity = self._ensure(diagram, target, namespace)
                    if stmt.name not in entity.css_classes:
                        entity.css_classes.append(stmt.name)
            elif isinstance(stmt, StyleDef):
                self._ensure(diagram, stmt.target, namespace).style = stmt.props
            elif isinstance(stmt, ClassDef):
                for name in stmt.names:
                    diagram.class_defs[name] = stmt.props
            elif isinstance(stmt, Direction):
                diagram.direction = stmt
            elif isinstance(stmt, Setting):
                apply_setting(diagram, stmt)
