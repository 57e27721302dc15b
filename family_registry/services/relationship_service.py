# Relationship resolution over the ser_no pointer graph; rules are ordered, first match wins.
from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
import logging
from typing import Any, Iterable, Mapping

from ..core.errors import NotFound
from ..schemas.legacy import coerce_ser_no, coerce_ser_no_list

logger = logging.getLogger(__name__)


class RelationKind(StrEnum):
    SPOUSE = "spouse"
    PARENT = "parent"
    CHILD = "child"
    SIBLING = "sibling"
    GRANDPARENT = "grandparent"
    GRANDCHILD = "grandchild"
    UNCLE_AUNT = "uncle_aunt"
    NEPHEW_NIECE = "nephew_niece"
    COUSIN = "cousin"


# kind -> (primary, secondary) label
RELATION_LABELS: dict[RelationKind, tuple[str, str]] = {
    RelationKind.SPOUSE: ("Spouse", "पती/पत्नी"),
    RelationKind.PARENT: ("Father/Mother", "वडील/आई"),
    RelationKind.CHILD: ("Son/Daughter", "मुल/मुलगी"),
    RelationKind.SIBLING: ("Sibling", "भाऊ/बहीण"),
    RelationKind.GRANDPARENT: ("Grandfather", "आजोबा"),
    RelationKind.GRANDCHILD: ("Grandson/Granddaughter", "नातू/नात"),
    RelationKind.UNCLE_AUNT: ("Uncle/Aunt", "काका/मावशी"),
    RelationKind.NEPHEW_NIECE: ("Nephew/Niece", "पुतणा/पुतणी"),
    RelationKind.COUSIN: ("Cousin", "चुलत भाऊ/बहीण"),
}


@dataclass(frozen=True)
class Relation:
    kind: RelationKind
    primary: str
    secondary: str

    @classmethod
    def of(cls, kind: RelationKind) -> "Relation":
        primary, secondary = RELATION_LABELS[kind]
        return cls(kind=kind, primary=primary, secondary=secondary)


@dataclass
class FamilyNode:
    ser_no: int
    father_ser_no: int | None = None
    spouse_ser_no: int | None = None
    son_daughter_ser_nos: tuple[int, ...] = ()
    # the object the node was built from (ORM row or dict), handed back to callers
    source: Any = field(default=None, repr=False, compare=False)


@dataclass
class RelatedMember:
    member: Any
    relation: Relation


@dataclass(frozen=True)
class Edge:
    from_ser_no: int
    to_ser_no: int
    relation: Relation


def _get(obj: Any, name: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def node_from_member(member: Any) -> FamilyNode | None:
    """Build a node from an ORM ``Member`` or a canonical dict; ``None`` without a usable ser_no."""
    if isinstance(member, FamilyNode):
        return member
    ser_no = coerce_ser_no(_get(member, "ser_no"))
    if ser_no is None:
        return None
    return FamilyNode(
        ser_no=ser_no,
        father_ser_no=coerce_ser_no(_get(member, "father_ser_no")),
        spouse_ser_no=coerce_ser_no(_get(member, "spouse_ser_no")),
        son_daughter_ser_nos=tuple(coerce_ser_no_list(_get(member, "son_daughter_ser_nos"))),
        source=member,
    )


def index_members(members: Iterable[Any]) -> dict[int, FamilyNode]:
    """ser_no -> node, ordered by ser_no. Members without a ser_no are dropped."""
    index: dict[int, FamilyNode] = {}
    for m in members:
        node = node_from_member(m)
        if node is None:
            logger.debug(f"Skipping member without a usable ser_no: {m!r}")
            continue
        index[node.ser_no] = node
    return dict(sorted(index.items()))


def _as_index(members: Mapping[int, FamilyNode] | Iterable[Any]) -> Mapping[int, FamilyNode]:
    if isinstance(members, Mapping):
        return members
    return index_members(members)


def resolve_relationship(
    subject: Any,
    other: Any,
    members: Mapping[int, FamilyNode] | Iterable[Any],
) -> Relation | None:
    """What ``other`` is to ``subject``, or ``None`` when no rule applies."""
    s = node_from_member(subject)
    o = node_from_member(other)
    if s is None or o is None:
        return None
    index = _as_index(members)

    if s.spouse_ser_no == o.ser_no or o.spouse_ser_no == s.ser_no:
        return Relation.of(RelationKind.SPOUSE)

    if s.father_ser_no == o.ser_no:
        return Relation.of(RelationKind.PARENT)
    if o.father_ser_no == s.ser_no:
        return Relation.of(RelationKind.CHILD)

    if o.ser_no in s.son_daughter_ser_nos:
        return Relation.of(RelationKind.CHILD)
    if s.ser_no in o.son_daughter_ser_nos:
        return Relation.of(RelationKind.PARENT)

    if s.father_ser_no is not None and s.father_ser_no == o.father_ser_no:
        return Relation.of(RelationKind.SIBLING)

    s_father = index.get(s.father_ser_no) if s.father_ser_no is not None else None
    o_father = index.get(o.father_ser_no) if o.father_ser_no is not None else None
    s_grandfather = s_father.father_ser_no if s_father else None
    o_grandfather = o_father.father_ser_no if o_father else None

    if s_grandfather is not None and s_grandfather == o.ser_no:
        return Relation.of(RelationKind.GRANDPARENT)
    if o_grandfather is not None and o_grandfather == s.ser_no:
        return Relation.of(RelationKind.GRANDCHILD)

    # other is a sibling of subject's father, and the reverse
    if s_grandfather is not None and o.father_ser_no == s_grandfather:
        return Relation.of(RelationKind.UNCLE_AUNT)
    if o_grandfather is not None and s.father_ser_no == o_grandfather:
        return Relation.of(RelationKind.NEPHEW_NIECE)

    # both grandfather links must exist, two roots are not cousins
    if s_grandfather is not None and s_grandfather == o_grandfather:
        return Relation.of(RelationKind.COUSIN)

    return None


def relations_of(
    subject_ser_no: int,
    members: Mapping[int, FamilyNode] | Iterable[Any],
) -> list[RelatedMember]:
    index = _as_index(members)
    subject = index.get(coerce_ser_no(subject_ser_no))
    if subject is None:
        raise NotFound(f"Member {subject_ser_no} not found")

    out: list[RelatedMember] = []
    for ser_no, node in index.items():
        if ser_no == subject.ser_no:
            continue
        try:
            relation = resolve_relationship(subject, node, index)
        except (TypeError, ValueError, AttributeError) as e:
            # inference is informational: a malformed pair must not sink the batch
            logger.warning(f"Skipping pair ({subject.ser_no}, {ser_no}): {e}")
            continue
        if relation is not None:
            out.append(RelatedMember(member=node.source if node.source is not None else node, relation=relation))
    return out


def static_relationship_edges(members: Mapping[int, FamilyNode] | Iterable[Any]) -> list[Edge]:
    """Stored spouse and parent -> child pointers only; nothing is inferred."""
    index = _as_index(members)
    spouse = Relation.of(RelationKind.SPOUSE)
    child = Relation.of(RelationKind.CHILD)

    edges: list[Edge] = []
    seen: set[tuple[int, int, RelationKind]] = set()

    def add(from_ser_no: int, to_ser_no: int, relation: Relation) -> None:
        key = (from_ser_no, to_ser_no, relation.kind)
        if from_ser_no == to_ser_no or key in seen:
            return
        seen.add(key)
        edges.append(Edge(from_ser_no=from_ser_no, to_ser_no=to_ser_no, relation=relation))

    for node in index.values():
        if node.spouse_ser_no is not None:
            add(node.ser_no, node.spouse_ser_no, spouse)
        for child_ser_no in node.son_daughter_ser_nos:
            add(node.ser_no, child_ser_no, child)
        if node.father_ser_no is not None:
            add(node.father_ser_no, node.ser_no, child)
    return edges


def build_family_tree(
    members: Mapping[int, FamilyNode] | Iterable[Any],
    root_ser_no: int | None = None,
) -> dict | None:
    # each member is emitted once, so cyclic pointer data terminates
    index = _as_index(members)
    if not index:
        return None

    if root_ser_no is not None:
        root = index.get(coerce_ser_no(root_ser_no))
        if root is None:
            raise NotFound(f"Member {root_ser_no} not found")
    else:
        root = index.get(1) or next((n for n in index.values() if n.father_ser_no is None), None)
    if root is None:
        return None

    children_of: dict[int, list[FamilyNode]] = {}
    for node in index.values():
        if node.father_ser_no is not None:
            children_of.setdefault(node.father_ser_no, []).append(node)

    visited: set[int] = set()

    def build(node: FamilyNode) -> dict:
        visited.add(node.ser_no)
        src = node.source
        name = (_get(src, "full_name") or "") if src is not None else ""
        return {
            "ser_no": node.ser_no,
            "name": name or f"Member #{node.ser_no}",
            "gender": _get(src, "gender") if src is not None else None,
            "vansh": _get(src, "vansh") if src is not None else None,
            "spouse_ser_no": node.spouse_ser_no,
            "children": [build(c) for c in children_of.get(node.ser_no, []) if c.ser_no not in visited],
        }

    return build(root)
