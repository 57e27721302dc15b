from typing import Any, Iterable, Mapping
from sqlalchemy.orm import Session
from sqlalchemy import select, or_, update, delete
from pydantic import ValidationError as SchemaError
import logging
from ..core.errors import NotFound, ValidationError
from ..models.credential import LoginCredential
from ..models.member import Member
from ..schemas.legacy import LegacyMemberIn, coerce_ser_no
from .serial_service import retire_ser_no
from .relationship_service import (
    FamilyNode,
    index_members,
    relations_of,
    static_relationship_edges,
    build_family_tree,
    RelatedMember,
    Edge,
)

logger = logging.getLogger(__name__)

def get_by_ser_no(db: Session, ser_no: int) -> Member | None:
    return db.execute(select(Member).where(Member.ser_no == ser_no)).scalar_one_or_none()

def list_members(db: Session, *, vansh: str | None = None, search: str | None = None) -> list[Member]:
    q = select(Member).order_by(Member.ser_no)
    if vansh:
        q = q.where(Member.vansh == str(vansh))
    if search:
        pattern = f"%{search.strip()}%"
        q = q.where(or_(
            Member.first_name.ilike(pattern),
            Member.middle_name.ilike(pattern),
            Member.last_name.ilike(pattern),
            Member.email.ilike(pattern),
        ))
    return list(db.execute(q).scalars())

def load_family_nodes(db: Session) -> dict[int, FamilyNode]:
    # one snapshot per request; the resolver never goes back to the database
    return index_members(list_members(db))

def get_relations(db: Session, ser_no: int) -> list[RelatedMember]:
    nodes = load_family_nodes(db)
    related = relations_of(ser_no, nodes)
    logger.info(f"Calculated {len(related)} relations for ser_no {ser_no}")
    return related

def get_static_edges(db: Session) -> list[Edge]:
    edges = static_relationship_edges(load_family_nodes(db))
    logger.info(f"Generated {len(edges)} static relationships")
    return edges

def get_family_tree(db: Session, root_ser_no: int | None = None) -> dict | None:
    return build_family_tree(load_family_nodes(db), root_ser_no)


def link_child(db: Session, parent_ser_no: int | None, child_ser_no: int) -> None:
    if parent_ser_no is None:
        return
    parent = get_by_ser_no(db, parent_ser_no)
    if parent and child_ser_no not in (parent.son_daughter_ser_nos or []):
        # reassign, JSON columns do not track in-place mutation
        parent.son_daughter_ser_nos = [*(parent.son_daughter_ser_nos or []), child_ser_no]

def unlink_child(db: Session, parent_ser_no: int | None, child_ser_no: int) -> None:
    if parent_ser_no is None:
        return
    parent = get_by_ser_no(db, parent_ser_no)
    if parent and child_ser_no in (parent.son_daughter_ser_nos or []):
        parent.son_daughter_ser_nos = [c for c in parent.son_daughter_ser_nos if c != child_ser_no]

EDITABLE_FIELDS = {
    "first_name", "middle_name", "last_name", "gender", "date_of_birth", "date_of_death",
    "is_alive", "email", "phone", "address", "occupation", "vansh", "notes",
    "father_ser_no", "mother_ser_no", "spouse_ser_no",
}
POINTER_FIELDS = ("father_ser_no", "mother_ser_no", "spouse_ser_no")

def update_member(db: Session, ser_no: int, changes: Mapping[str, Any]) -> Member:
    member = get_by_ser_no(db, ser_no)
    if not member:
        raise NotFound(f"Member {ser_no} not found")
    unknown = set(changes) - EDITABLE_FIELDS
    if unknown:
        raise ValidationError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")

    changes = dict(changes)
    if changes.get("is_alive", True) is None:
        changes.pop("is_alive")
    if changes.get("email"):
        changes["email"] = changes["email"].strip().lower()
    for name in POINTER_FIELDS:
        if name not in changes:
            continue
        target = changes[name] = coerce_ser_no(changes[name])
        if target == ser_no:
            raise ValidationError(f"{name} cannot point at the member itself")
        if target is not None and get_by_ser_no(db, target) is None:
            raise ValidationError(f"{name} {target} does not exist")

    old_father = member.father_ser_no
    new_father = changes.get("father_ser_no", old_father)
    try:
        if new_father != old_father:
            unlink_child(db, old_father, ser_no)
            link_child(db, new_father, ser_no)
        for name, value in changes.items():
            setattr(member, name, value)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(member)
    logger.info(f"Member {ser_no} updated: {', '.join(sorted(changes)) or 'no changes'}")
    return member

def delete_member(db: Session, ser_no: int) -> None:
    member = get_by_ser_no(db, ser_no)
    if not member:
        raise NotFound(f"Member {ser_no} not found")
    try:
        for parent in db.execute(select(Member).where(Member.ser_no != ser_no)).scalars():
            if ser_no in (parent.son_daughter_ser_nos or []):
                parent.son_daughter_ser_nos = [c for c in parent.son_daughter_ser_nos if c != ser_no]
        for name in POINTER_FIELDS:
            column = getattr(Member, name)
            db.execute(update(Member).where(column == ser_no).values({name: None}))
        # SQLite does not enforce the foreign key cascade
        db.execute(delete(LoginCredential).where(LoginCredential.subject_id == ser_no))
        retire_ser_no(db, ser_no)
        db.delete(member)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info(f"Member {ser_no} deleted")

def import_members(db: Session, records: Iterable[Mapping[str, Any]]) -> tuple[int, int]:
    """Insert legacy member documents; returns (imported, skipped)."""
    imported = skipped = 0
    seen: set[int] = set()
    for raw in records:
        try:
            fields = LegacyMemberIn.model_validate(raw).member_fields()
        except SchemaError as e:
            logger.warning(f"Skipping invalid legacy record: {e.error_count()} field error(s)")
            skipped += 1
            continue
        ser_no = fields.get("ser_no")
        if ser_no is None or ser_no in seen or get_by_ser_no(db, ser_no):
            logger.warning(f"Skipping legacy record with ser_no={ser_no!r}")
            skipped += 1
            continue
        seen.add(ser_no)
        db.add(Member(**fields))
        imported += 1
    db.commit()
    logger.info(f"Imported {imported} members, skipped {skipped}")
    return imported, skipped
