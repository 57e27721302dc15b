from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ...core.errors import NotFound
from ...schemas.member import MemberOut, RelationOut, EdgeOut, TreeNodeOut
from ...services.member_service import (
    list_members,
    get_by_ser_no,
    get_relations,
    get_static_edges,
    get_family_tree,
)
from ..deps import get_db
router = APIRouter()

@router.get("/members", response_model=list[MemberOut])
def members(vansh: str | None = None, search: str | None = None, db: Session = Depends(get_db)):
    return list_members(db, vansh=vansh, search=search)

@router.get("/members/{ser_no}", response_model=MemberOut)
def member(ser_no: int, db: Session = Depends(get_db)):
    m = get_by_ser_no(db, ser_no)
    if not m:
        raise HTTPException(404, "Member not found")
    return m

@router.get("/members/{ser_no}/relations", response_model=list[RelationOut])
def relations(ser_no: int, db: Session = Depends(get_db)):
    try:
        related = get_relations(db, ser_no)
    except NotFound:
        raise HTTPException(404, "Member not found")
    return [
        RelationOut(
            related_member=MemberOut.model_validate(r.member),
            relation=r.relation.kind.value,
            relation_primary=r.relation.primary,
            relation_secondary=r.relation.secondary,
        )
        for r in related
    ]

@router.get("/relationships", response_model=list[EdgeOut])
def relationships(db: Session = Depends(get_db)):
    return [
        EdgeOut(
            from_ser_no=e.from_ser_no,
            to_ser_no=e.to_ser_no,
            relation=e.relation.kind.value,
            relation_primary=e.relation.primary,
            relation_secondary=e.relation.secondary,
        )
        for e in get_static_edges(db)
    ]

@router.get("/tree", response_model=TreeNodeOut | None)
def tree(root: int | None = None, db: Session = Depends(get_db)):
    try:
        return get_family_tree(db, root)
    except NotFound:
        raise HTTPException(404, "Member not found")
