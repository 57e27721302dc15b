from __future__ import annotations
from datetime import date, datetime
from pydantic import BaseModel
from .common import ORMModel
class MemberOut(ORMModel):
    ser_no: int
    first_name: str | None = None
    middle_name: str | None = None
    last_name: str | None = None
    full_name: str = ""
    gender: str | None = None
    date_of_birth: date | None = None
    date_of_death: date | None = None
    is_alive: bool = True
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    occupation: str | None = None
    vansh: str | None = None
    father_ser_no: int | None = None
    mother_ser_no: int | None = None
    spouse_ser_no: int | None = None
    son_daughter_ser_nos: list[int] = []
    approved_by: str | None = None
    approved_at: datetime | None = None
class MemberUpdate(BaseModel):
    first_name: str | None = None
    middle_name: str | None = None
    last_name: str | None = None
    gender: str | None = None
    date_of_birth: date | None = None
    date_of_death: date | None = None
    is_alive: bool | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    occupation: str | None = None
    vansh: str | None = None
    notes: str | None = None
    father_ser_no: int | None = None
    mother_ser_no: int | None = None
    spouse_ser_no: int | None = None
class RelationOut(BaseModel):
    related_member: MemberOut
    relation: str               # relationship kind, e.g. "sibling"
    relation_primary: str       # "Sibling"
    relation_secondary: str     # "भाऊ/बहीण"
class EdgeOut(BaseModel):
    from_ser_no: int
    to_ser_no: int
    relation: str
    relation_primary: str
    relation_secondary: str
class TreeNodeOut(BaseModel):
    ser_no: int
    name: str
    gender: str | None = None
    vansh: str | None = None
    spouse_ser_no: int | None = None
    children: list[TreeNodeOut] = []
