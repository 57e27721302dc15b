"""Load a JSON export of legacy member documents into the registry.

Usage: python scripts/import_members.py members.json
"""
import json
import sys
from family_registry.core.config import settings
from family_registry.db.base import Base
from family_registry.db.session import make_engine, make_session_factory
from family_registry.services.member_service import import_members
from family_registry.services.serial_service import ensure_counter

def main(path: str) -> None:
    with open(path, encoding="utf-8") as fh:
        records = json.load(fh)
    if isinstance(records, dict):
        # exports keyed by document id
        records = list(records.values())
    engine = make_engine(settings)
    Base.metadata.create_all(bind=engine)
    with make_session_factory(engine)() as db:
        imported, skipped = import_members(db, records)
        ensure_counter(db)
    print(f"Imported {imported} members, skipped {skipped}.")

if __name__ == "__main__":
    if len(sys.argv) != 2:
        sys.exit(__doc__)
    main(sys.argv[1])
