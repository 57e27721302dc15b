from family_registry.services.member_service import get_by_ser_no, import_members, list_members
from family_registry.services.serial_service import next_ser_no


def test_import_legacy_documents(db):
    records = [
        {"serNo": 1, "First Name": "Dattatray", "Last Name": "Pawar", "vansh": 1, "sonDaughterSerNo": [2]},
        {"serNo": "2", "personalDetails": {"firstName": "Shankar", "lastName": "Pawar"}, "fatherSerNo": 1},
        {"serNo": 2, "firstName": "Duplicate"},
        {"serNo": 0, "firstName": "No serial"},
        {"firstName": "Also no serial"},
        "not a member document",
    ]

    imported, skipped = import_members(db, records)

    assert (imported, skipped) == (2, 4)
    shankar = get_by_ser_no(db, 2)
    assert shankar.full_name == "Shankar Pawar"
    assert shankar.father_ser_no == 1
    assert get_by_ser_no(db, 1).son_daughter_ser_nos == [2]
    assert get_by_ser_no(db, 1).vansh == "1"
    assert next_ser_no(db) == 3


def test_import_skips_existing_members(db, add_members):
    add_members({"ser_no": 5, "first_name": "Existing"})
    imported, skipped = import_members(db, [{"serNo": 5, "firstName": "Replacement"}])
    assert (imported, skipped) == (0, 1)
    assert get_by_ser_no(db, 5).first_name == "Existing"


def test_list_members_search(db, add_members):
    add_members(
        {"ser_no": 1, "first_name": "Anand", "last_name": "Gokhale"},
        {"ser_no": 2, "first_name": "Bhavana", "email": "bhavana@example.com"},
    )
    assert [m.ser_no for m in list_members(db, search="gokh")] == [1]
    assert [m.ser_no for m in list_members(db, search="EXAMPLE")] == [2]
