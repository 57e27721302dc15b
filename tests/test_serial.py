from sqlalchemy import delete, select

from family_registry.models.counter import SerialCounter, MEMBER_SER_NO
from family_registry.models.member import Member
from family_registry.services.serial_service import allocate_ser_no, ensure_counter, next_ser_no


def test_empty_registry_starts_at_one(db):
    assert next_ser_no(db) == 1
    assert allocate_ser_no(db) == 1
    db.commit()
    assert next_ser_no(db) == 2


def test_next_follows_highest_existing(db, add_members):
    add_members({"ser_no": 1}, {"ser_no": 3}, {"ser_no": 7})
    assert next_ser_no(db) == 8
    assert allocate_ser_no(db) == 8
    db.commit()
    assert next_ser_no(db) == 9


def test_preview_does_not_consume(db):
    assert next_ser_no(db) == 1
    assert next_ser_no(db) == 1


def test_deleted_serial_numbers_are_not_reused(db, add_members):
    add_members({"ser_no": 1})
    issued = allocate_ser_no(db)
    db.add(Member(ser_no=issued))
    db.commit()
    assert issued == 2

    db.execute(delete(Member).where(Member.ser_no == issued))
    db.commit()
    assert next_ser_no(db) == 3
    assert allocate_ser_no(db) == 3


def test_rolled_back_allocation_is_released(db):
    allocate_ser_no(db)
    db.rollback()
    assert next_ser_no(db) == 1


def test_missing_counter_row_is_recreated(db, add_members):
    db.execute(delete(SerialCounter))
    db.commit()
    add_members({"ser_no": 4})
    assert allocate_ser_no(db) == 5
    db.commit()
    assert db.execute(
        select(SerialCounter.last_value).where(SerialCounter.name == MEMBER_SER_NO)
    ).scalar_one() == 5


def test_ensure_counter_seeds_from_members(db, add_members):
    db.execute(delete(SerialCounter))
    db.commit()
    add_members({"ser_no": 10})
    assert ensure_counter(db).last_value == 10
