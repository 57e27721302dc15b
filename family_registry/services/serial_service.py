import logging
from sqlalchemy import select, update, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.errors import ConflictError
from ..models.counter import SerialCounter, MEMBER_SER_NO
from ..models.member import Member

logger = logging.getLogger(__name__)


def _max_member_ser_no(db: Session) -> int:
    return db.execute(select(func.max(Member.ser_no))).scalar() or 0


def next_ser_no(db: Session) -> int:
    high_water = db.execute(
        select(SerialCounter.last_value).where(SerialCounter.name == MEMBER_SER_NO)
    ).scalar() or 0
    return max(_max_member_ser_no(db), high_water) + 1


def allocate_ser_no(db: Session) -> int:
    # must run in the inserting transaction; the counter UPDATE holds the write lock until commit
    bumped = db.execute(
        update(SerialCounter)
        .where(SerialCounter.name == MEMBER_SER_NO)
        .values(last_value=SerialCounter.last_value + 1)
        .execution_options(synchronize_session=False)
    )
    if bumped.rowcount == 0:
        # first allocation ever; a concurrent first insert loses on the primary key
        # and the caller rolls back and retries
        db.add(SerialCounter(name=MEMBER_SER_NO, last_value=1))
        try:
            db.flush()
        except IntegrityError as e:
            raise ConflictError("Serial counter was initialised concurrently") from e

    issued = db.execute(
        select(SerialCounter.last_value).where(SerialCounter.name == MEMBER_SER_NO)
    ).scalar_one()
    # members imported directly (not through approval) may sit above the counter
    candidate = max(issued, _max_member_ser_no(db) + 1)
    if candidate != issued:
        db.execute(
            update(SerialCounter)
            .where(SerialCounter.name == MEMBER_SER_NO)
            .values(last_value=candidate)
            .execution_options(synchronize_session=False)
        )
    logger.debug(f"Allocated ser_no {candidate}")
    return candidate


def ensure_counter(db: Session) -> SerialCounter:
    counter = db.get(SerialCounter, MEMBER_SER_NO)
    if counter is None:
        counter = SerialCounter(name=MEMBER_SER_NO, last_value=_max_member_ser_no(db))
        db.add(counter)
        db.commit()
    return counter


def retire_ser_no(db: Session, ser_no: int) -> None:
    # deleted numbers are never handed out again
    raised = db.execute(
        update(SerialCounter)
        .where(SerialCounter.name == MEMBER_SER_NO, SerialCounter.last_value < ser_no)
        .values(last_value=ser_no)
        .execution_options(synchronize_session=False)
    )
    if raised.rowcount == 0 and db.get(SerialCounter, MEMBER_SER_NO) is None:
        db.add(SerialCounter(name=MEMBER_SER_NO, last_value=ser_no))
