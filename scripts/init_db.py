from family_registry.core.config import settings
from family_registry.db.base import Base
from family_registry.db.session import make_engine, make_session_factory
from family_registry.services.serial_service import ensure_counter
def init():
    engine = make_engine(settings)
    Base.metadata.create_all(bind=engine)
    with make_session_factory(engine)() as db:
        ensure_counter(db)
if __name__ == "__main__":
    init()
    print("Database schema created.")
