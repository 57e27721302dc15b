import getpass
import sys
from family_registry.core.config import settings
from family_registry.core.errors import ValidationError
from family_registry.db.base import Base
from family_registry.db.session import make_engine, make_session_factory
from family_registry.models.credential import CredentialRole
from family_registry.services.credential_service import create_credential
def main(username: str) -> None:
    password = getpass.getpass(f"Password for {username}: ")
    engine = make_engine(settings)
    Base.metadata.create_all(bind=engine)
    with make_session_factory(engine)() as db:
        try:
            cred = create_credential(db, settings=settings, username=username, password=password, role=CredentialRole.ADMIN)
        except ValidationError as e:
            sys.exit(e.message)
    print(f"Admin login {cred.username} created.")
if __name__ == "__main__":
    if len(sys.argv) != 2:
        sys.exit("Usage: python scripts/create_admin.py <username>")
    main(sys.argv[1])
