from fastapi import FastAPI
import logging

from .api.routes import router
from .core.config import Settings, settings as default_settings
from .core.errors import ValidationError
from .db.base import Base
from .db.session import make_engine, make_session_factory
from .models.credential import CredentialRole
from .services.credential_service import create_credential, get_by_username
from .services.serial_service import ensure_counter

logger = logging.getLogger(__name__)


def _bootstrap_admin(db, settings: Settings) -> None:
    if not settings.ADMIN_USERNAME or not settings.ADMIN_PASSWORD:
        return
    if get_by_username(db, settings.ADMIN_USERNAME):
        return
    try:
        create_credential(db, settings=settings, username=settings.ADMIN_USERNAME,
                          password=settings.ADMIN_PASSWORD,
                          role=CredentialRole.ADMIN)
    except ValidationError as e:
        logger.warning(f"Admin bootstrap skipped: {e.message}")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Serve with ``uvicorn --factory family_registry.main:create_app``."""
    settings = settings or default_settings
    logging.basicConfig(level=settings.LOG_LEVEL)

    engine = make_engine(settings)
    Base.metadata.create_all(bind=engine)
    session_factory = make_session_factory(engine)

    with session_factory() as db:
        ensure_counter(db)
        _bootstrap_admin(db, settings)

    app = FastAPI(title="Family Registry API", version="0.1.0")
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = session_factory
    app.include_router(router)
    logger.info(f"Family registry ready on {engine.url.render_as_string(hide_password=True)}")
    return app
