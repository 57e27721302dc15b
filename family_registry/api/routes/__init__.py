from fastapi import APIRouter
from . import auth, family, submissions, admin, content

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["Auth"])
router.include_router(family.router, prefix="/family", tags=["Family"])
router.include_router(submissions.router, prefix="/submissions", tags=["Submissions"])
router.include_router(admin.router, prefix="/admin", tags=["Admin"])
router.include_router(content.news_router, prefix="/news", tags=["News"])
router.include_router(content.events_router, prefix="/events", tags=["Events"])
