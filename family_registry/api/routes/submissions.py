from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
import logging
from ...core.errors import ValidationError
from ...schemas.submission import SubmissionCreate, SubmissionOut
from ...services.submission_service import create_submission
from ..deps import get_db

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/", response_model=SubmissionOut, status_code=status.HTTP_201_CREATED)
def submit(payload: SubmissionCreate, db: Session = Depends(get_db)):
    try:
        return create_submission(
            db,
            kind=payload.kind,
            form_data=payload.form_data,
            submitted_by_name=payload.submitted_by_name,
            submitted_by_email=payload.submitted_by_email,
        )
    except ValidationError as e:
        logger.warning(f"Submission rejected at intake: {e.message}")
        raise HTTPException(422, e.message)
