import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.core.errors import Internal
from backend.core.responses import success_response
from backend.database import get_db
from backend.services import catalog

router = APIRouter(tags=['courses'])
logger = logging.getLogger(__name__)


@router.get('')
def list_courses(
    search: str | None = Query(default=None),
    country: str | None = Query(default=None),
    level: str | None = Query(default=None),
    field: str | None = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=catalog.DEFAULT_PAGE_SIZE, ge=1, le=catalog.MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
):
    try:
        result = catalog.search_courses(
            db,
            search=search,
            country=country,
            level=level,
            field=field,
            page=page,
            limit=limit,
        )
    except SQLAlchemyError as exc:
        logger.exception('Listing courses failed')
        raise Internal('Error fetching courses') from exc

    return success_response(result)


@router.get('/{course_id}')
def get_course(course_id: int, db: Session = Depends(get_db)):
    try:
        course = catalog.course_to_response(catalog.get_course(db, course_id))
    except SQLAlchemyError as exc:
        logger.exception('Fetching course %s failed', course_id)
        raise Internal('Error fetching course') from exc

    return success_response(course)
