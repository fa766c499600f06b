# File: app/api/v1/routes_activity.py

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.deps import get_current_user, get_db
from app.models.user import User
from app.schemas.market import Activity, ActivityResponse
from app.services import activity_service

router = APIRouter()


@router.get("/mine", response_model=ActivityResponse, summary="My recent activity")
def my_activity(
    limit: int = Query(activity_service.DEFAULT_LIMIT, ge=1, le=200),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    events = activity_service.activities_for_user(db, user, limit=limit)
    return ActivityResponse(activities=[Activity(**event) for event in events])
