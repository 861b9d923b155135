from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from relief.api.deps import get_db
from relief.schemas.activity import ActivityLogOut
from relief.services.audit import recent_activity

router = APIRouter()


@router.get("/activity/logs", response_model=list[ActivityLogOut])
def list_activity_logs(
    limit: int = Query(default=500, ge=1, le=500),
    db: Session = Depends(get_db),
) -> list[ActivityLogOut]:
    return recent_activity(db, limit=limit)
