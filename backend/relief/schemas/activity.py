from datetime import datetime

from pydantic import BaseModel


class ActivityLogOut(BaseModel):
    id: str
    action: str
    entity_type: str | None
    entity_id: str | None
    message: str
    details: dict
    created_at: datetime

    model_config = {"from_attributes": True}
