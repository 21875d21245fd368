from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class JournalCreateRequest(BaseModel):
    # Presence/blankness is checked by the journal store so every caller gets the same errors
    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[str] = Field(default=None, alias="userId")
    text: Optional[str] = None


class ReconcileRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[str] = Field(default=None, alias="userId")
    limit: Optional[int] = Field(default=None, ge=1, le=500)
