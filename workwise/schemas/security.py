from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class DenialRecord(BaseModel):
    """A Firestore permission denial extracted from an audit LogEntry."""
    timestamp: datetime
    user_id: str = "anonymous"
    user_email: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    method_name: Optional[str] = None
    resource_path: Optional[str] = None
    error_code: Optional[int] = None
    error_message: Optional[str] = None
    severity: Optional[str] = None
    request_type: str = "unknown"

    class Config:
        from_attributes = True


class DenialIngestResponse(BaseModel):
    denial_id: int
    request_type: str
    critical: bool
    queued: bool


class DenialResponse(DenialRecord):
    id: int
    is_critical: bool


class SuspiciousIPResponse(BaseModel):
    id: int
    ip_address: str
    denial_count: int
    flagged_at: datetime
    action_required: str

    class Config:
        from_attributes = True
