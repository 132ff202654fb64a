from enum import Enum
from typing import Optional

from pydantic import BaseModel


class UploadPhase(str, Enum):
    UPLOADING_AREA = "UPLOADING_AREA"
    UPLOADING_DEPARTMENT = "UPLOADING_DEPARTMENT"
    UPLOADING_DESIGNATION = "UPLOADING_DESIGNATION"
    UPLOADING_EMPLOYEE = "UPLOADING_EMPLOYEE"
    UPLOADING_SCHEDULE = "UPLOADING_SCHEDULE"
    UPLOADING_DRIVERS = "UPLOADING_DRIVERS"
    UPLOADING_ASSIGN_CAR = "UPLOADING_ASSIGN_CAR"
    COMPLETED = "COMPLETED"


# Declaration order is the publish order
UPLOAD_SEQUENCE: tuple[UploadPhase, ...] = tuple(UploadPhase)
TERMINAL_PHASE = UploadPhase.COMPLETED


class ProgressSnapshot(BaseModel):
    phase: str               # "" until the first publish
    version: int             # bumped on every publish
    updated_at: Optional[str] = None
    running: bool = False    # a batch upload is mid-sequence
