from pydantic import BaseModel
from typing import Optional

class NoteOut(BaseModel):
    value: int
    name: str
    description: str
    color: str
    features: list[str]
    width_mm: int
    height_mm: int

class DetectResponse(BaseModel):
    ok: bool
    denomination: Optional[int] = None
    note: Optional[NoteOut] = None
    speech: Optional[str] = None                 # text announced to the user
    votes: dict[int, int] = {}                   # raw per-sample tally
    overridden: bool = False                     # ambiguous vote kept the last accepted note
    duration_ms: int = 0
    error_code: Optional[str] = None

class StatusResponse(BaseModel):
    detecting: bool
    state: str
    active: bool
    ready: bool
    last_denomination: Optional[int] = None
    last_note_name: Optional[str] = None
    last_error: Optional[str] = None
    last_votes: dict[int, int] = {}
    detections: int = 0
    logs: list[str]

class CaptureFrameRequest(BaseModel):
    image: str  # base64 JPEG/PNG

class CaptureFrameResponse(BaseModel):
    ok: bool
    width: Optional[int] = None
    height: Optional[int] = None
    detection: Optional[DetectResponse] = None
    error: Optional[str] = None
