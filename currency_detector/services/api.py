import base64
import binascii
import os
from fastapi import FastAPI
from dotenv import load_dotenv
from currency_detector.services.models import (
    DetectResponse, NoteOut, StatusResponse,
    CaptureFrameRequest, CaptureFrameResponse,
)
from currency_detector.services.status_store import StatusStore
from currency_detector.orchestrator import errors
from currency_detector.orchestrator.catalog import NOTES, get_note
from currency_detector.orchestrator.contracts import DetectionPolicy, DetectionReport
from currency_detector.orchestrator.events import EventFanout
from currency_detector.orchestrator.state_machine import DetectionOrchestrator
from currency_detector.adapters.camera.frame_buffer import FrameBuffer
from currency_detector.adapters.tts import lines as L
from currency_detector.adapters.tts.announcer import VoiceAnnouncer, speech_for_result
from currency_detector.adapters.tts.player_local import LocalPlayerTTS
from currency_detector.adapters.vision.features import decode_image

load_dotenv(dotenv_path="currency_detector/.env", override=False)

app = FastAPI(title="currency-detector")

status = StatusStore()

# Vision adapter: controlled by VISION_ADAPTER env var
# Values: color | mock  (default: color)
_vision_adapter = os.getenv("VISION_ADAPTER", "color").lower()

if _vision_adapter == "mock":
    from currency_detector.adapters.vision.mock_vision import MockVision
    vision = MockVision(status)
else:
    from currency_detector.adapters.vision.color_rules import ColorRuleVision
    vision = ColorRuleVision(status)

status.log(f"vision adapter: {type(vision).__name__}")


def _frame_max_age() -> float | None:
    # FRAME_MAX_AGE_S=0 keeps the last upload until it is replaced
    max_age = float(os.getenv("FRAME_MAX_AGE_S", "5"))
    return max_age if max_age > 0 else None


# Camera adapter: upload (browser posts frames) | cv2 (server webcam) | mock
_camera_adapter = os.getenv("CAMERA_ADAPTER", "upload").lower()

if _camera_adapter == "cv2":
    from currency_detector.adapters.camera.cv2_camera import CV2Camera
    camera = CV2Camera(status)
elif _camera_adapter == "mock":
    from currency_detector.adapters.camera.mock_camera import MockCamera
    camera = MockCamera(status)
else:
    camera = FrameBuffer(status, max_age_s=_frame_max_age())

status.log(f"camera adapter: {type(camera).__name__}")

tts = LocalPlayerTTS(status, lang=os.getenv("TTS_LANG", "en-IN"))
announcer = VoiceAnnouncer(tts, status)
_tts_enabled = os.getenv("TTS_ENABLED", "1") not in ("0", "false", "no")
sinks = [status, announcer] if _tts_enabled else [status]

policy = DetectionPolicy.from_env()
status.log(
    f"policy: samples={policy.sample_count} delay={policy.sample_delay_s:.3f}s"
    f" decay={policy.history_decay} blend={policy.history_blend} bonus={policy.history_bonus}"
)

orch = DetectionOrchestrator(vision=vision, camera=camera, status_store=status,
                             events=EventFanout(sinks), policy=policy)


def _note_out(value: int | None) -> NoteOut | None:
    note = get_note(value) if value is not None else None
    if note is None:
        return None
    return NoteOut(
        value=note.value, name=note.name, description=note.description, color=note.color,
        features=list(note.features), width_mm=note.width_mm, height_mm=note.height_mm,
    )


def _detect_response(report: DetectionReport) -> DetectResponse:
    ok = report.error_code is None
    return DetectResponse(
        ok=ok,
        denomination=report.denomination,
        note=_note_out(report.denomination),
        speech=speech_for_result(report.denomination) if ok else None,
        votes=report.votes,
        overridden=report.overridden,
        duration_ms=report.duration_ms,
        error_code=report.error_code,
    )


@app.get("/status", response_model=StatusResponse)
def get_status():
    last = status.last_denomination
    note = get_note(last) if last is not None else None
    votes = orch.last_report.votes if orch.last_report else {}
    return StatusResponse(
        detecting=orch.busy,
        state=orch.state.value,
        active=orch.active,
        ready=vision.ready,
        last_denomination=last,
        last_note_name=note.name if note else None,
        last_error=status.last_error,
        last_votes=votes,
        detections=status.detections,
        logs=status.logs,
    )


@app.post("/detect", response_model=DetectResponse)
async def detect():
    """One user-triggered detection (double tap). Rejected, not queued, while another runs."""
    report = await orch.detect()
    return _detect_response(report)


@app.post("/capture_frame", response_model=CaptureFrameResponse)
async def capture_frame(req: CaptureFrameRequest, detect: bool = False):
    """Store a browser-captured frame as the live frame; optionally run a detection on it."""
    if not isinstance(camera, FrameBuffer):
        return CaptureFrameResponse(ok=False, error=f"camera adapter {type(camera).__name__} does not accept uploads")
    try:
        image_bytes = base64.b64decode(req.image, validate=True)
    except (binascii.Error, ValueError) as e:
        status.log(f"CAPTURE_FRAME decode error: {e}")
        return CaptureFrameResponse(ok=False, error="base64 decode failed")

    try:
        frame = decode_image(image_bytes)
    except errors.FrameUnreadableError as e:
        status.log(f"CAPTURE_FRAME image error: {e}")
        return CaptureFrameResponse(ok=False, error=errors.ERR_BAD_IMAGE)

    camera.push(frame)
    h, w = frame.shape[:2]
    status.log(f"CAPTURE_FRAME received {w}x{h}")

    detection = None
    if detect:
        detection = _detect_response(await orch.detect())
    return CaptureFrameResponse(ok=True, width=w, height=h, detection=detection)


@app.post("/activate")
def activate():
    """Camera on: detection requests are accepted again."""
    orch.set_active(True)
    return {"ok": True, "active": True}


@app.post("/deactivate")
def deactivate():
    orch.set_active(False)
    if isinstance(camera, FrameBuffer):
        camera.clear()
    return {"ok": True, "active": False}


@app.post("/announce")
def announce(line: str = L.WELCOME):
    """Speak one of the fixed app lines (WELCOME, INSTRUCTIONS, ...)."""
    text = L.LINE_TEXT.get(line.upper())
    if text is None:
        return {"ok": False, "error": f"unknown line '{line}'"}
    spoken = announcer.announce(text) if _tts_enabled else False
    return {"ok": True, "line": line.upper(), "text": text, "spoken": spoken}


@app.get("/notes", response_model=list[NoteOut])
def list_notes():
    return [_note_out(note.value) for note in NOTES]


@app.get("/notes/{value}")
def note_detail(value: int):
    note = _note_out(value)
    if note is None:
        return {"ok": False, "error": f"unknown denomination {value}"}
    return {"ok": True, "note": note}


@app.get("/health")
def health():
    """Check readiness of all subsystems."""
    return {
        "api": True,
        "vision_adapter": type(vision).__name__,
        "vision_ready": vision.ready,
        "camera_adapter": type(camera).__name__,
        "tts_enabled": _tts_enabled,
        "tts_assets": tts.has_assets(),
        "all_ok": vision.ready,
    }
