import asyncio
import enum
import time
from typing import Optional

from currency_detector.orchestrator import errors
from currency_detector.orchestrator.contracts import DetectionPolicy, DetectionReport
from currency_detector.orchestrator.errors import FrameUnavailableError
from currency_detector.orchestrator.stability import StabilityTracker
from currency_detector.orchestrator.voting import plurality, vote


class DetectorState(enum.Enum):
    IDLE = "idle"
    SAMPLING = "sampling"
    VOTING = "voting"
    STABILIZING = "stabilizing"


# Legal forward moves; anything else is a bug in the orchestrator itself
_TRANSITIONS = {
    DetectorState.IDLE: {DetectorState.SAMPLING},
    DetectorState.SAMPLING: {DetectorState.VOTING},
    DetectorState.VOTING: {DetectorState.STABILIZING},
    DetectorState.STABILIZING: set(),
}


class DetectionOrchestrator:
    def __init__(self, vision, camera, status_store, events=None,
                 policy: DetectionPolicy | None = None, sleep=asyncio.sleep):
        self.vision = vision
        self.camera = camera
        self.status = status_store
        self.events = events if events is not None else status_store
        self.policy = policy or DetectionPolicy()
        self.tracker = StabilityTracker(
            decay=self.policy.history_decay,
            blend=self.policy.history_blend,
            bonus=self.policy.history_bonus,
        )
        self.active = True
        self.state = DetectorState.IDLE
        self.last_report: Optional[DetectionReport] = None
        self._sleep = sleep

    @property
    def busy(self) -> bool:
        return self.state is not DetectorState.IDLE

    @property
    def last_accepted(self) -> Optional[int]:
        return self.tracker.last_accepted

    def set_active(self, active: bool):
        self.active = active
        self.status.log(f"detector: active={active}")

    def _advance(self, target: DetectorState):
        if target not in _TRANSITIONS[self.state]:
            raise RuntimeError(f"illegal detector transition {self.state.value} -> {target.value}")
        self.state = target

    def _emit(self, event: str, *args):
        # a failing sink is logged; the detection outcome stands
        try:
            getattr(self.events, event)(*args)
        except Exception as e:
            self.status.log(f"event {event} failed {type(e).__name__}: {e}")

    def _rejection(self) -> Optional[str]:
        if self.busy:
            return errors.ERR_BUSY
        if not self.active:
            return errors.ERR_INACTIVE
        if not self.vision.ready:
            return errors.ERR_NOT_READY
        return None

    async def process_frame(self) -> Optional[int]:
        """Run one detection request; None when rejected or failed."""
        report = await self.detect()
        return report.denomination

    async def detect(self) -> DetectionReport:
        reason = self._rejection()
        if reason:
            self.status.log(f"detect rejected: {reason} state={self.state.value}")
            return DetectionReport(denomination=None, duration_ms=0, error_code=reason)

        first_frame = self.camera.read()
        if first_frame is None:
            self.status.log("detect rejected: no frame available")
            return DetectionReport(denomination=None, duration_ms=0, error_code=errors.ERR_NO_FRAME)

        self._advance(DetectorState.SAMPLING)
        t0 = time.time()
        pending = [first_frame]

        def sample():
            frame = pending.pop() if pending else self.camera.read()
            if frame is None:
                raise FrameUnavailableError("frame source returned no frame")
            return self.vision.identify(frame)

        try:
            self.status.log(f"detect start samples={self.policy.sample_count}")
            self._emit("on_detection_start")

            tally, _ = await vote(
                sample,
                count=self.policy.sample_count,
                delay_s=self.policy.sample_delay_s,
                sleep=self._sleep,
            )

            self._advance(DetectorState.VOTING)
            leader, leader_count = plurality(tally)
            self.status.log(f"detect votes={dict(tally)} plurality={leader}x{leader_count}")

            self._advance(DetectorState.STABILIZING)
            value = self.tracker.stabilize(tally, self.policy.sample_count)
            if self.tracker.last_overridden:
                self.status.log(f"detect ambiguous vote, keeping last accepted {value}")

            dt = int((time.time() - t0) * 1000)
            self.status.log(f"detect done value={value} dt={dt}ms")
            report = DetectionReport(
                denomination=value,
                duration_ms=dt,
                votes=dict(tally),
                blended=dict(self.tracker.last_blended),
                overridden=self.tracker.last_overridden,
            )
            self.last_report = report
            self._emit("on_detection_complete", value)
            return report

        except Exception as e:
            dt = int((time.time() - t0) * 1000)
            self.status.log(f"detect error {type(e).__name__}: {e}")
            code = getattr(e, "code", errors.ERR_DETECTION_FAILED)
            report = DetectionReport(denomination=None, duration_ms=dt, error_code=code)
            self.last_report = report
            self._emit("on_detection_error", e)
            return report
        finally:
            self.state = DetectorState.IDLE
