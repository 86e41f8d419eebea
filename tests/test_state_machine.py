import asyncio

import pytest

from currency_detector.adapters.camera.mock_camera import MockCamera
from currency_detector.adapters.vision.color_rules import ColorRuleVision
from currency_detector.adapters.vision.mock_vision import MockVision
from currency_detector.orchestrator import errors
from currency_detector.orchestrator.contracts import DENOMINATIONS, ClassificationResult, DetectionPolicy
from currency_detector.orchestrator.state_machine import DetectionOrchestrator, DetectorState
from currency_detector.services.status_store import StatusStore

from conftest import solid_frame


class ScriptedVision:
    def __init__(self, values, ready=True, fail_on=None):
        self.values = list(values)
        self._ready = ready
        self.fail_on = fail_on
        self.calls = 0

    @property
    def ready(self):
        return self._ready

    def identify(self, frame):
        self.calls += 1
        if self.fail_on is not None and self.calls == self.fail_on:
            raise RuntimeError("model crashed")
        return ClassificationResult(denomination=self.values.pop(0), confidence=1.0)


class CountingCamera:
    def __init__(self, frames=None, default=True):
        self.frames = list(frames or [])
        self.default = default
        self.reads = 0

    def read(self):
        self.reads += 1
        if self.frames:
            return self.frames.pop(0)
        return solid_frame((1, 2, 3)) if self.default else None


class RecordingEvents:
    def __init__(self):
        self.events = []

    def on_detection_start(self):
        self.events.append(("start",))

    def on_detection_complete(self, value):
        self.events.append(("complete", value))

    def on_detection_error(self, error):
        self.events.append(("error", type(error).__name__))


def _orchestrator(vision, camera=None, samples=5, delay_s=0.0):
    events = RecordingEvents()
    orch = DetectionOrchestrator(
        vision=vision,
        camera=camera or CountingCamera(),
        status_store=StatusStore(),
        events=events,
        policy=DetectionPolicy(sample_count=samples, sample_delay_s=delay_s),
    )
    return orch, events


def test_detection_returns_plurality_and_emits_events() -> None:
    vision = ScriptedVision([100, 200, 100, 200, 100])
    orch, events = _orchestrator(vision)

    value = asyncio.run(orch.process_frame())

    assert value == 100
    assert events.events == [("start",), ("complete", 100)]
    assert orch.state is DetectorState.IDLE
    assert orch.last_report.votes == {100: 3, 200: 2}
    assert orch.last_accepted == 100
    assert vision.calls == 5


def test_each_sample_reads_a_fresh_frame() -> None:
    camera = CountingCamera()
    orch, _ = _orchestrator(ScriptedVision([50] * 5), camera=camera)

    asyncio.run(orch.process_frame())

    assert camera.reads == 5


def test_not_ready_classifier_is_a_no_op() -> None:
    camera = CountingCamera()
    orch, events = _orchestrator(ScriptedVision([50], ready=False), camera=camera)

    report = asyncio.run(orch.detect())

    assert report.denomination is None
    assert report.error_code == errors.ERR_NOT_READY
    assert events.events == []
    assert camera.reads == 0


def test_inactive_detector_is_a_no_op() -> None:
    camera = CountingCamera()
    orch, events = _orchestrator(ScriptedVision([50]), camera=camera)
    orch.set_active(False)

    assert asyncio.run(orch.process_frame()) is None
    assert events.events == []
    assert camera.reads == 0


def test_missing_frame_skips_voting() -> None:
    vision = ScriptedVision([50])
    orch, events = _orchestrator(vision, camera=CountingCamera(default=False))

    report = asyncio.run(orch.detect())

    assert report.error_code == errors.ERR_NO_FRAME
    assert vision.calls == 0
    assert events.events == []


def test_classifier_failure_reports_error_and_recovers() -> None:
    vision = ScriptedVision([20] * 10, fail_on=3)
    orch, events = _orchestrator(vision)

    assert asyncio.run(orch.process_frame()) is None
    assert events.events == [("start",), ("error", "RuntimeError")]
    assert orch.state is DetectorState.IDLE
    assert orch.last_report.error_code == errors.ERR_DETECTION_FAILED
    assert orch.last_accepted is None

    # no automatic retry, but the next request goes through
    assert asyncio.run(orch.process_frame()) == 20


class FailingCompleteEvents(RecordingEvents):
    def on_detection_complete(self, value):
        super().on_detection_complete(value)
        raise RuntimeError("speaker busy")


def test_failing_sink_does_not_change_the_outcome() -> None:
    events = FailingCompleteEvents()
    status = StatusStore()
    orch = DetectionOrchestrator(
        vision=ScriptedVision([200] * 5),
        camera=CountingCamera(),
        status_store=status,
        events=events,
        policy=DetectionPolicy(sample_count=5, sample_delay_s=0.0),
    )

    value = asyncio.run(orch.process_frame())

    assert value == 200
    assert orch.last_accepted == 200
    assert orch.last_report.error_code is None
    assert events.events == [("start",), ("complete", 200)]
    assert orch.state is DetectorState.IDLE
    assert any("on_detection_complete failed RuntimeError" in line for line in status.logs)


def test_frame_lost_mid_detection_is_an_error() -> None:
    camera = CountingCamera(frames=[solid_frame((1, 2, 3))], default=False)
    orch, events = _orchestrator(ScriptedVision([50] * 5), camera=camera)

    report = asyncio.run(orch.detect())

    assert report.denomination is None
    assert report.error_code == errors.ERR_NO_FRAME
    assert events.events == [("start",), ("error", "FrameUnavailableError")]


def test_second_request_while_in_flight_is_dropped() -> None:
    camera = CountingCamera()
    orch, events = _orchestrator(ScriptedVision([500] * 5), camera=camera, delay_s=0.01)

    async def scenario():
        first = asyncio.create_task(orch.process_frame())
        await asyncio.sleep(0)
        assert orch.busy
        reads_before = camera.reads
        second = await orch.process_frame()
        assert camera.reads == reads_before
        return await first, second

    first, second = asyncio.run(scenario())

    assert first == 500
    assert second is None
    assert events.events == [("start",), ("complete", 500)]


def test_ambiguous_follow_up_keeps_previous_note() -> None:
    vision = ScriptedVision([500] * 5 + [10, 10, 20, 20, 50])
    orch, events = _orchestrator(vision)

    assert asyncio.run(orch.process_frame()) == 500
    report = asyncio.run(orch.detect())

    assert report.denomination == 500
    assert report.overridden is True
    assert report.votes == {10: 2, 20: 2, 50: 1}
    assert events.events[-1] == ("complete", 500)


def test_cancelled_detection_returns_to_idle() -> None:
    orch, _ = _orchestrator(ScriptedVision([50] * 5), delay_s=10.0)

    async def scenario():
        task = asyncio.create_task(orch.process_frame())
        await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    asyncio.run(scenario())

    assert orch.state is DetectorState.IDLE


def test_illegal_transition_is_refused() -> None:
    orch, _ = _orchestrator(ScriptedVision([]))

    with pytest.raises(RuntimeError, match="illegal"):
        orch._advance(DetectorState.STABILIZING)


def test_blue_frame_end_to_end_single_sample() -> None:
    status = StatusStore()
    orch = DetectionOrchestrator(
        vision=ColorRuleVision(status),
        camera=MockCamera(status, rgb=(60, 65, 150)),
        status_store=status,
        policy=DetectionPolicy(sample_count=1, sample_delay_s=0.0),
    )

    assert asyncio.run(orch.process_frame()) == 50
    assert status.last_denomination == 50
    assert status.detections == 1
    assert orch.tracker.history == {50: 2.0}


def test_placeholder_model_only_produces_known_notes() -> None:
    status = StatusStore()
    orch = DetectionOrchestrator(
        vision=MockVision(status, seed=7),
        camera=MockCamera(status),
        status_store=status,
        policy=DetectionPolicy(sample_count=5, sample_delay_s=0.0),
    )

    for _ in range(3):
        assert asyncio.run(orch.process_frame()) in DENOMINATIONS
    assert sum(orch.last_report.votes.values()) == 5
