import threading
from typing import Optional
from currency_detector.adapters.tts import lines as L
from currency_detector.orchestrator.catalog import get_note


def speech_for_result(value: Optional[int]) -> str:
    if value is None:
        return L.LINE_TEXT[L.DETECTION_FAILED]
    note = get_note(value)
    if note is None:
        return "Unknown currency detected"
    return f"{note.name} note detected. This is a {note.color} colored note with {note.description}."


class VoiceAnnouncer:
    """Detection event sink that speaks progress and results.

    The same text is never spoken twice in a row; a new detection always
    speaks the 'analyzing' line first, so repeated results are still announced.
    """

    def __init__(self, tts, status_store, background: bool = True):
        self.tts = tts
        self.status = status_store
        self.background = background
        self.last_text: Optional[str] = None
        self._speak_lock = threading.Lock()

    def announce(self, text: str) -> bool:
        if not text or text == self.last_text:
            return False
        self.last_text = text
        if self.background:
            threading.Thread(target=self._speak, args=(text,), daemon=True).start()
        else:
            self._speak(text)
        return True

    def reset(self):
        self.last_text = None

    def _speak(self, text: str):
        with self._speak_lock:
            try:
                self.tts.say_text(text)
            except OSError as e:
                self.status.log(f"announcer: speech failed: {e}")

    def on_detection_start(self):
        self.announce(L.LINE_TEXT[L.DETECTING])

    def on_detection_complete(self, value: Optional[int]):
        self.announce(speech_for_result(value))

    def on_detection_error(self, error: Exception):
        self.announce(f"Error: {error}")
