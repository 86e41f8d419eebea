"""
TTS player — cross-platform.

Priority:
  1. Pre-recorded mp3: assets/<line>.mp3
  2. Dynamic text fallback: espeak (Linux) or macOS `say`
  3. Silent log if no TTS tool is available
"""

import os
import shutil
import subprocess
import sys
from currency_detector.adapters.tts import lines as L


class LocalPlayerTTS:
    def __init__(self, status_store, assets_dir: str | None = None, lang: str = "en-IN"):
        self.status = status_store
        self.assets_dir = assets_dir or os.path.join(os.path.dirname(__file__), "assets")
        self.lang = lang

    def say(self, line_key: str):
        audio_path = self._resolve_path(line_key)
        if os.path.isfile(audio_path):
            self.status.log(f"tts: playing {os.path.basename(audio_path)}")
            self._play_audio(audio_path)
        else:
            text = L.LINE_TEXT.get(line_key, line_key)
            self.status.log(f"tts: say fallback -> {text}")
            self._say_text(text)

    def say_text(self, text: str):
        """Speak arbitrary text; fixed app messages go through their recorded audio."""
        line_key = L.TEXT_TO_KEY.get(text)
        if line_key:
            self.say(line_key)
            return
        self.status.log(f"tts(dynamic): {text}")
        self._say_text(text)

    def has_assets(self) -> bool:
        return os.path.isdir(self.assets_dir) and len(os.listdir(self.assets_dir)) > 0

    def _resolve_path(self, line_key: str) -> str:
        fname = L.LINE_WAV.get(line_key, "unknown.mp3")
        return os.path.join(self.assets_dir, fname)

    def _play_audio(self, path: str):
        # run() blocks until audio finishes so lines never overlap
        if sys.platform == "darwin":
            subprocess.run(["afplay", path], check=False)
        elif shutil.which("ffplay"):
            subprocess.run(["ffplay", "-nodisp", "-autoexit", "-loglevel", "quiet", path], check=False)
        elif shutil.which("mpv"):
            subprocess.run(["mpv", "--no-video", path], check=False)
        elif shutil.which("paplay"):
            subprocess.run(["paplay", path], check=False)
        else:
            self.status.log("tts: no audio player found, skipping playback")

    def _say_text(self, text: str):
        if sys.platform == "darwin":
            subprocess.run(["say", text], check=False)
        elif shutil.which("espeak-ng"):
            subprocess.run(["espeak-ng", "-v", self.lang, text], check=False)
        elif shutil.which("espeak"):
            subprocess.run(["espeak", text], check=False)
        else:
            self.status.log(f"tts: no speech tool available, would say: {text}")
