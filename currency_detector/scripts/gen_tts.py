"""
Pre-generate the fixed app lines as mp3 files using edge-tts.

Usage:
    python -m currency_detector.scripts.gen_tts

Output:
    currency_detector/adapters/tts/assets/*.mp3

Voice used: en-IN-NeerjaNeural (female, Indian English)
Alternative: en-IN-PrabhatNeural (male)
"""

import asyncio
import os
import edge_tts
from currency_detector.adapters.tts.lines import LINE_TEXT, LINE_WAV

ASSETS_DIR = os.path.join(os.path.dirname(__file__), "..", "adapters", "tts", "assets")

VOICE = os.getenv("TTS_VOICE", "en-IN-NeerjaNeural")


async def generate_line(line_key: str, text: str, voice: str):
    os.makedirs(ASSETS_DIR, exist_ok=True)
    out_name = LINE_WAV.get(line_key, f"{line_key.lower()}.mp3")
    out_path = os.path.join(ASSETS_DIR, out_name)
    communicate = edge_tts.Communicate(text, voice)
    await communicate.save(out_path)
    print(f"  {line_key} -> {out_name}")


async def main():
    print(f"Generating voice lines with {VOICE}...")
    await asyncio.gather(*(generate_line(key, text, VOICE) for key, text in LINE_TEXT.items()))
    print("Done. Files saved to adapters/tts/assets/")


if __name__ == "__main__":
    asyncio.run(main())
