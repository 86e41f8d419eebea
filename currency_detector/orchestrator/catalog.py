"""Reference data for the seven Indian rupee notes the detector recognizes."""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CurrencyNote:
    value: int
    name: str
    description: str
    color: str
    features: tuple[str, ...]
    width_mm: int
    height_mm: int


NOTES: tuple[CurrencyNote, ...] = (
    CurrencyNote(
        value=10,
        name="Ten Rupees",
        description="Ten Rupee note, chocolate brown color, featuring the Konark Sun Temple on the reverse",
        color="chocolate brown",
        features=("Konark Sun Temple", "Mahatma Gandhi portrait"),
        width_mm=123, height_mm=63,
    ),
    CurrencyNote(
        value=20,
        name="Twenty Rupees",
        description="Twenty Rupee note, greenish-yellow color, featuring the Ellora Caves on the reverse",
        color="greenish-yellow",
        features=("Ellora Caves", "Mahatma Gandhi portrait"),
        width_mm=129, height_mm=63,
    ),
    CurrencyNote(
        value=50,
        name="Fifty Rupees",
        description="Fifty Rupee note, fluorescent blue color, featuring Hampi with Chariot on the reverse",
        color="fluorescent blue",
        features=("Hampi with Chariot", "Mahatma Gandhi portrait"),
        width_mm=135, height_mm=66,
    ),
    CurrencyNote(
        value=100,
        name="One Hundred Rupees",
        description="One Hundred Rupee note, lavender color, featuring Rani Ki Vav on the reverse",
        color="lavender",
        features=("Rani Ki Vav (Queen's Stepwell)", "Mahatma Gandhi portrait"),
        width_mm=142, height_mm=66,
    ),
    CurrencyNote(
        value=200,
        name="Two Hundred Rupees",
        description="Two Hundred Rupee note, bright yellow color, featuring Sanchi Stupa on the reverse",
        color="bright yellow",
        features=("Sanchi Stupa", "Mahatma Gandhi portrait"),
        width_mm=146, height_mm=66,
    ),
    CurrencyNote(
        value=500,
        name="Five Hundred Rupees",
        description="Five Hundred Rupee note, stone grey color, featuring Red Fort on the reverse",
        color="stone grey",
        features=("Red Fort", "Mahatma Gandhi portrait"),
        width_mm=150, height_mm=66,
    ),
    CurrencyNote(
        value=2000,
        name="Two Thousand Rupees",
        description="Two Thousand Rupee note, magenta color, featuring Mangalyaan (Mars Orbiter Mission) on the reverse",
        color="magenta",
        features=("Mangalyaan (Mars Orbiter Mission)", "Mahatma Gandhi portrait"),
        width_mm=166, height_mm=66,
    ),
)

_BY_VALUE = {note.value: note for note in NOTES}


def get_note(value: int) -> Optional[CurrencyNote]:
    return _BY_VALUE.get(value)
