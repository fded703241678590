"""Pure journal entry logic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class InvalidMoodError(ValueError):
    """Raised when a value is not one of the five moods."""


class Mood(Enum):
    """The five moods a user can attach to an entry, in display order."""

    GREEN = "💚"
    BLUE = "💙"
    PURPLE = "💜"
    ORANGE = "🧡"
    RED = "❤️"

    @property
    def label(self) -> str:
        return self.name.lower()


DEFAULT_MOOD = Mood.GREEN


def parse_mood(value: Mood | str) -> Mood:
    """
    Resolve a mood from a Mood, its symbol, or its name (any case).

    Raises InvalidMoodError for anything else.
    """
    if isinstance(value, Mood):
        return value
    if not isinstance(value, str):
        raise InvalidMoodError(f"Invalid mood: {value!r}")

    candidate = value.strip()
    for mood in Mood:
        if candidate == mood.value:
            return mood
    # Some inputs drop the variation selector from the red heart
    if candidate == "❤":
        return Mood.RED

    try:
        return Mood[candidate.upper()]
    except KeyError:
        choices = ", ".join(f"{m.value} ({m.label})" for m in Mood)
        raise InvalidMoodError(f"Invalid mood: {value!r}. Choose one of: {choices}") from None


def mood_symbol(value: str) -> str:
    """Symbol to display for a stored mood string. Unknown strings pass through."""
    try:
        return parse_mood(value).value
    except InvalidMoodError:
        return value


@dataclass
class Entry:
    """One journaled moment."""

    id: int
    text: str
    mood: str
    date: str

    def to_dict(self) -> dict:
        """Serialize to the stored JSON object shape."""
        return {
            "id": self.id,
            "text": self.text,
            "mood": self.mood,
            "date": self.date,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Entry":
        """Create Entry from a stored JSON object."""
        if not isinstance(data, dict):
            raise ValueError(f"Invalid entry: expected an object, got {type(data).__name__}")

        missing = [key for key in ("id", "text", "mood", "date") if key not in data]
        if missing:
            raise ValueError(f"Invalid entry: missing {', '.join(missing)}")

        entry_id = data["id"]
        # JSON numbers may come back as floats (e.g. 1736933400000.0)
        if isinstance(entry_id, float) and entry_id.is_integer():
            entry_id = int(entry_id)
        if isinstance(entry_id, bool) or not isinstance(entry_id, int):
            raise ValueError(f"Invalid entry: id must be an integer, got {data['id']!r}")

        for key in ("text", "mood", "date"):
            if not isinstance(data[key], str):
                raise ValueError(f"Invalid entry: {key} must be a string, got {data[key]!r}")

        return cls(id=entry_id, text=data["text"], mood=data["mood"], date=data["date"])


def epoch_millis(moment: datetime) -> int:
    """Milliseconds since the Unix epoch. Naive datetimes are treated as local time."""
    if moment.tzinfo is None:
        moment = moment.astimezone()
    return (moment - EPOCH) // timedelta(milliseconds=1)


def format_entry_date(moment: datetime) -> str:
    """
    Long en-US date, e.g. "Wednesday, January 15, 2025".

    Pure function - no I/O.
    """
    return f"{moment:%A, %B} {moment.day}, {moment.year}"


def is_blank(text: str | None) -> bool:
    """Empty or whitespace-only text."""
    return not text or not text.strip()


def new_entry(text: str, mood: Mood | str, now: datetime | None = None) -> Entry:
    """
    Build an Entry stamped with `now`.

    The text is stored as typed. Callers reject blank text before calling.
    """
    now = now or datetime.now()
    return Entry(
        id=epoch_millis(now),
        text=text,
        mood=parse_mood(mood).value,
        date=format_entry_date(now),
    )


def prepend_entry(entries: list[Entry], entry: Entry) -> list[Entry]:
    """Return a new collection with `entry` first."""
    return [entry, *entries]


def remove_entry(entries: list[Entry], entry_id: int) -> list[Entry]:
    """
    Return a new collection without any entry whose id is `entry_id`.

    Entries created in the same millisecond share an id and are removed together.
    """
    return [e for e in entries if e.id != entry_id]


def count_by_mood(entries: list[Entry]) -> dict[str, int]:
    """Tally entries per mood symbol, known moods first in display order."""
    counts = {mood.value: 0 for mood in Mood}
    for entry in entries:
        symbol = mood_symbol(entry.mood)
        counts[symbol] = counts.get(symbol, 0) + 1
    return counts


def format_entry_line(entry: Entry) -> str:
    """
    Format a single entry for display.

    Pure function - no I/O.
    """
    return f"{mood_symbol(entry.mood)} {entry.date} [{entry.id}]\n{entry.text}"
