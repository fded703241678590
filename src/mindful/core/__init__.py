"""Functional core - pure business logic with no I/O."""

from .entries import (
    DEFAULT_MOOD,
    Entry,
    InvalidMoodError,
    Mood,
    count_by_mood,
    format_entry_date,
    format_entry_line,
    is_blank,
    mood_symbol,
    new_entry,
    parse_mood,
    prepend_entry,
    remove_entry,
)

__all__ = [
    # Moods
    "Mood",
    "DEFAULT_MOOD",
    "InvalidMoodError",
    "parse_mood",
    "mood_symbol",
    # Entries
    "Entry",
    "new_entry",
    "prepend_entry",
    "remove_entry",
    "is_blank",
    "count_by_mood",
    # Formatting
    "format_entry_date",
    "format_entry_line",
]
