"""
Range-based text editing for comment rewrites.
Applies insertions and replacements by character position, leaving the rest
of the source untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


@dataclass
class TextRange:
    """Represents a range in text by character positions."""
    start_char: int
    end_char: int

    def __post_init__(self):
        if self.start_char > self.end_char:
            raise ValueError(f"Invalid range: start_char ({self.start_char}) > end_char ({self.end_char})")

    def overlaps(self, other: TextRange) -> bool:
        """Check if this range overlaps with another."""
        return not (self.end_char <= other.start_char or other.end_char <= self.start_char)


@dataclass
class Edit:
    """Single text edit operation using character positions."""
    range: TextRange
    replacement: str
    type: Optional[str]  # Type for counter in statistics
    is_insertion: bool = False


class RangeEditor:
    """
    Unicode-safe range-based text editor that works with character positions.
    """

    def __init__(self, original_text: str):
        self.original_text = original_text
        self.edits: List[Edit] = []

    def add_replacement(self, start_char: int, end_char: int, replacement: str, edit_type: Optional[str]) -> None:
        """
        Add a replacement operation.

        Raises:
            ValueError: If the range overlaps an already registered replacement
        """
        char_range = TextRange(start_char, end_char)
        for existing in self.edits:
            if not existing.is_insertion and char_range.overlaps(existing.range):
                raise ValueError(
                    f"Overlapping edits: [{start_char}, {end_char}) and "
                    f"[{existing.range.start_char}, {existing.range.end_char})"
                )
        self.edits.append(Edit(char_range, replacement, edit_type))

    def add_insertion(self, position_char: int, content: str, edit_type: Optional[str]) -> None:
        """
        Add an insertion operation at the specified character position.

        Insertions at the same position are kept in the order they were added.
        """
        for existing in self.edits:
            if existing.is_insertion and existing.range.start_char == position_char:
                existing.replacement += content
                return
        self.edits.append(Edit(TextRange(position_char, position_char), content, edit_type, is_insertion=True))

    def validate_edits(self) -> List[str]:
        """Validate that all edits are within bounds."""
        errors = []
        for i, edit in enumerate(self.edits):
            if edit.range.start_char < 0:
                errors.append(f"Edit {i}: start_char ({edit.range.start_char}) is negative")
            if edit.range.end_char > len(self.original_text):
                errors.append(f"Edit {i}: end_char ({edit.range.end_char}) exceeds text length ({len(self.original_text)})")
        return errors

    def apply_edits(self) -> Tuple[str, Dict[str, int]]:
        """
        Apply all edits and return the modified text and statistics.

        Returns:
            Tuple of (modified_text, statistics)
        """
        validation_errors = self.validate_edits()
        if validation_errors:
            raise ValueError(f"Edit validation failed: {'; '.join(validation_errors)}")

        stats: Dict[str, int] = {"edits_applied": len(self.edits), "lines_added": 0}
        if not self.edits:
            return self.original_text, stats

        # Apply from the end so earlier positions stay valid; at equal positions
        # the replacement goes first so the insertion lands in front of it
        sorted_edits = sorted(
            self.edits,
            key=lambda e: (e.range.start_char, not e.is_insertion),
            reverse=True,
        )

        result_text = self.original_text
        for edit in sorted_edits:
            start, end = edit.range.start_char, edit.range.end_char
            original_chunk = result_text[start:end]
            result_text = result_text[:start] + edit.replacement + result_text[end:]
            stats["lines_added"] += edit.replacement.count("\n") - original_chunk.count("\n")
            if edit.type:
                stats[edit.type] = stats.get(edit.type, 0) + 1

        return result_text, stats
