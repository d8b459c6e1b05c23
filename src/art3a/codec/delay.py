"""Parsing and formatting of the `delay` header line.

The line holds a global delay followed by optional per-frame overrides:

    delay 80 0:500 7:1000

All values are milliseconds. Zero stands for the default delay.
"""

from collections import Counter
from dataclasses import dataclass, field

from art3a.core.constants import DEFAULT_DELAY_MS


@dataclass
class Delay:
    """Global frame delay plus per-frame overrides."""
    global_delay: int = DEFAULT_DELAY_MS
    per_frame: dict[int, int] = field(default_factory=dict)

    @classmethod
    def parse(cls, text: str) -> "Delay":
        """
        Parse the value of a delay line.

        Raises:
            ValueError: On an empty line, a non-numeric value, or a
                frame given two overrides.
        """
        delay = cls()
        tokens = text.split()
        if not tokens:
            raise ValueError("Empty delay line")
        for token in tokens:
            frame_str, sep, value_str = token.partition(':')
            if sep:
                if not (frame_str.isdigit() and value_str.isdigit()):
                    raise ValueError(f"Invalid per-frame delay: {token!r}")
                frame = int(frame_str)
                if frame in delay.per_frame:
                    raise ValueError(f"Duplicate delay for frame {frame}")
                delay.per_frame[frame] = int(value_str)
            elif token.isdigit():
                delay.global_delay = int(token)
            else:
                raise ValueError(f"Invalid global delay: {token!r}")
        if delay.global_delay == 0:
            delay.global_delay = DEFAULT_DELAY_MS
        return delay

    @classmethod
    def from_durations(cls, durations: list[int]) -> "Delay":
        """Most common duration becomes global, the rest become overrides."""
        if not durations:
            return cls()
        counts = Counter(durations)
        # Ties go to the duration seen first
        global_delay = max(counts, key=lambda d: (counts[d], -durations.index(d)))
        per_frame = {i: d for i, d in enumerate(durations) if d != global_delay}
        return cls(global_delay, per_frame)

    def frame_delay(self, frame: int) -> int:
        delay = self.per_frame.get(frame, self.global_delay)
        return delay or DEFAULT_DELAY_MS

    def to_durations(self, frames: int) -> list[int]:
        return [self.frame_delay(i) for i in range(frames)]

    @property
    def is_default(self) -> bool:
        return self.global_delay == DEFAULT_DELAY_MS and not self.per_frame

    def __str__(self) -> str:
        parts = [str(self.global_delay)]
        parts.extend(f"{frame}:{delay}" for frame, delay in sorted(self.per_frame.items()))
        return " ".join(parts)
