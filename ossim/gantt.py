"""Text Gantt charts for CPU schedules."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from itertools import accumulate


@dataclass(frozen=True)
class Segment:
    """A stretch of time during which one process held the CPU."""

    pid: int
    start: int
    end: int

    @property
    def duration(self) -> int:
        return self.end - self.start

    @property
    def label(self) -> str:
        return f"P{self.pid}"


def _centre(label: str, width: int) -> str:
    left = max(width - len(label), 0) // 2
    right = width - len(label) - left
    return " " * left + label + " " * right


def _flowing_timeline(marks: list[str], positions: list[int]) -> str:
    parts = [marks[0]]
    printed = len(marks[0])
    for mark, position in zip(marks[1:], positions[1:]):
        spaces = position - printed
        parts.append(" " * spaces + mark)
        printed += spaces + len(mark)
    return "".join(parts)


def _clipped_timeline(marks: list[str], positions: list[int]) -> str:
    width = positions[-1] + 1
    chars = [" "] * width
    for mark, position in zip(marks, positions):
        end = min(position + len(mark), width)
        if end > position:
            chars[position:end] = mark[: end - position]
    return "".join(chars)


def render_gantt(
    segments: Iterable[Segment],
    scale: int = 2,
    min_width: int = 2,
    fixed_width: int | None = None,
    clip_timeline: bool = False,
) -> str:
    """Draw segments as a bar with a time axis underneath.

    Each block is ``duration * scale`` characters wide but never narrower than
    ``min_width``; ``fixed_width`` gives every block the same width instead.
    With ``clip_timeline`` the axis numbers sit exactly under each ``+`` and
    may overwrite one another; otherwise they are pushed right when crowded.
    """
    segments = list(segments)
    if not segments:
        raise ValueError("cannot draw a Gantt chart without segments")

    if fixed_width is not None:
        widths = [fixed_width] * len(segments)
    else:
        widths = [max(seg.duration * scale, min_width) for seg in segments]

    border = "+" + "".join("-" * width + "+" for width in widths)
    cells = "|" + "".join(
        _centre(seg.label, width) + "|" for seg, width in zip(segments, widths)
    )
    marks = [str(segments[0].start)] + [str(seg.end) for seg in segments]
    positions = list(accumulate((width + 1 for width in widths), initial=0))
    if clip_timeline:
        timeline = _clipped_timeline(marks, positions)
    else:
        timeline = _flowing_timeline(marks, positions)
    return "\n".join(["Gantt Chart:", border, cells, border, timeline])