"""Minimal example replaying a streamed segmentation response through a ReadingSession."""

from __future__ import annotations

import logging

from rsvp_pacer.config import RsvpConfig
from rsvp_pacer.models import Fragment
from rsvp_pacer.session import ReadingSession
from rsvp_pacer.timing import round_duration

SAMPLE_TEXT = (
    "Gyroscopic stabilization keeps a platform level. "
    "Even when the base wobbles, the spinning rotor resists changes in orientation."
)

# Snapshots of the fragment list as it would arrive from a streaming model call.
STREAM = [
    [Fragment("Gyroscopic stabilization", 0.8)],
    [
        Fragment("Gyroscopic stabilization", 0.8),
        Fragment("keeps a platform level.", 0.3),
        Fragment("Even when", 0.1),
    ],
    [
        Fragment("Gyroscopic stabilization", 0.8),
        Fragment("keeps a platform level.", 0.3),
        Fragment("Even when", 0.1),
        Fragment("the base wobbles,", 0.3),
        Fragment("the spinning rotor", "0.5"),
        Fragment("resists changes", 0.6),
    ],
]


def main() -> None:
    logging.basicConfig(level=logging.DEBUG)
    session = ReadingSession(SAMPLE_TEXT, RsvpConfig())

    for step, snapshot in enumerate(STREAM, start=1):
        partial = step < len(STREAM)
        chunks = session.update(snapshot, partial=partial)
        print(f"update {step} (partial={partial}): {len(chunks)} chunks")

    session.seek(0)
    while True:
        chunk = session.current
        duration = session.next_duration()
        if chunk is None or duration is None:
            break
        print(f"{round_duration(duration):>5} ms  {chunk.text}")
        if session.finished:
            break
        session.advance()


if __name__ == "__main__":
    main()
