"""
Playback cursor over a finished step trace.

The player never touches a tree: it only moves an index over an immutable
sequence of ``Step``s, so stepping backwards, pausing and abandoning playback
are plain index operations.  It owns no timer either.  A caller that wants
auto-play calls ``tick()`` every ``current.suggested_duration_ms``.

    IDLE ──play()──► PLAYING ──pause()──► PAUSED
      ▲                 │  ▲                 │
      └──last step──────┘  └─────play()──────┘
"""

import enum
import logging

logger = logging.getLogger(__name__)


class PlaybackState(str, enum.Enum):
    IDLE    = "idle"
    PLAYING = "playing"
    PAUSED  = "paused"


class TracePlayer:
    """
    Args:
        steps (Sequence[Step]|None): A trace from a traced engine call.
            ``None`` (an untraced call) gives an empty player.
    """

    def __init__(self, steps):
        self._steps = tuple(steps or ())
        self._index = 0
        self.state  = PlaybackState.IDLE

    # ── Introspection ───────────────────────────────────────────
    @property
    def steps(self):
        return self._steps

    @property
    def index(self):
        return self._index

    @property
    def total(self):
        return len(self._steps)

    @property
    def current(self):
        """Step under the cursor, or None for an empty trace."""
        return self._steps[self._index] if self._steps else None

    @property
    def at_start(self):
        return self._index == 0

    @property
    def at_end(self):
        return not self._steps or self._index == len(self._steps) - 1

    @property
    def playing(self):
        return self.state is PlaybackState.PLAYING

    def remaining_ms(self):
        """Suggested time left after the current step."""
        return sum(s.suggested_duration_ms or 0
                   for s in self._steps[self._index + 1:])

    # ── Navigation ──────────────────────────────────────────────
    def next(self):
        """Advance one step.  No-op at the end."""
        if not self.at_end:
            self._index += 1
        return self.current

    def prev(self):
        """Go back one step.  No-op at the start."""
        if self._index > 0:
            self._index -= 1
        return self.current

    def seek(self, index):
        """
        Jump to *index* (negative counts from the end, like a list).

        Raises:
            IndexError: Out of range.
        """
        n = len(self._steps)
        if index < 0:
            index += n
        if not 0 <= index < n:
            raise IndexError(f"step {index} out of range for {n} steps")
        self._index = index
        return self.current

    def reset(self):
        """Jump to the first step and stop."""
        self.state  = PlaybackState.IDLE
        self._index = 0
        return self.current

    def go_end(self):
        """Jump to the last step and stop."""
        self.state = PlaybackState.IDLE
        if self._steps:
            self._index = len(self._steps) - 1
        return self.current

    # ── Auto-play state machine ────────────────────────────────
    def play(self):
        """Start (or resume) auto-play.  Returns False for an empty trace."""
        if not self._steps:
            return False
        if self.at_end:
            self._index = 0
        self.state = PlaybackState.PLAYING
        return True

    def pause(self):
        if self.state is PlaybackState.PLAYING:
            self.state = PlaybackState.PAUSED

    def toggle(self):
        if self.state is PlaybackState.PLAYING:
            self.pause()
        else:
            self.play()
        return self.state

    def stop(self):
        """Abandon playback where it is."""
        logger.debug("playback stopped at step %d/%d", self._index,
                     len(self._steps))
        self.state = PlaybackState.IDLE

    def tick(self):
        """
        Advance while playing.  Reaching the last step ends playback.

        Returns:
            Step|None: The new current step, or None when not playing.
        """
        if self.state is not PlaybackState.PLAYING:
            return None
        if self.at_end:
            self.state = PlaybackState.IDLE
            return None
        self._index += 1
        if self.at_end:
            self.state = PlaybackState.IDLE
        return self.current

    def __iter__(self):
        return iter(self._steps)

    def __len__(self):
        return len(self._steps)
