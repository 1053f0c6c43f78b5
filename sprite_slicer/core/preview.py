"""
Preview playback scheduling

The scheduler owns the playback position and rate but no timer. A host
(the Qt preview widget, or a test) calls tick() on every period and listens
for restart requests whenever the period or the frame set changes.
"""

from typing import Callable, List, Optional

from .config import DEFAULT_FPS
from .frames import SliceFrame


class PreviewScheduler:

    def __init__(self, sequence_provider: Callable[[], List[SliceFrame]], fps: int = DEFAULT_FPS, playing: bool = True):
        self.sequence_provider = sequence_provider
        self.fps = max(1, int(fps))
        self.is_playing = playing
        self._index = 0
        self._restart_listeners: List[Callable[[int], None]] = []

    # ----- Timer host hooks -----
    def add_restart_listener(self, callback: Callable[[int], None]):
        """Register a callback receiving the new interval (ms) whenever the timer must restart."""
        self._restart_listeners.append(callback)

    def _request_restart(self):
        for callback in self._restart_listeners:
            callback(self.interval_ms)

    @property
    def interval_ms(self) -> int:
        return round(1000 / self.fps)

    # ----- State -----
    @property
    def frame_count(self) -> int:
        return len(self.sequence_provider())

    @property
    def current_index(self) -> int:
        if self._index >= self.frame_count:
            self._index = 0
        return self._index

    def current_frame(self) -> Optional[SliceFrame]:
        frames = self.sequence_provider()
        if not frames:
            return None
        if self._index >= len(frames):
            self._index = 0
        return frames[self._index]

    def set_fps(self, fps: int):
        self.fps = max(1, int(fps))
        self._request_restart()

    def sequence_changed(self):
        """Called when the active/ordered frame set changes."""
        if self._index >= self.frame_count:
            self._index = 0
        self._request_restart()

    # ----- Transport -----
    def toggle_play(self) -> bool:
        self.is_playing = not self.is_playing
        self._request_restart()
        return self.is_playing

    def play(self):
        if not self.is_playing:
            self.toggle_play()

    def pause(self):
        if self.is_playing:
            self.toggle_play()

    def stop(self):
        self.pause()
        self._index = 0

    def tick(self) -> int:
        """Advance one frame if playing; returns the current index."""
        n = self.frame_count
        if not self.is_playing or n == 0:
            return self._index
        self._index = (self.current_index + 1) % n
        return self._index

    def step(self, delta: int) -> int:
        n = self.frame_count
        if n == 0:
            return self._index
        self._index = (self.current_index + delta) % n
        return self._index

    def seek_frame(self, frame_id: int) -> bool:
        for position, frame in enumerate(self.sequence_provider()):
            if frame.id == frame_id:
                self._index = position
                return True
        return False

    def __repr__(self):
        state = "playing" if self.is_playing else "paused"
        return f"PreviewScheduler(index={self._index}, fps={self.fps}, {state})"
