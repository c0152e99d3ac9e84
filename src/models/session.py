"""Per-session storyboard state."""

from dataclasses import dataclass, field
from typing import Optional

from models.frame_store import FrameStore
from models.storyboard import SessionStep


@dataclass
class StoryboardSession:
    """State of one browser session: current view, banner error and frames."""

    session_id: str
    step: SessionStep = SessionStep.INPUT
    error: Optional[str] = None
    is_script_loading: bool = False
    frames: FrameStore = field(default_factory=FrameStore)
    # In-flight bulk batches, keyed by the store epoch they were issued under
    active_batches: dict[int, int] = field(default_factory=dict)

    @property
    def is_images_loading(self) -> bool:
        """True while a bulk batch for the current storyboard is in flight."""
        return self.active_batches.get(self.frames.epoch, 0) > 0

    def begin_batch(self, epoch: int) -> None:
        self.active_batches[epoch] = self.active_batches.get(epoch, 0) + 1

    def end_batch(self, epoch: int) -> None:
        remaining = self.active_batches.get(epoch, 0) - 1
        if remaining > 0:
            self.active_batches[epoch] = remaining
        else:
            self.active_batches.pop(epoch, None)

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "session_id": self.session_id,
            "step": self.step.value,
            "error": self.error,
            "is_script_loading": self.is_script_loading,
            "is_images_loading": self.is_images_loading,
            "frames": [f.to_dict() for f in self.frames.snapshot()],
        }
