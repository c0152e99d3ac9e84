"""In-memory frame state store with id-keyed merges and epoch guarding."""

import logging
from typing import Callable, Iterable, Optional

from models.storyboard import FrameResult, FrameStatus, StoryboardFrame

logger = logging.getLogger(__name__)


class FrameStore:
    """Ordered collection of storyboard frames for the current storyboard.

    Every mutation goes through `_merge`, which updates one frame by id against
    the live mapping, so concurrent settlements for different frames never
    overwrite each other. Each storyboard gets an epoch; `replace()` and
    `clear()` bump it, and merges tagged with an older epoch are dropped.
    """

    def __init__(self):
        self._frames: dict[int, StoryboardFrame] = {}
        self.epoch = 0

    def __len__(self) -> int:
        return len(self._frames)

    def __contains__(self, frame_id: int) -> bool:
        return frame_id in self._frames

    def get(self, frame_id: int) -> Optional[StoryboardFrame]:
        return self._frames.get(frame_id)

    def snapshot(self) -> list[StoryboardFrame]:
        """Return the frames ordered by ascending id."""
        return [self._frames[k] for k in sorted(self._frames)]

    def replace(self, frames: Iterable[StoryboardFrame]) -> int:
        """Discard every frame and install a new storyboard.

        Args:
            frames: Frames of the new storyboard (ids must be unique).

        Returns:
            The new epoch. Settlements from earlier epochs become no-ops.
        """
        new_frames: dict[int, StoryboardFrame] = {}
        for frame in frames:
            if frame.id in new_frames:
                raise ValueError(f"Duplicate frame id {frame.id}")
            new_frames[frame.id] = frame

        self._frames = new_frames
        self.epoch += 1
        logger.debug(f"Frame store replaced: {len(new_frames)} frames, epoch {self.epoch}")
        return self.epoch

    def clear(self) -> int:
        """Drop all frames; returns the new epoch."""
        return self.replace([])

    def mark_loading(self, frame_ids: Iterable[int], epoch: int) -> list[int]:
        """Set every listed frame to LOADING in one step.

        Current images are kept as stale display content.

        Returns:
            Ids that were actually marked.
        """
        return [
            frame_id
            for frame_id in frame_ids
            if self._merge(
                frame_id,
                epoch,
                lambda f: f.with_status(FrameStatus.LOADING, keep_image=True),
            )
        ]

    def settle(self, result: FrameResult) -> bool:
        """Merge the outcome of one image request into its frame.

        Returns:
            True if the frame was updated, False if the result was stale.
        """
        if result.ok:
            return self._merge(
                result.frame_id,
                result.epoch,
                lambda f: f.with_status(FrameStatus.SUCCESS, image_data=result.image_data),
            )
        return self._merge(
            result.frame_id,
            result.epoch,
            lambda f: f.with_status(FrameStatus.ERROR),
        )

    def _merge(
        self,
        frame_id: int,
        epoch: int,
        update: Callable[[StoryboardFrame], StoryboardFrame],
    ) -> bool:
        if epoch != self.epoch:
            logger.debug(
                f"Dropping update for frame {frame_id}: epoch {epoch} is stale "
                f"(current {self.epoch})"
            )
            return False

        current = self._frames.get(frame_id)
        if current is None:
            logger.debug(f"Dropping update for unknown frame {frame_id}")
            return False

        self._frames[frame_id] = update(current)
        return True
