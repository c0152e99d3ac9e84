"""Storyboard generation service - script planning and per-frame image orchestration."""

import asyncio
import logging
from typing import Awaitable, Callable, Iterable, Optional

from models.image_generation import AspectRatio
from models.session import StoryboardSession
from models.storyboard import FrameResult, SessionStep, StoryboardFrame
from services.image_generation_service import (
    ImageGenerationService,
    ImageGenerationServiceError,
)
from services.script_service import ScriptGenerationError, ScriptService

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[dict], Awaitable[None]]


class FrameNotFoundError(Exception):
    """Regeneration was requested for a frame id the storyboard does not have."""

    pass


class StoryboardService:
    """Orchestrates storyboard scripting via Gemini and per-frame image generation.

    Image requests fan out one task per frame and are joined with
    `asyncio.gather`. Each task returns a tagged FrameResult instead of raising,
    and merges it into the session's FrameStore by frame id as soon as it
    settles, so arrival order does not matter. Results carry the store epoch
    they were issued under; a storyboard replaced or reset in the meantime
    ignores them.
    """

    def __init__(
        self,
        script_service: ScriptService,
        image_gen_service: ImageGenerationService,
        aspect_ratio: str = AspectRatio.WIDESCREEN.value,
    ):
        """Initialize the storyboard service.

        Args:
            script_service: ScriptService for the storyboard script.
            image_gen_service: ImageGenerationService for frame images.
            aspect_ratio: Aspect ratio requested for every frame.
        """
        self.script_service = script_service
        self.image_gen_service = image_gen_service
        self.aspect_ratio = aspect_ratio

    async def create_storyboard(
        self,
        session: StoryboardSession,
        product_name: str,
        description: str,
        tone: str,
        on_progress: Optional[ProgressCallback] = None,
    ) -> asyncio.Task:
        """Generate the script, install its frames, and start rendering them.

        On success the session switches to the storyboard view with every
        frame already LOADING. On failure the session stays on the input view
        with `error` set and its frames untouched.

        Args:
            session: The session to populate.
            product_name: Product or brand name.
            description: Product description and key selling points.
            tone: Visual tone/style.
            on_progress: Async callback for frame updates.

        Returns:
            The background task running the bulk generation.

        Raises:
            ScriptGenerationError: If the script could not be generated.
        """
        session.is_script_loading = True
        session.error = None

        try:
            script = await self.script_service.generate_script(product_name, description, tone)
        except ScriptGenerationError as e:
            session.error = str(e) or "Failed to generate script"
            raise
        finally:
            session.is_script_loading = False

        frames = script.to_frames()
        session.frames.replace(frames)
        session.step = SessionStep.PREVIEW

        logger.info(f"Storyboard created for '{product_name[:60]}' with {len(frames)} frames")

        return self.start_generation(session, frames, on_progress=on_progress)

    def start_generation(
        self,
        session: StoryboardSession,
        frames: Optional[Iterable[StoryboardFrame]] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> asyncio.Task:
        """Mark frames LOADING and start one image request per frame.

        Every frame is marked before this returns, before any request can
        settle. Must be called from a running event loop.

        Args:
            session: The session whose frames are rendered.
            frames: Frames to render (defaults to the whole storyboard).
            on_progress: Async callback for frame updates.

        Returns:
            Task resolving to the list of FrameResults once every request settled.
        """
        batch = list(frames) if frames is not None else session.frames.snapshot()
        epoch = session.frames.epoch
        marked = session.frames.mark_loading([f.id for f in batch], epoch)
        batch = [f for f in batch if f.id in marked]

        session.begin_batch(epoch)
        return asyncio.create_task(self._run_batch(session, batch, epoch, on_progress))

    async def generate_all_images(
        self,
        session: StoryboardSession,
        frames: Optional[Iterable[StoryboardFrame]] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> list[FrameResult]:
        """Bulk generate: render every frame and wait until all settled."""
        return await self.start_generation(session, frames, on_progress=on_progress)

    def start_regeneration(
        self,
        session: StoryboardSession,
        frame_id: int,
        prompt: Optional[str] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> asyncio.Task:
        """Mark one frame LOADING and start a new image request for it.

        The frame keeps its current image as stale content until the request
        settles. Sibling frames are not read or written.

        Args:
            session: The session owning the frame.
            frame_id: Id of the frame to re-render.
            prompt: Prompt to use instead of the frame's stored visual prompt.
            on_progress: Async callback for frame updates.

        Returns:
            Task resolving to the FrameResult.

        Raises:
            FrameNotFoundError: If the storyboard has no such frame.
        """
        frame = session.frames.get(frame_id)
        if frame is None:
            raise FrameNotFoundError(f"Frame {frame_id} not found")

        prompt = prompt or frame.visual_prompt
        epoch = session.frames.epoch
        session.frames.mark_loading([frame_id], epoch)

        return asyncio.create_task(
            self._run_regeneration(session, frame_id, prompt, epoch, on_progress)
        )

    async def regenerate_image(
        self,
        session: StoryboardSession,
        frame_id: int,
        prompt: Optional[str] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> FrameResult:
        """Regenerate a single frame and wait for it to settle."""
        return await self.start_regeneration(session, frame_id, prompt, on_progress=on_progress)

    def reset(self, session: StoryboardSession) -> None:
        """Start a new project: drop all frames and return to the input view."""
        session.frames.clear()
        session.step = SessionStep.INPUT
        session.error = None

    async def _run_batch(
        self,
        session: StoryboardSession,
        frames: list[StoryboardFrame],
        epoch: int,
        on_progress: Optional[ProgressCallback],
    ) -> list[FrameResult]:
        try:
            await self._notify(on_progress, {
                "type": "frames_loading",
                "frame_ids": [f.id for f in frames],
            })

            results = await asyncio.gather(*(
                self._render_frame(session, f.id, f.visual_prompt, epoch, on_progress)
                for f in frames
            ))
        finally:
            session.end_batch(epoch)

        failed = [r.frame_id for r in results if not r.ok]
        logger.info(
            f"Image batch settled: {len(results) - len(failed)} succeeded, "
            f"{len(failed)} failed"
        )

        await self._notify(on_progress, {
            "type": "complete",
            "succeeded": [r.frame_id for r in results if r.ok],
            "failed": failed,
            "stale": epoch != session.frames.epoch,
        })
        return list(results)

    async def _run_regeneration(
        self,
        session: StoryboardSession,
        frame_id: int,
        prompt: str,
        epoch: int,
        on_progress: Optional[ProgressCallback],
    ) -> FrameResult:
        await self._notify(on_progress, {"type": "frames_loading", "frame_ids": [frame_id]})
        return await self._render_frame(session, frame_id, prompt, epoch, on_progress)

    async def _render_frame(
        self,
        session: StoryboardSession,
        frame_id: int,
        prompt: str,
        epoch: int,
        on_progress: Optional[ProgressCallback],
    ) -> FrameResult:
        """Request one image and merge the outcome into the store.

        Failures are returned as FrameResult(ok=False), never raised.
        """
        try:
            image = await self.image_gen_service.generate_image(
                prompt, aspect_ratio=self.aspect_ratio
            )
            result = FrameResult(frame_id=frame_id, epoch=epoch, ok=True, image_data=image.data_url)
        except ImageGenerationServiceError as e:
            logger.error(f"Failed frame {frame_id} ({e.kind}): {e}")
            result = FrameResult(
                frame_id=frame_id, epoch=epoch, ok=False, error=str(e), error_kind=e.kind
            )
        except Exception as e:
            logger.exception(f"Unexpected error rendering frame {frame_id}: {e}")
            result = FrameResult(
                frame_id=frame_id, epoch=epoch, ok=False, error=str(e), error_kind="unexpected"
            )

        if not session.frames.settle(result):
            logger.debug(f"Frame {frame_id} settled after its storyboard was replaced")
            return result

        frame = session.frames.get(frame_id)
        await self._notify(on_progress, {
            "type": "frame_complete" if result.ok else "frame_failed",
            "frame_id": frame_id,
            "frame": frame.to_dict() if frame else None,
        })
        return result

    @staticmethod
    async def _notify(on_progress: Optional[ProgressCallback], message: dict) -> None:
        if on_progress is not None:
            await on_progress(message)
