"""Models for advertising storyboard generation."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


# Raw field names returned by the script model, in schema order
SCRIPT_FIELDS = (
    "frame_number",
    "shot_type",
    "action_description",
    "visual_generation_prompt",
    "voiceover_script",
    "estimated_duration",
)


class FrameStatus(str, Enum):
    """Image status of a single storyboard frame."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class SessionStep(str, Enum):
    """Which view the session is on."""

    INPUT = "input"
    PREVIEW = "preview"


@dataclass(frozen=True)
class StoryboardFrame:
    """One advertising shot with its script text and rendered image."""

    id: int
    shot_type: str
    description: str
    visual_prompt: str
    voiceover: str
    time: str
    image_data: Optional[str] = None
    status: FrameStatus = FrameStatus.IDLE

    def with_status(
        self, status: FrameStatus, image_data: Optional[str] = None, keep_image: bool = False
    ) -> "StoryboardFrame":
        """Return a copy with a new status.

        Args:
            status: New frame status.
            image_data: Image payload to set (only meaningful with SUCCESS).
            keep_image: Keep the current image as stale display content.
        """
        return replace(
            self,
            status=status,
            image_data=self.image_data if keep_image else image_data,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "id": self.id,
            "shot_type": self.shot_type,
            "description": self.description,
            "visual_prompt": self.visual_prompt,
            "voiceover": self.voiceover,
            "time": self.time,
            "image_data": self.image_data,
            "status": self.status.value,
        }


@dataclass
class ScriptEntry:
    """A raw frame description as returned by the script model."""

    frame_number: int
    shot_type: str
    action_description: str
    visual_generation_prompt: str
    voiceover_script: str
    estimated_duration: str

    @classmethod
    def from_dict(cls, data: dict) -> "ScriptEntry":
        """Build an entry from one item of the model's `storyboard` array.

        Raises:
            ValueError: If a field is missing, empty, or the frame number is not an integer.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Storyboard entry must be an object, got {type(data).__name__}")

        missing = [name for name in SCRIPT_FIELDS if name not in data]
        if missing:
            raise ValueError(f"Storyboard entry missing fields: {', '.join(missing)}")

        try:
            frame_number = int(data["frame_number"])
        except (TypeError, ValueError, OverflowError):
            raise ValueError(f"Invalid frame_number: {data['frame_number']!r}")

        values = {}
        for name in SCRIPT_FIELDS[1:]:
            value = str(data[name] or "").strip()
            if not value:
                raise ValueError(f"Frame {frame_number} has an empty '{name}'")
            values[name] = value

        return cls(frame_number=frame_number, **values)

    def to_frame(self, frame_id: int) -> StoryboardFrame:
        """Rename the raw fields into an idle StoryboardFrame."""
        return StoryboardFrame(
            id=frame_id,
            shot_type=self.shot_type,
            description=self.action_description,
            visual_prompt=self.visual_generation_prompt,
            voiceover=self.voiceover_script,
            time=self.estimated_duration,
        )


@dataclass
class ScriptResult:
    """Storyboard script returned by the script model, ordered by frame number."""

    entries: list[ScriptEntry]

    @classmethod
    def from_dict(cls, data: dict, expected_frames: int = 6) -> "ScriptResult":
        """Parse and validate the model's JSON payload.

        Entries are sorted by `frame_number`; the numbers must be exactly
        1..expected_frames.

        Raises:
            ValueError: If the payload does not describe a complete storyboard.
        """
        if not isinstance(data, dict):
            raise ValueError("Script response must be a JSON object")

        items = data.get("storyboard")
        if not isinstance(items, list):
            raise ValueError("Script response missing 'storyboard' list")

        if len(items) != expected_frames:
            raise ValueError(
                f"Expected {expected_frames} storyboard frames, got {len(items)}"
            )

        entries = sorted(
            (ScriptEntry.from_dict(item) for item in items),
            key=lambda e: e.frame_number,
        )

        numbers = [e.frame_number for e in entries]
        if numbers != list(range(1, expected_frames + 1)):
            raise ValueError(f"Frame numbers must be 1..{expected_frames}, got {numbers}")

        return cls(entries=entries)

    def to_frames(self) -> list[StoryboardFrame]:
        """Normalize entries into idle frames with 1-based ids in order."""
        return [entry.to_frame(i) for i, entry in enumerate(self.entries, start=1)]


@dataclass
class FrameResult:
    """Tagged outcome of one image request."""

    frame_id: int
    epoch: int
    ok: bool
    image_data: Optional[str] = None
    error: Optional[str] = None
    error_kind: Optional[str] = None
