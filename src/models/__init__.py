# Data models for the storyboarder
from .storyboard import (
    FrameStatus,
    SessionStep,
    StoryboardFrame,
    ScriptEntry,
    ScriptResult,
    FrameResult,
)
from .frame_store import FrameStore
from .session import StoryboardSession
from .image_generation import AspectRatio, GeneratedImage

__all__ = [
    # Storyboard
    "FrameStatus",
    "SessionStep",
    "StoryboardFrame",
    "ScriptEntry",
    "ScriptResult",
    "FrameResult",
    "FrameStore",
    "StoryboardSession",
    # Image Generation
    "AspectRatio",
    "GeneratedImage",
]
