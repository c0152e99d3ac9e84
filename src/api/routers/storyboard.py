"""Storyboard generation routes for the AdVision API."""

import asyncio
import logging
import uuid

from api.dependencies import get_image_gen_service, get_script_service, get_storyboard_service
from api.schemas import (
    RegenerateFrameRequest,
    ScriptRequest,
    SessionResponse,
    StoryboardStatusResponse,
)
from api.websocket_manager import WebSocketManager
from fastapi import APIRouter, HTTPException, WebSocket, WebSocketDisconnect
from models.session import StoryboardSession
from services.script_service import ScriptGenerationError
from services.storyboard_service import FrameNotFoundError
from utils.config import load_config
from utils.logging import set_session_context

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Storyboard"])

# Storyboard session storage (in-memory, one per browser session)
storyboard_sessions: dict[str, StoryboardSession] = {}

# WebSocket manager for frame updates
ws_manager = WebSocketManager()

# Keep references to background tasks to prevent garbage collection
_background_tasks: set = set()


def _get_session(session_id: str) -> StoryboardSession:
    session = storyboard_sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    set_session_context(session_id)
    return session


def _progress_callback(session_id: str):
    """Build the on_progress callback that fans updates out to WebSocket clients."""

    async def on_progress(update: dict) -> None:
        await ws_manager.broadcast(session_id, {**update, "session_id": session_id})

    return on_progress


def _track(task: asyncio.Task) -> None:
    _background_tasks.add(task)
    task.add_done_callback(_background_tasks.discard)


@router.post("/api/storyboard/sessions", response_model=SessionResponse, summary="Create storyboard session")
async def create_session() -> dict:
    """Create an empty session on the input view."""
    session = StoryboardSession(session_id=str(uuid.uuid4()))
    storyboard_sessions[session.session_id] = session
    logger.info(f"Created storyboard session {session.session_id}")
    return session.to_dict()


@router.get("/api/storyboard/sessions/{session_id}", response_model=SessionResponse, summary="Get storyboard session", responses={404: {"description": "Session not found"}})
async def get_session(session_id: str) -> dict:
    """Return the current view, banner error and frames of a session."""
    return _get_session(session_id).to_dict()


@router.post("/api/storyboard/sessions/{session_id}/script", response_model=SessionResponse, summary="Generate storyboard script", description="Generate the script from a product brief, then render every frame in the background. Track frames via WebSocket.", responses={400: {"description": "Invalid brief"}, 404: {"description": "Session not found"}, 409: {"description": "Script already generating"}, 502: {"description": "Script generation failed"}})
async def generate_script(session_id: str, request: ScriptRequest) -> dict:
    """Generate the storyboard script and start frame image generation.

    Args:
        session_id: Session ID
        request: Product name, description and tone.

    Returns:
        Session state with every frame LOADING.
    """
    session = _get_session(session_id)

    product_name = request.product_name.strip()
    description = request.description.strip()
    if not product_name:
        raise HTTPException(status_code=400, detail="Product name is required")
    if not description:
        raise HTTPException(status_code=400, detail="Product description is required")
    if session.is_script_loading:
        raise HTTPException(status_code=409, detail="Script is already generating")

    if not get_script_service().api_key:
        raise HTTPException(
            status_code=400,
            detail="GEMINI_API_KEY not configured. Set it in your .env file.",
        )

    service = get_storyboard_service()
    tone = request.tone.strip() or load_config()["default_tone"]

    try:
        task = await service.create_storyboard(
            session,
            product_name=product_name,
            description=description,
            tone=tone,
            on_progress=_progress_callback(session_id),
        )
    except ScriptGenerationError as e:
        logger.error(f"Storyboard script failed for session {session_id}: {e}")
        await ws_manager.broadcast(session_id, {"type": "error", "message": session.error})
        raise HTTPException(status_code=502, detail=session.error)

    _track(task)
    return session.to_dict()


@router.post("/api/storyboard/sessions/{session_id}/images", response_model=SessionResponse, summary="Regenerate all images", responses={404: {"description": "Session not found"}, 409: {"description": "No frames, or images already generating"}})
async def regenerate_all_images(session_id: str) -> dict:
    """Re-render every frame of the current storyboard."""
    session = _get_session(session_id)

    if not len(session.frames):
        raise HTTPException(status_code=409, detail="Storyboard has no frames")
    if session.is_images_loading:
        raise HTTPException(status_code=409, detail="Images are already generating")

    service = get_storyboard_service()
    _track(service.start_generation(session, on_progress=_progress_callback(session_id)))
    return session.to_dict()


@router.post("/api/storyboard/sessions/{session_id}/frames/{frame_id}/regenerate", response_model=SessionResponse, summary="Regenerate one frame", responses={404: {"description": "Session or frame not found"}})
async def regenerate_frame(
    session_id: str,
    frame_id: int,
    request: RegenerateFrameRequest | None = None,
) -> dict:
    """Re-render a single frame, optionally with a substitute prompt."""
    session = _get_session(session_id)
    prompt = request.prompt.strip() if request and request.prompt else None

    service = get_storyboard_service()
    try:
        task = service.start_regeneration(
            session, frame_id, prompt=prompt, on_progress=_progress_callback(session_id)
        )
    except FrameNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    _track(task)
    return session.to_dict()


@router.post("/api/storyboard/sessions/{session_id}/reset", response_model=SessionResponse, summary="Start a new project", responses={404: {"description": "Session not found"}})
async def reset_session(session_id: str) -> dict:
    """Discard the storyboard and return to the input view."""
    session = _get_session(session_id)
    get_storyboard_service().reset(session)
    await ws_manager.broadcast(session_id, {"type": "status", **session.to_dict()})
    return session.to_dict()


@router.get("/api/storyboard/status", response_model=StoryboardStatusResponse, summary="Get storyboard service status")
async def get_storyboard_status() -> dict:
    """Return whether Gemini is configured and which models are in use."""
    image_service = get_image_gen_service()
    script_service = get_script_service()

    return {
        "gemini": image_service.is_configured(),
        "script_model": script_service.model_name,
        "image_model": image_service.model_name,
        "aspect_ratio": get_storyboard_service().aspect_ratio,
    }


@router.websocket("/ws/storyboard/{session_id}")
async def websocket_storyboard(websocket: WebSocket, session_id: str) -> None:
    """WebSocket endpoint for real-time frame updates.

    Args:
        websocket: WebSocket connection
        session_id: Session ID to monitor
    """
    if session_id not in storyboard_sessions:
        await websocket.accept()
        await websocket.send_json({"type": "error", "message": "Session not found"})
        await websocket.close()
        return

    await ws_manager.connect(session_id, websocket)

    try:
        session = storyboard_sessions[session_id]

        # Send current state immediately
        await websocket.send_json({"type": "status", **session.to_dict()})

        # Keep connection alive
        while True:
            try:
                data = await websocket.receive_text()
                if data == "ping":
                    await websocket.send_text("pong")
            except WebSocketDisconnect:
                break

    except Exception as e:
        logger.error(f"WebSocket error for storyboard session {session_id}: {e}")
    finally:
        ws_manager.disconnect(session_id, websocket)
