"""
voxbrowse REST API

Endpoints for parsing transcripts and driving the voice session externally.
"""

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel
from typing import Optional, List, Dict, Any

from .core import VoiceSession, parse

router = APIRouter(prefix="/api/v1", tags=["voxbrowse"])


# ============================================================================
# REQUEST/RESPONSE MODELS
# ============================================================================

class TranscriptRequest(BaseModel):
    """A transcript to parse or process."""
    text: str


class IntentResponse(BaseModel):
    """Parsed intent, or null when nothing matched."""
    intent: Optional[Dict[str, Any]] = None


class CommandResponse(BaseModel):
    """Outcome of executing a transcript."""
    success: bool
    response: str
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None


class FeedbackLineModel(BaseModel):
    text: str
    is_error: bool = False


def get_session(request: Request) -> VoiceSession:
    """Resolve the session stored on the application."""
    session = getattr(request.app.state, "session", None)
    if session is None:
        raise HTTPException(status_code=503, detail="Voice session not initialized")
    return session


# ============================================================================
# STATUS ENDPOINTS
# ============================================================================

@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@router.get("/status")
async def get_status(session: VoiceSession = Depends(get_session)):
    """Get session status."""
    return session.get_status()


# ============================================================================
# PROCESSING ENDPOINTS
# ============================================================================

@router.post("/parse", response_model=IntentResponse)
async def parse_transcript(request: TranscriptRequest):
    """Parse a transcript without executing it."""
    intent = parse(request.text)
    return IntentResponse(intent=intent.to_dict() if intent else None)


@router.post("/command", response_model=CommandResponse)
async def run_command(request: TranscriptRequest, session: VoiceSession = Depends(get_session)):
    """Parse and execute a transcript immediately."""
    result = await session.engine.process(request.text)
    return CommandResponse(**result.to_dict())


# ============================================================================
# LISTENING ENDPOINTS
# ============================================================================

@router.post("/listening/start")
async def start_listening(session: VoiceSession = Depends(get_session)):
    """Start accepting transcripts."""
    await session.start()
    return {"success": True, "listening": session.listening}


@router.post("/listening/stop")
async def stop_listening(session: VoiceSession = Depends(get_session)):
    """Stop accepting transcripts and settle in-flight dispatches."""
    await session.stop()
    return {"success": True, "listening": session.listening}


@router.post("/transcript")
async def submit_transcript(request: TranscriptRequest, session: VoiceSession = Depends(get_session)):
    """Queue a recognized transcript on the session."""
    if not session.listening:
        raise HTTPException(status_code=409, detail="Voice control is not listening")
    await session.submit(request.text)
    return {"success": True, "queued": True}


@router.get("/transcript", response_model=List[FeedbackLineModel])
async def get_transcript(session: VoiceSession = Depends(get_session)):
    """Get the most recent feedback lines."""
    return session.get_lines()
