import asyncio
import contextlib
import logging
import time
from typing import Any

from fastapi import APIRouter, Request, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from app.core.rate_limit import rate_limit
from app.schemas.ats import LiveScoreMessage, ScoreRequest, ScoreResponse, ScoreSnapshot
from app.scoring.aggregate import evaluate_resume
from app.scoring.engine import engine_from_settings
from app.scoring.feedback import build_feedback
from app.scoring.scheduler import AsyncioScheduler

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/ats/score", response_model=ScoreResponse)
@rate_limit()
async def ats_score(request: Request, payload: ScoreRequest):
    _ = request
    result = evaluate_resume(payload.document, payload.jd_keywords)
    feedback = None
    if payload.previous_score is not None:
        feedback = build_feedback(payload.previous_score, result.score, time.time())
    return ScoreResponse(
        score=result.score,
        breakdown=result.breakdown,
        section_signals=result.section_signals,
        feedback=feedback,
        is_high_score=result.is_high_score,
    )


def _event_payload(event: str, snapshot: ScoreSnapshot) -> dict[str, Any]:
    return {"event": event, **snapshot.model_dump(mode="json")}


@router.websocket("/ats/live")
async def ats_live(websocket: WebSocket):
    await websocket.accept()
    outbox: asyncio.Queue[dict[str, Any]] = asyncio.Queue()

    def on_update(event: str, snapshot: ScoreSnapshot) -> None:
        if event == "frame":
            return
        outbox.put_nowait(_event_payload(event, snapshot))

    engine = engine_from_settings(AsyncioScheduler(), on_update=on_update)

    async def sender() -> None:
        while True:
            message = await outbox.get()
            await websocket.send_json(message)

    send_task = asyncio.create_task(sender())
    try:
        while True:
            frame = await websocket.receive()
            if frame["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(frame.get("code", 1000))
            raw = frame.get("text")
            if raw is None:
                outbox.put_nowait({"event": "error", "detail": "Live score messages must be JSON text frames."})
                continue
            try:
                message = LiveScoreMessage.model_validate_json(raw)
            except ValidationError as exc:
                outbox.put_nowait({"event": "error", "detail": exc.errors(include_url=False, include_context=False)})
                continue
            engine.recalculate(message.document, message.jd_keywords)
    except WebSocketDisconnect:
        logger.debug("ats_live_disconnected passes=%s", engine.passes)
    finally:
        engine.close()
        if not send_task.done():
            send_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            try:
                await send_task
            except (WebSocketDisconnect, RuntimeError) as exc:
                logger.info("ats_live_send_failed error=%s", type(exc).__name__)
