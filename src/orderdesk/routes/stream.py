import asyncio
import logging
from typing import AsyncIterator

from fastapi import APIRouter
from fastapi import Depends
from fastapi import Request
from fastapi.responses import StreamingResponse

from orderdesk.deps import get_broker
from orderdesk.event_broker import EventBroker
from orderdesk.event_broker import QueueConnection

logger = logging.getLogger(__name__)

router = APIRouter(tags=["events"])

SSE_HEADERS = {
    "Cache-Control": "no-cache, no-transform",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


async def stream_frames(
    request: Request,
    broker: EventBroker,
    connection: QueueConnection,
    poll_interval: float = 1.0,
) -> AsyncIterator[str]:
    """Yield frames published to ``connection`` until the client disconnects
    or the broker drops the connection.

    Registration happens when the response starts streaming and is always
    undone on the way out, whether the client left or the task was cancelled.
    """
    handle = broker.register(connection)
    logger.info("Event stream %s opened", handle.id)
    try:
        while True:
            if connection.closed:
                for frame in connection.drain():
                    yield frame
                break
            if await request.is_disconnected():
                break
            try:
                frame = await asyncio.wait_for(connection.receive(), timeout=poll_interval)
            except asyncio.TimeoutError:
                continue
            yield frame
    finally:
        connection.close()
        broker.deregister(handle)
        logger.info("Event stream %s closed", handle.id)


@router.get("/events")
async def event_stream(request: Request, broker: EventBroker = Depends(get_broker)):
    settings = request.app.state.settings
    connection = QueueConnection(maxsize=settings.sse_queue_size)
    return StreamingResponse(
        stream_frames(request, broker, connection, poll_interval=settings.sse_poll_interval),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
