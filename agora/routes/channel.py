import logging

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect

logger = logging.getLogger(__name__)

router = APIRouter(tags=["channel"])


@router.websocket("/article-channel")
async def article_channel(websocket: WebSocket, article_id: int = Query(alias="articleId")):
    """Counts readers currently holding an article page open (its heat)."""
    counter = websocket.app.state.view_counter
    await websocket.accept()
    heat = counter.increment(article_id)
    logger.debug("Article %d viewers: %d", article_id, heat)
    await websocket.send_json({"article_id": article_id, "heat": heat})
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.debug("Article %d viewer left", article_id)
    finally:
        counter.decrement(article_id)
