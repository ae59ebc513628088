"""
Telegram webhook receiver
"""
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from catalog_bot.bot.dispatcher import UpdateDispatcher
from catalog_bot.bot.events import parse_update
from catalog_bot.bot.transport import TelegramTransport
from catalog_bot.dependencies import get_container, get_dispatcher

logger = logging.getLogger(__name__)


def create_webhook_router(path: str) -> APIRouter:
    """Роутер с единственным POST на секретном пути."""
    router = APIRouter()

    @router.post(path, include_in_schema=False)
    async def telegram_webhook(
        request: Request,
        dispatcher: UpdateDispatcher = Depends(get_dispatcher),
    ):
        try:
            data = await request.json()
        except ValueError:
            return JSONResponse(status_code=400, content={"ok": False})
        if not isinstance(data, dict):
            return JSONResponse(status_code=400, content={"ok": False})

        transport = get_container(request).transport
        bot = transport.bot if isinstance(transport, TelegramTransport) else None
        try:
            event = parse_update(data, bot)
        except (KeyError, TypeError, ValueError) as e:
            # Telegram повторяет не-2xx ответы, поэтому битый update просто пропускаем
            logger.warning("Malformed update %s: %s", data.get("update_id"), e)
            return {"ok": True}
        if event is None:
            logger.debug("Ignoring update %s", data.get("update_id"))
            return {"ok": True}

        # Ответ Telegram сразу; обработка идёт в фоне в порядке отправителя
        dispatcher.submit(event)
        return {"ok": True}

    return router
