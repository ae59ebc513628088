"""
Update dispatcher with per-sender sequential execution
"""
import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Set

from catalog_bot.bot.events import EventKind, InboundEvent
from catalog_bot.utils.keyed_lock import KeyedLock

logger = logging.getLogger(__name__)

Handler = Callable[[InboundEvent], Awaitable[Any]]


class UpdateDispatcher:
    """
    Таблица обработчиков по виду события.

    События одного отправителя обрабатываются строго по очереди: следующее
    не начнётся, пока предыдущее (включая ответ) не завершится. События
    разных отправителей выполняются параллельно.
    """

    def __init__(self) -> None:
        self._handlers: Dict[EventKind, Handler] = {}
        self._locks = KeyedLock()
        self._tasks: Set[asyncio.Task] = set()

    def register(self, kind: EventKind, handler: Handler) -> None:
        if kind in self._handlers:
            raise ValueError(f"Handler for {kind.value} is already registered")
        self._handlers[kind] = handler

    async def dispatch(self, event: InboundEvent) -> Any:
        """Выполнить обработчик события; исключения логируются, не поднимаются."""
        handler = self._handlers.get(event.kind)
        if handler is None:
            logger.debug("No handler for %s", event.kind.value)
            return None

        async with self._locks.acquire(event.sender_key):
            try:
                return await handler(event)
            except Exception:
                logger.exception(
                    "Handler for %s failed",
                    event.kind.value,
                    extra={"chat_id": event.chat_id, "sender_id": event.sender_id},
                )
                return None

    def submit(self, event: InboundEvent) -> asyncio.Task:
        """Запустить обработку в фоне (порядок по отправителю сохраняется)."""
        task = asyncio.create_task(self.dispatch(event))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        """Дождаться всех фоновых обработок (при остановке)."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
