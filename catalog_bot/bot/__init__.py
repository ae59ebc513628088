"""
Telegram bot: update parsing, outbound transport, per-sender dispatch
"""
from catalog_bot.bot.dispatcher import UpdateDispatcher
from catalog_bot.bot.events import EventKind, InboundEvent, event_from_update, parse_update
from catalog_bot.bot.transport import BotTransport, TelegramTransport

__all__ = [
    "UpdateDispatcher",
    "EventKind",
    "InboundEvent",
    "event_from_update",
    "parse_update",
    "BotTransport",
    "TelegramTransport",
]
