"""
Clients for the external media source and the thumbnail host
"""
from catalog_bot.storage.github_client import GitHubClient
from catalog_bot.storage.telegram_client import TelegramFileClient

__all__ = ["GitHubClient", "TelegramFileClient"]
