"""
Video catalog bot: Telegram upload/delivery bot with a cached listing API
"""
__version__ = "1.0.0"
