"""
BotDesk - admin dashboard for chatbot instances, their conversation flows,
product catalogs, AI behavior and WhatsApp pairing.
"""

__version__ = "0.5.1"
