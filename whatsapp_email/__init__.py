"""WhatsApp to email bridge: AI-written emails from short chat messages."""

__version__ = "1.0.0"
