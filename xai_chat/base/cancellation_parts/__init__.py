"""Cancellation implementation parts; import from ``xai_chat.base.cancellation``."""
