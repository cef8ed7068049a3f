"""Terminal key decoding."""

from .reader import ESC_SEQUENCE_TIMEOUT_MS, KEY_EOF, read_key

__all__ = ["ESC_SEQUENCE_TIMEOUT_MS", "KEY_EOF", "read_key"]
