"""Errors raised while acquiring or reading the decoding subprocess."""

from __future__ import annotations


class SourceError(RuntimeError):
    """The input source or the decoder process could not be acquired."""
