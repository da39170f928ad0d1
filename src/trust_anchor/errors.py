"""
Errors raised by trust anchor construction and name-constraints decoding.

Both concrete errors subclass ValueError so callers that only know the
standard library contract ("bad argument") still catch them.
"""

from __future__ import annotations


class TrustAnchorError(Exception):
    """Base class for every error raised by this package."""


class InvalidArgument(TrustAnchorError, ValueError):
    """
    A trust anchor could not be constructed from the given inputs.

    Raised only during construction: a missing identity input, an empty or
    malformed CA name, or name-constraints bytes that fail to decode.
    """


class DecodeError(TrustAnchorError, ValueError):
    """A byte sequence is not a valid DER encoding of NameConstraints."""
