"""
Ports — Protocol-based interfaces consumed by the trust anchor core.

Following hexagonal architecture, the domain declares WHAT it needs and the
adapters package supplies HOW:

  Domain ← Ports (protocols) ← Adapters (implementations)

Adapters satisfy a port structurally, by implementing its methods, with no
inheritance required. Tests substitute MagicMock doubles.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class NameConstraintsDecoder(Protocol):
    """
    Port: structurally decode a DER-encoded NameConstraints extension value.

      NameConstraints ::= SEQUENCE {
           permittedSubtrees       [0]     GeneralSubtrees OPTIONAL,
           excludedSubtrees        [1]     GeneralSubtrees OPTIONAL }

    Contract:
      - deterministic and side-effect free (safe to share between threads)
      - returns the decoded structure on success
      - raises trust_anchor.errors.DecodeError on any malformed input
        (wrong tag, truncated length, malformed subtree entries)
    """

    def decode(self, encoded: bytes) -> Any: ...
