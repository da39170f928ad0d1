"""
NameConstraints decoder adapter — DER structural validation via asn1crypto.

Adapter layer — implements the NameConstraintsDecoder port using asn1crypto's
X.509 schema:

  NameConstraints ::= SEQUENCE {
       permittedSubtrees       [0]     GeneralSubtrees OPTIONAL,
       excludedSubtrees        [1]     GeneralSubtrees OPTIONAL }

  GeneralSubtrees ::= SEQUENCE SIZE (1..MAX) OF GeneralSubtree

  GeneralSubtree ::= SEQUENCE {
       base                    GeneralName,
       minimum         [0]     BaseDistance DEFAULT 0,
       maximum         [1]     BaseDistance OPTIONAL }

asn1crypto parses lazily: .load() only reads the outer header. The decoder
walks .native so every GeneralSubtree and GeneralName is parsed before the
bytes are accepted. asn1crypto signals malformed input with ValueError (and
occasionally TypeError or AttributeError on corrupt tags); every exception
raised while decoding is translated to DecodeError here, at the adapter
boundary.
"""

from __future__ import annotations

import structlog
from asn1crypto import x509 as asn1_x509

from trust_anchor.errors import DecodeError

log = structlog.get_logger()

_SUBTREE_FIELDS = ("permitted_subtrees", "excluded_subtrees")


def _check_subtrees(parsed: asn1_x509.NameConstraints) -> dict[str, int]:
    """
    Enforce the RFC 5280 cardinality rules asn1crypto does not check itself.

    Returns the number of entries in each subtree list (0 when absent).
    """
    counts: dict[str, int] = {}
    present = 0
    for field_name in _SUBTREE_FIELDS:
        subtrees = parsed[field_name].native
        if subtrees is None:
            counts[field_name] = 0
            continue
        if len(subtrees) == 0:
            raise DecodeError(f"NameConstraints {field_name} must contain at least one GeneralSubtree")
        counts[field_name] = len(subtrees)
        present += 1

    if present == 0:
        raise DecodeError("NameConstraints must contain permitted or excluded subtrees")
    return counts


class Asn1NameConstraintsDecoder:
    """
    Decode DER NameConstraints with asn1crypto.

    Implements the NameConstraintsDecoder port. Stateless: a single instance
    is shared by every TrustAnchor built without an explicit decoder.
    """

    def decode(self, encoded: bytes) -> asn1_x509.NameConstraints:
        """
        Fully decode `encoded` and return the asn1crypto NameConstraints value.

        Raises DecodeError if the bytes are empty, carry trailing data, have
        the wrong outer tag, are truncated, or contain a malformed subtree.
        """
        if not encoded:
            raise DecodeError("NameConstraints encoding is empty")

        try:
            parsed = asn1_x509.NameConstraints.load(bytes(encoded), strict=True)
            # Forces the lazy parse of every nested GeneralSubtree/GeneralName
            parsed.native
            counts = _check_subtrees(parsed)
        except DecodeError:
            raise
        except Exception as e:
            # asn1crypto reports some corrupt encodings as AttributeError or IndexError
            raise DecodeError(f"Malformed NameConstraints encoding: {e}") from e

        log.debug(
            "name_constraints.decoded",
            size=len(encoded),
            permitted=counts["permitted_subtrees"],
            excluded=counts["excluded_subtrees"],
        )
        return parsed


DEFAULT_DECODER = Asn1NameConstraintsDecoder()
