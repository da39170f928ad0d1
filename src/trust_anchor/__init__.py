"""
trust_anchor — immutable X.509 trust anchors for certification path validation.

A TrustAnchor names the most-trusted CA either by certificate or by
distinguished name plus public key, and may carry a DER NameConstraints
value that is structurally validated (asn1crypto) when the anchor is built.

    from trust_anchor import TrustAnchor

    anchor = TrustAnchor.from_certificate(root_cert, name_constraints_der)
"""

__version__ = "0.1.0"

from trust_anchor.domain.models import (  # noqa: E402
    NameAndKey,
    PrincipalAndKey,
    TrustAnchor,
    TrustedCertificate,
)
from trust_anchor.errors import DecodeError, InvalidArgument, TrustAnchorError  # noqa: E402

__all__ = [
    "TrustAnchor",
    "TrustedCertificate",
    "NameAndKey",
    "PrincipalAndKey",
    "InvalidArgument",
    "DecodeError",
    "TrustAnchorError",
]
