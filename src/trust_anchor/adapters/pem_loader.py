"""
PEM/DER loading adapter — turns file contents into TrustAnchor inputs.

Adapter layer — uses cryptography (PyCA) for certificates and public keys.
Both PEM and DER are accepted: anything starting with a PEM armour line is
treated as PEM, everything else as DER. Library errors are translated to
InvalidArgument at this boundary so the CLI handles a single error type.
"""

from __future__ import annotations

from asn1crypto import pem as asn1_pem
from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization

from trust_anchor.domain.models import PublicKey
from trust_anchor.errors import InvalidArgument

_NAME_CONSTRAINTS_LABEL = "NAME CONSTRAINTS"


def load_certificate(data: bytes) -> x509.Certificate:
    """Load an X.509 certificate from PEM or DER bytes."""
    try:
        if asn1_pem.detect(data):
            return x509.load_pem_x509_certificate(data)
        return x509.load_der_x509_certificate(data)
    except ValueError as e:
        raise InvalidArgument(f"Cannot load certificate: {e}") from e


def load_public_key(data: bytes) -> PublicKey:
    """Load a SubjectPublicKeyInfo public key from PEM or DER bytes."""
    try:
        if asn1_pem.detect(data):
            key = serialization.load_pem_public_key(data)
        else:
            key = serialization.load_der_public_key(data)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise InvalidArgument(f"Cannot load public key: {e}") from e
    return key  # type: ignore[return-value]


def load_name_constraints(data: bytes) -> bytes:
    """
    Return the DER NameConstraints value from raw DER or a NAME CONSTRAINTS PEM block.

    Only unwraps the armour; structural validation happens when the anchor is built.
    """
    if not asn1_pem.detect(data):
        return data
    try:
        type_name, _headers, der_bytes = asn1_pem.unarmor(data)
    except ValueError as e:
        raise InvalidArgument(f"Cannot decode PEM name constraints: {e}") from e
    if type_name != _NAME_CONSTRAINTS_LABEL:
        raise InvalidArgument(f"Expected a {_NAME_CONSTRAINTS_LABEL} PEM block, got {type_name}")
    return der_bytes
