"""
Shared test fixtures and helpers for the trust-anchor test suite.

Certificates and keys are generated on the fly with cryptography, so the
suite needs no fixture files. Valid NameConstraints DER comes from
cryptography's own encoder; malformed encodings are spelled out by hand in
the tests that need them.
"""

from __future__ import annotations

import datetime
import ipaddress

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

CA_NAME = "CN=Test Root CA,O=Example,C=US"

# NameConstraints { permittedSubtrees [0] { GeneralSubtree { dNSName "example.com" } } }
PERMITTED_EXAMPLE_COM_DER = bytes.fromhex("3011a00f300d820b") + b"example.com"


def make_name_constraints(
    permitted: list[x509.GeneralName] | None = None,
    excluded: list[x509.GeneralName] | None = None,
) -> bytes:
    """Encode a NameConstraints extension value with cryptography."""
    return x509.NameConstraints(
        permitted_subtrees=permitted,
        excluded_subtrees=excluded,
    ).public_bytes()


def make_ca_certificate(private_key: ec.EllipticCurvePrivateKey, common_name: str = "Test Root CA") -> x509.Certificate:
    """Build a minimal self-signed CA certificate for `private_key`."""
    name = x509.Name([
        x509.NameAttribute(NameOID.COMMON_NAME, common_name),
        x509.NameAttribute(NameOID.ORGANIZATION_NAME, "Example"),
        x509.NameAttribute(NameOID.COUNTRY_NAME, "US"),
    ])
    now = datetime.datetime.now(datetime.timezone.utc)
    return (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(private_key.public_key())
        .serial_number(0x1234)
        .not_valid_before(now - datetime.timedelta(days=1))
        .not_valid_after(now + datetime.timedelta(days=365))
        .add_extension(x509.BasicConstraints(ca=True, path_length=None), critical=True)
        .sign(private_key, hashes.SHA256())
    )


@pytest.fixture(scope="session")
def ca_private_key() -> ec.EllipticCurvePrivateKey:
    """P-256 key shared by the whole session (key generation is the slow part)."""
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def ca_public_key(ca_private_key: ec.EllipticCurvePrivateKey) -> ec.EllipticCurvePublicKey:
    return ca_private_key.public_key()


@pytest.fixture(scope="session")
def ca_certificate(ca_private_key: ec.EllipticCurvePrivateKey) -> x509.Certificate:
    return make_ca_certificate(ca_private_key)


@pytest.fixture()
def ca_principal() -> x509.Name:
    return x509.Name.from_rfc4514_string(CA_NAME)


@pytest.fixture()
def name_constraints_der() -> bytes:
    """Permitted example.com DNS subtree, excluded 10.0.0.0/8."""
    return make_name_constraints(
        permitted=[x509.DNSName("example.com")],
        excluded=[x509.IPAddress(ipaddress.ip_network("10.0.0.0/8"))],
    )
