"""
Generate a sample name-constrained root CA for trying trust-anchor-inspect.

Infrastructure script — writes into the output directory (default ./sample):

  root.pem        self-signed P-256 CA certificate
  root.pub.pem    its SubjectPublicKeyInfo
  root-nc.der     NameConstraints: permit example.com / .example.com,
                  exclude 10.0.0.0/8

Usage:
  python scripts/generate_sample_anchor.py [output_dir]
  ANCHOR__CERTIFICATE_PATH=sample/root.pem \
  ANCHOR__NAME_CONSTRAINTS_PATH=sample/root-nc.der trust-anchor-inspect
"""

from __future__ import annotations

import datetime
import ipaddress
import sys
from pathlib import Path

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

DEFAULT_OUTPUT_DIR = Path("sample")


def _build_name_constraints() -> x509.NameConstraints:
    return x509.NameConstraints(
        permitted_subtrees=[x509.DNSName("example.com"), x509.DNSName(".example.com")],
        excluded_subtrees=[x509.IPAddress(ipaddress.ip_network("10.0.0.0/8"))],
    )


def _build_root(key: ec.EllipticCurvePrivateKey, constraints: x509.NameConstraints) -> x509.Certificate:
    name = x509.Name([
        x509.NameAttribute(NameOID.COUNTRY_NAME, "US"),
        x509.NameAttribute(NameOID.ORGANIZATION_NAME, "Example"),
        x509.NameAttribute(NameOID.COMMON_NAME, "Example Constrained Root CA"),
    ])
    now = datetime.datetime.now(datetime.timezone.utc)
    return (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now)
        .not_valid_after(now + datetime.timedelta(days=3650))
        .add_extension(x509.BasicConstraints(ca=True, path_length=None), critical=True)
        .add_extension(constraints, critical=True)
        .sign(key, hashes.SHA256())
    )


def main() -> None:
    output_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_OUTPUT_DIR
    output_dir.mkdir(parents=True, exist_ok=True)

    key = ec.generate_private_key(ec.SECP256R1())
    constraints = _build_name_constraints()
    root = _build_root(key, constraints)

    (output_dir / "root.pem").write_bytes(root.public_bytes(serialization.Encoding.PEM))
    (output_dir / "root.pub.pem").write_bytes(
        key.public_key().public_bytes(
            serialization.Encoding.PEM,
            serialization.PublicFormat.SubjectPublicKeyInfo,
        )
    )
    (output_dir / "root-nc.der").write_bytes(constraints.public_bytes())

    print(f"Wrote sample anchor to {output_dir}/")  # noqa: T201
    print(f"  subject: {root.subject.rfc4514_string()}")  # noqa: T201


if __name__ == "__main__":
    main()
