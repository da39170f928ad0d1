"""
Domain models — the TrustAnchor value type and its authority variants.

A trust anchor is the certification authority a path validator accepts
without further proof. It identifies the authority in exactly one of three
ways, modelled as a tagged variant so no anchor can hold zero or two
identities:

  TrustedCertificate(certificate)           — a self-describing CA certificate
  NameAndKey(ca_name, public_key)           — RFC 2253 text + key, principal derived
  PrincipalAndKey(principal, public_key)    — structured name + key, text derived

An anchor may also carry a DER-encoded NameConstraints extension value. The
bytes are copied on the way in, decoded once at construction (the decoded
value is discarded; only well-formedness matters here), and copied again on
every read. Enforcing the constraints is the path validator's job.

All models are frozen dataclasses: construction either yields a fully
validated instance or raises InvalidArgument.
"""

from __future__ import annotations

from dataclasses import InitVar, dataclass, field

from cryptography import x509
from cryptography.hazmat.primitives.asymmetric import dsa, ec, ed448, ed25519, rsa, x448, x25519

from trust_anchor.domain.names import parse_distinguished_name
from trust_anchor.domain.ports import NameConstraintsDecoder
from trust_anchor.errors import DecodeError, InvalidArgument
from trust_anchor.formatting import format_bytes

type PublicKey = (
    rsa.RSAPublicKey
    | dsa.DSAPublicKey
    | ec.EllipticCurvePublicKey
    | ed25519.Ed25519PublicKey
    | ed448.Ed448PublicKey
    | x25519.X25519PublicKey
    | x448.X448PublicKey
)

type BytesLike = bytes | bytearray | memoryview

_PUBLIC_KEY_LABELS: tuple[tuple[type, str], ...] = (
    (rsa.RSAPublicKey, "RSAPublicKey"),
    (dsa.DSAPublicKey, "DSAPublicKey"),
    (ec.EllipticCurvePublicKey, "EllipticCurvePublicKey"),
    (ed25519.Ed25519PublicKey, "Ed25519PublicKey"),
    (ed448.Ed448PublicKey, "Ed448PublicKey"),
    (x25519.X25519PublicKey, "X25519PublicKey"),
    (x448.X448PublicKey, "X448PublicKey"),
)
_PUBLIC_KEY_CLASSES = tuple(cls for cls, _label in _PUBLIC_KEY_LABELS)


# ─────────────────────── Input checks ───────────────────────


def _require_public_key(public_key: object) -> None:
    if public_key is None:
        raise InvalidArgument("CA public key must not be None")
    if not isinstance(public_key, _PUBLIC_KEY_CLASSES):
        raise InvalidArgument(f"CA public key must be a public key, got {type(public_key).__name__}")


# ─────────────────────── Authority variants ───────────────────────


@dataclass(frozen=True, slots=True)
class TrustedCertificate:
    """Authority identified by its own (usually self-signed) X.509 certificate."""

    certificate: x509.Certificate

    def __post_init__(self) -> None:
        if self.certificate is None:
            raise InvalidArgument("Trusted certificate must not be None")
        if not isinstance(self.certificate, x509.Certificate):
            raise InvalidArgument(
                f"Trusted certificate must be an X.509 certificate, got {type(self.certificate).__name__}"
            )


@dataclass(frozen=True, slots=True)
class NameAndKey:
    """
    Authority identified by distinguished-name text and a public key.

    `ca_name` is kept exactly as supplied; `principal` is parsed from it.
    """

    ca_name: str
    public_key: PublicKey
    principal: x509.Name = field(init=False)

    def __post_init__(self) -> None:
        if self.ca_name is None:
            raise InvalidArgument("CA name must not be None")
        if not isinstance(self.ca_name, str):
            raise InvalidArgument(f"CA name must be a string, got {type(self.ca_name).__name__}")
        _require_public_key(self.public_key)
        # An empty string parses as the empty DN, which cannot name an authority
        if len(self.ca_name) == 0:
            raise InvalidArgument("CA name must not be empty")
        object.__setattr__(self, "principal", parse_distinguished_name(self.ca_name))


@dataclass(frozen=True, slots=True)
class PrincipalAndKey:
    """
    Authority identified by a structured principal and a public key.

    `ca_name` is derived as the principal's RFC 4514 string.
    """

    principal: x509.Name
    public_key: PublicKey
    ca_name: str = field(init=False)

    def __post_init__(self) -> None:
        if self.principal is None:
            raise InvalidArgument("CA principal must not be None")
        if not isinstance(self.principal, x509.Name):
            raise InvalidArgument(f"CA principal must be an x509.Name, got {type(self.principal).__name__}")
        _require_public_key(self.public_key)
        object.__setattr__(self, "ca_name", self.principal.rfc4514_string())


type Authority = TrustedCertificate | NameAndKey | PrincipalAndKey


# ─────────────────────── Diagnostic helpers ───────────────────────


def _describe_certificate(certificate: x509.Certificate) -> str:
    return (
        f"subject={certificate.subject.rfc4514_string()}, "
        f"issuer={certificate.issuer.rfc4514_string()}, "
        f"serial={hex(certificate.serial_number)}"
    )


def _describe_public_key(public_key: PublicKey) -> str:
    # Concrete classes are Rust-backed (e.g. ECPublicKey); report the public ABC name
    description = next(label for cls, label in _PUBLIC_KEY_LABELS if isinstance(public_key, cls))
    curve = getattr(public_key, "curve", None)
    if curve is not None:
        description += f" ({curve.name})"
    key_size = getattr(public_key, "key_size", None)
    if key_size is not None:
        description += f", {key_size} bits"
    return description


# ─────────────────────── TrustAnchor ───────────────────────


@dataclass(frozen=True, slots=True, eq=False)
class TrustAnchor:
    """
    A most-trusted certification authority, optionally name-constrained.

    Prefer the factories (from_certificate, from_name, from_principal); the
    constructor takes an already-built authority variant.

    Equality is identity, as for any trust store entry: two anchors built from
    the same inputs are distinct objects.
    """

    authority: Authority
    name_constraints_der: InitVar[BytesLike | None] = None
    decoder: InitVar[NameConstraintsDecoder | None] = None
    _name_constraints: bytes | None = field(init=False, default=None, repr=False)

    def __post_init__(
        self,
        name_constraints_der: BytesLike | None,
        decoder: NameConstraintsDecoder | None,
    ) -> None:
        if not isinstance(self.authority, (TrustedCertificate, NameAndKey, PrincipalAndKey)):
            raise InvalidArgument(f"Unsupported authority type: {type(self.authority).__name__}")
        if name_constraints_der is None:
            return

        if not isinstance(name_constraints_der, (bytes, bytearray, memoryview)):
            raise InvalidArgument(
                f"Name constraints must be bytes-like, got {type(name_constraints_der).__name__}"
            )
        owned = bytes(name_constraints_der)
        _validate_name_constraints(owned, decoder if decoder is not None else _default_decoder())
        object.__setattr__(self, "_name_constraints", owned)

    # ─────────────────────── Factories ───────────────────────

    @classmethod
    def from_certificate(
        cls,
        certificate: x509.Certificate,
        name_constraints: BytesLike | None = None,
        *,
        decoder: NameConstraintsDecoder | None = None,
    ) -> TrustAnchor:
        """Anchor identified by a trusted CA certificate."""
        return cls(TrustedCertificate(certificate), name_constraints, decoder)

    @classmethod
    def from_name(
        cls,
        ca_name: str,
        ca_public_key: PublicKey,
        name_constraints: BytesLike | None = None,
        *,
        decoder: NameConstraintsDecoder | None = None,
    ) -> TrustAnchor:
        """
        Anchor identified by RFC 2253 distinguished-name text and a public key.

        Raises InvalidArgument if the name is None, empty or not a valid
        distinguished name, or if the key is None.
        """
        return cls(NameAndKey(ca_name, ca_public_key), name_constraints, decoder)

    @classmethod
    def from_principal(
        cls,
        principal: x509.Name,
        ca_public_key: PublicKey,
        name_constraints: BytesLike | None = None,
        *,
        decoder: NameConstraintsDecoder | None = None,
    ) -> TrustAnchor:
        """Anchor identified by a structured principal and a public key."""
        return cls(PrincipalAndKey(principal, ca_public_key), name_constraints, decoder)

    # ─────────────────────── Accessors ───────────────────────

    @property
    def name_constraints(self) -> bytearray | None:
        """A fresh, caller-owned copy of the NameConstraints DER, or None."""
        if self._name_constraints is None:
            return None
        return bytearray(self._name_constraints)

    @property
    def trusted_cert(self) -> x509.Certificate | None:
        match self.authority:
            case TrustedCertificate(certificate=certificate):
                return certificate
            case _:
                return None

    @property
    def ca(self) -> x509.Name | None:
        """The authority's principal, or None for certificate anchors."""
        match self.authority:
            case NameAndKey(principal=principal) | PrincipalAndKey(principal=principal):
                return principal
            case _:
                return None

    @property
    def ca_name(self) -> str | None:
        match self.authority:
            case NameAndKey(ca_name=ca_name) | PrincipalAndKey(ca_name=ca_name):
                return ca_name
            case _:
                return None

    @property
    def ca_public_key(self) -> PublicKey | None:
        match self.authority:
            case NameAndKey(public_key=public_key) | PrincipalAndKey(public_key=public_key):
                return public_key
            case _:
                return None

    # ─────────────────────── Diagnostics ───────────────────────

    def __str__(self) -> str:
        """Multi-line summary for logs and debugging. Not a stable format."""
        parts = ["TrustAnchor: [\n"]
        if (certificate := self.trusted_cert) is not None:
            parts.append(f"Trusted CA certificate: {_describe_certificate(certificate)}\n")
        if (principal := self.ca) is not None:
            parts.append(f"Trusted CA Name: {principal.rfc4514_string()}\n")
        if (public_key := self.ca_public_key) is not None:
            parts.append(f"Trusted CA Public Key: {_describe_public_key(public_key)}\n")
        if self._name_constraints is not None:
            parts.append("Name Constraints:\n")
            parts.append(format_bytes(self._name_constraints, "    "))
        parts.append("\n]")
        return "".join(parts)


def _validate_name_constraints(encoded: bytes, decoder: NameConstraintsDecoder) -> None:
    """Decode once for well-formedness; the decoded value is discarded."""
    try:
        decoder.decode(encoded)
    except DecodeError as e:
        raise InvalidArgument(str(e)) from e


def _default_decoder() -> NameConstraintsDecoder:
    """Shared asn1crypto decoder, resolved on first use so the domain does not import adapters."""
    from trust_anchor.adapters.name_constraints import DEFAULT_DECODER

    return DEFAULT_DECODER
