"""
Application entry point — builds a trust anchor from configured files.

Composition root: reads settings, loads the certificate or name/key inputs
through the PEM loader adapter, builds the TrustAnchor (which validates any
name constraints with the asn1crypto decoder), and prints its diagnostic
summary.

Responsibilities:
  1. Load and validate configuration from environment
  2. Configure structlog
  3. Load anchor inputs from disk
  4. Build the TrustAnchor and print it
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import structlog

from trust_anchor import __version__
from trust_anchor.adapters.name_constraints import Asn1NameConstraintsDecoder
from trust_anchor.adapters.pem_loader import load_certificate, load_name_constraints, load_public_key
from trust_anchor.config import AnchorMode, AnchorSettings, AppSettings
from trust_anchor.domain.models import TrustAnchor
from trust_anchor.errors import InvalidArgument, TrustAnchorError


def configure_structlog(log_level: str = "INFO") -> None:
    """
    Configure structlog for structured logging.

    Colored, human-readable console output on stderr, so stdout carries
    only the anchor summary.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def _read(setting: str, path: Path | None) -> bytes:
    assert path is not None  # guaranteed by AnchorSettings.check_identity_mode
    try:
        return path.read_bytes()
    except OSError as e:
        raise InvalidArgument(f"Cannot read {setting} {path}: {e}") from e


def create_trust_anchor(settings: AnchorSettings) -> TrustAnchor:
    """
    Build the configured TrustAnchor.

    Raises InvalidArgument if a file cannot be read or loaded, or if the
    anchor itself rejects its inputs.
    """
    name_constraints = None
    if settings.name_constraints_path is not None:
        name_constraints = load_name_constraints(
            _read("ANCHOR__NAME_CONSTRAINTS_PATH", settings.name_constraints_path)
        )

    decoder = Asn1NameConstraintsDecoder()
    if settings.mode is AnchorMode.CERTIFICATE:
        certificate = load_certificate(_read("ANCHOR__CERTIFICATE_PATH", settings.certificate_path))
        return TrustAnchor.from_certificate(certificate, name_constraints, decoder=decoder)

    public_key = load_public_key(_read("ANCHOR__PUBLIC_KEY_PATH", settings.public_key_path))
    return TrustAnchor.from_name(
        settings.ca_name,  # type: ignore[arg-type]
        public_key,
        name_constraints,
        decoder=decoder,
    )


def main() -> None:
    """Load settings, build the anchor and print its summary."""
    try:
        settings = AppSettings()  # type: ignore[call-arg]
    except Exception as e:
        print(f"FATAL: Configuration error — {e}", file=sys.stderr)  # noqa: T201
        sys.exit(1)

    configure_structlog(settings.log_level)
    log = structlog.get_logger()

    log.info(
        "app.starting",
        version=__version__,
        log_level=settings.log_level,
        mode=settings.anchor.mode.value,
    )

    try:
        anchor = create_trust_anchor(settings.anchor)
    except TrustAnchorError as e:
        log.error("anchor.invalid", error=str(e))
        sys.exit(1)

    constraints = anchor.name_constraints
    log.info(
        "anchor.built",
        mode=settings.anchor.mode.value,
        ca_name=anchor.ca_name,
        name_constraints_size=len(constraints) if constraints is not None else 0,
    )
    print(anchor)  # noqa: T201


if __name__ == "__main__":
    main()
