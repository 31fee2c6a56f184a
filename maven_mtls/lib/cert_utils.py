"""Certificate utility functions for decoding and inspecting credential material."""

import base64
import binascii

from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.serialization import pkcs12

from .exceptions import CredentialDecodeError


def decode_base64(value: str, field_name: str) -> bytes:
    """Decode base64 text as found in CI secrets.

    Line breaks and other whitespace are ignored and missing padding is
    restored, so wrapped output from `base64` decodes as-is.

    Raises:
        CredentialDecodeError: If value contains non-base64 characters
    """
    compact = "".join(value.split())
    compact += "=" * (-len(compact) % 4)
    try:
        return base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as e:
        raise CredentialDecodeError(field_name) from e


def load_ca_certificate(data: bytes) -> x509.Certificate:
    """Load CA certificate from PEM bytes, falling back to DER."""
    if b"-----BEGIN" in data:
        return x509.load_pem_x509_certificate(data)
    return x509.load_der_x509_certificate(data)


def get_certificate_fingerprint(cert: x509.Certificate) -> str:
    """Return SHA-256 fingerprint as hex with colons, the way keytool prints it."""
    digest = cert.fingerprint(hashes.SHA256())
    return ":".join(f"{byte:02X}" for byte in digest)


def load_keystore(data: bytes, password: str) -> pkcs12.PKCS12KeyAndCertificates:
    """Open a PKCS#12 keystore with the given password.

    Raises:
        ValueError: If the keystore is malformed, the password is wrong
            or the keystore holds no private key
    """
    keystore = pkcs12.load_pkcs12(data, password.encode("utf-8"))
    if keystore.key is None:
        raise ValueError("keystore contains no private key")
    return keystore
