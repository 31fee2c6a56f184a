"""Test fixtures for maven_mtls tests."""

import base64
import logging
import subprocess
from collections.abc import Callable, Generator
from datetime import UTC, datetime, timedelta
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import pkcs12
from cryptography.x509.oid import NameOID

from maven_mtls.lib.config import ProvisionerConfig
from maven_mtls.lib.models import ProvisioningRequest


def _b64(data: bytes | str) -> str:
    if isinstance(data, str):
        data = data.encode("utf-8")
    return base64.b64encode(data).decode("ascii")


def _self_signed(common_name: str, key: ec.EllipticCurvePrivateKey, ca: bool) -> x509.Certificate:
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
    now = datetime.now(UTC)
    return (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now)
        .not_valid_after(now + timedelta(days=1))
        .add_extension(x509.BasicConstraints(ca=ca, path_length=None), critical=True)
        .sign(key, hashes.SHA256())
    )


@pytest.fixture
def encode_b64() -> Callable[[bytes | str], str]:
    """Return encoder producing base64 text as stored in CI secrets."""
    return _b64


@pytest.fixture
def keytool_result() -> Callable[..., subprocess.CompletedProcess]:
    """Return factory for finished keytool process results."""

    def _completed(
        returncode: int = 0, stdout: str = "", stderr: str = ""
    ) -> subprocess.CompletedProcess:
        return subprocess.CompletedProcess(
            args=[], returncode=returncode, stdout=stdout, stderr=stderr
        )

    return _completed


@pytest.fixture
def mock_run() -> Generator[MagicMock]:
    """Patch subprocess.run as seen by the keytool client."""
    with patch("maven_mtls.lib.keytool_client.subprocess.run") as mock:
        yield mock


@pytest.fixture
def keystore_password() -> str:
    return "s3cret-pass"


@pytest.fixture
def settings_xml() -> str:
    """Return Maven settings.xml content."""
    return """<settings>
  <servers>
    <server><id>internal</id></server>
  </servers>
</settings>
"""


@pytest.fixture
def security_settings_xml() -> str:
    """Return Maven settings-security.xml content."""
    return """<settingsSecurity>
  <master>{masterpassword}</master>
</settingsSecurity>
"""


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    """Return temporary home directory for written credentials."""
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def provisioner_config(home_dir: Path) -> ProvisionerConfig:
    """Return provisioner configuration rooted at the temporary home directory."""
    return ProvisionerConfig(home_dir=home_dir)


@pytest.fixture
def ca_cert() -> x509.Certificate:
    """Generate self-signed CA certificate."""
    return _self_signed("Test Root CA", ec.generate_private_key(ec.SECP256R1()), ca=True)


@pytest.fixture
def ca_cert_pem(ca_cert: x509.Certificate) -> bytes:
    return ca_cert.public_bytes(serialization.Encoding.PEM)


@pytest.fixture
def keystore_bytes(keystore_password: str) -> bytes:
    """Generate PKCS#12 keystore with a client key and certificate."""
    key = ec.generate_private_key(ec.SECP256R1())
    cert = _self_signed("test-client-001", key, ca=False)
    return pkcs12.serialize_key_and_certificates(
        name=b"client",
        key=key,
        cert=cert,
        cas=None,
        encryption_algorithm=serialization.BestAvailableEncryption(
            keystore_password.encode("utf-8")
        ),
    )


@pytest.fixture
def provisioning_request(
    ca_cert_pem: bytes,
    keystore_bytes: bytes,
    keystore_password: str,
    settings_xml: str,
    security_settings_xml: str,
) -> ProvisioningRequest:
    """Return well-formed provisioning request for Java 17."""
    return ProvisioningRequest(
        ca_cert=_b64(ca_cert_pem),
        keystore=_b64(keystore_bytes),
        password=keystore_password,
        settings=_b64(settings_xml),
        security_settings=_b64(security_settings_xml),
        java_path="/opt/java/17",
        java_version="17",
    )


@pytest.fixture
def propagate_logs() -> Generator[None]:
    """Let maven_mtls log records reach caplog while the test runs."""
    logger = logging.getLogger("maven_mtls")
    previous = logger.propagate
    logger.propagate = True
    yield
    logger.propagate = previous
