"""Writes Maven settings, CA certificate and client keystore to disk."""

import logging
import os
from pathlib import Path

from cryptography.exceptions import UnsupportedAlgorithm

from .cert_utils import (
    decode_base64,
    get_certificate_fingerprint,
    load_ca_certificate,
    load_keystore,
)
from .config import ProvisionerConfig
from .exceptions import CredentialDecodeError
from .models import ProvisioningRequest

logger = logging.getLogger(__name__)


class CredentialWriter:
    """Materializes configuration and secret material for Maven."""

    def __init__(self, config: ProvisionerConfig) -> None:
        """Initialize credential writer.

        Args:
            config: Provisioner configuration with target paths and file modes
        """
        self.config = config

    def resolve_settings_dir(self, override: str | Path | None = None) -> Path:
        """Return the Maven settings directory, creating it if missing.

        Args:
            override: Explicit settings directory; empty or None selects <home>/.m2

        Returns:
            Path to the settings directory
        """
        settings_dir = Path(override) if override else self.config.default_settings_dir
        settings_dir.mkdir(parents=True, exist_ok=True)
        return settings_dir

    def write_settings(
        self, request: ProvisioningRequest, settings_dir: Path
    ) -> tuple[Path, Path]:
        """Write settings.xml and settings-security.xml, overwriting existing files.

        Returns:
            Tuple of (settings_path, security_settings_path)

        Raises:
            CredentialDecodeError: If content is not valid base64 or UTF-8
            OSError: If a file cannot be written
        """
        settings_path = settings_dir / self.config.settings_filename
        security_settings_path = settings_dir / self.config.security_settings_filename

        settings_path.write_text(
            self._text_content(request.settings, "settings"), encoding="utf-8"
        )
        self._write_secret(
            security_settings_path,
            self._text_content(request.security_settings, "security_settings").encode("utf-8"),
        )

        logger.info("Wrote Maven settings to %s", settings_dir)
        return settings_path, security_settings_path

    def write_ca_certificate(self, request: ProvisioningRequest) -> Path:
        """Create the certificates directory and write the CA certificate.

        Returns:
            Path to the written CA certificate file
        """
        certs_dir = self.config.certs_dir
        certs_dir.mkdir(parents=True, exist_ok=True)

        if self.config.decode_text_inputs:
            ca_bytes = decode_base64(request.ca_cert, "ca_cert")
        else:
            ca_bytes = request.ca_cert.encode("utf-8")

        ca_cert_path = self.config.ca_cert_path
        ca_cert_path.write_bytes(ca_bytes)

        if self.config.verify_material:
            self._inspect_ca_certificate(ca_bytes)

        logger.info("Wrote CA certificate to %s", ca_cert_path)
        return ca_cert_path

    def write_keystore(self, request: ProvisioningRequest) -> Path:
        """Decode the base64 keystore and write it as a binary PKCS#12 file.

        Returns:
            Path to the written keystore file
        """
        keystore_bytes = decode_base64(request.keystore, "keystore")

        keystore_path = self.config.keystore_path
        keystore_path.parent.mkdir(parents=True, exist_ok=True)
        self._write_secret(keystore_path, keystore_bytes)

        if self.config.verify_material:
            self._inspect_keystore(keystore_bytes, request.password)

        logger.info("Wrote client keystore to %s", keystore_path)
        return keystore_path

    def build_maven_opts(self, keystore_path: Path, password: str) -> str:
        """Build JVM flags pointing at the client keystore.

        The value carries the keystore password in plain text; treat it as a secret.
        """
        return (
            f"-Djavax.net.ssl.keyStore={keystore_path.resolve()} "
            f"-Djavax.net.ssl.keyStoreType={self.config.keystore_type} "
            f"-Djavax.net.ssl.keyStorePassword={password}"
        )

    def _text_content(self, value: str, field_name: str) -> str:
        if not self.config.decode_text_inputs:
            return value
        try:
            return decode_base64(value, field_name).decode("utf-8")
        except UnicodeDecodeError as e:
            raise CredentialDecodeError(field_name, "is not valid UTF-8 text") from e

    def _write_secret(self, path: Path, data: bytes) -> None:
        """Write data to path, restricting permissions first on POSIX."""
        if os.name == "posix":
            path.touch(mode=self.config.secret_file_mode, exist_ok=True)
            path.chmod(self.config.secret_file_mode)
        path.write_bytes(data)

    def _inspect_ca_certificate(self, data: bytes) -> None:
        try:
            cert = load_ca_certificate(data)
        except (ValueError, UnsupportedAlgorithm) as e:
            logger.warning("CA certificate could not be parsed: %s", e)
            return
        logger.info(
            "CA certificate subject=%s sha256=%s",
            cert.subject.rfc4514_string(),
            get_certificate_fingerprint(cert),
        )

    def _inspect_keystore(self, data: bytes, password: str) -> None:
        try:
            keystore = load_keystore(data, password)
        except (ValueError, UnsupportedAlgorithm) as e:
            logger.warning("Keystore could not be opened with the supplied password: %s", e)
            return
        if keystore.cert is not None:
            logger.info(
                "Keystore client certificate subject=%s",
                keystore.cert.certificate.subject.rfc4514_string(),
            )
