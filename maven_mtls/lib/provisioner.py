"""Maven provisioner for mTLS access from CI jobs."""

import logging
from pathlib import Path

from .config import ProvisionerConfig
from .credential_writer import CredentialWriter
from .exceptions import JavaPathMissingError
from .keytool_client import KeytoolClient
from .models import ProvisioningRequest, ProvisioningResult
from .truststore import TrustStoreSynchronizer

logger = logging.getLogger(__name__)


class MavenProvisioner:
    """Writes Maven credentials and syncs the CA certificate into the Java trust store."""

    def __init__(
        self,
        config: ProvisionerConfig,
        keytool: KeytoolClient | None = None,
    ) -> None:
        """Initialize Maven provisioner.

        Args:
            config: Provisioner configuration
            keytool: keytool client; built from the request's java_path when None
        """
        self.config = config
        self.keytool = keytool
        self.writer = CredentialWriter(config)

    def provision(
        self,
        request: ProvisioningRequest,
        settings_dir: str | Path | None = None,
    ) -> ProvisioningResult:
        """Write credential files and make sure the CA certificate is trusted.

        Steps, in order:
            - settings.xml and settings-security.xml in the settings directory
            - rootca.crt and certificate.p12 in <home>/certs
            - MAVEN_OPTS value for the keystore (returned, not exported)
            - keytool probe and, if needed, import of the CA certificate

        Args:
            request: Validated provisioning request
            settings_dir: Settings directory override (default: <home>/.m2)

        Returns:
            ProvisioningResult with file paths, MAVEN_OPTS and trust-store outcome

        Raises:
            JavaPathMissingError: If request.java_path is empty
            OSError: If a file cannot be written
            CredentialDecodeError: If an input cannot be decoded
            TrustStoreProbeError: If the probe failed under the fail-fast policy
        """
        if not request.java_path.strip():
            raise JavaPathMissingError()

        resolved_dir = self.writer.resolve_settings_dir(settings_dir)
        settings_path, security_settings_path = self.writer.write_settings(
            request, resolved_dir
        )
        ca_cert_path = self.writer.write_ca_certificate(request)
        keystore_path = self.writer.write_keystore(request)
        maven_opts = self.writer.build_maven_opts(keystore_path, request.password)

        keytool = self.keytool or KeytoolClient(
            request.java_path, timeout=self.config.keytool_timeout
        )
        synchronizer = TrustStoreSynchronizer(keytool, self.config)
        trust_store = synchronizer.sync(ca_cert_path, request.java_path, request.java_version)

        logger.debug("added maven opts for MTLS access")

        return ProvisioningResult(
            settings_path=settings_path,
            security_settings_path=security_settings_path,
            ca_cert_path=ca_cert_path,
            keystore_path=keystore_path,
            maven_opts=maven_opts,
            trust_store=trust_store,
        )
