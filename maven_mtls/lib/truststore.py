"""Trust-store synchronization: make sure the CA certificate is trusted by Java."""

import logging
import subprocess
from pathlib import Path

from .config import ProbePolicy, ProvisionerConfig
from .exceptions import TrustStoreProbeError
from .keytool_client import KeytoolClient, output_of
from .models import ProbeResult, SyncOutcome, SyncResult, TrustStoreStatus

logger = logging.getLogger(__name__)

LEGACY_JAVA_VERSION = "8"


def legacy_cacerts_path(java_path: str | Path) -> str:
    """Return the Java 8 cacerts path under a Java installation."""
    return f"{java_path}/jre/lib/security/cacerts"


def build_keytool_args(
    config: ProvisionerConfig, java_path: str | Path, java_version: str
) -> list[str]:
    """Build keytool arguments shared by the probe and the import.

    Java 8 keytool has no -cacerts option, so its trust store is addressed by path.
    """
    args = [
        "-storepass",
        config.truststore_password,
        "-noprompt",
        "-alias",
        config.cert_alias,
    ]
    if java_version == LEGACY_JAVA_VERSION:
        args.extend(["-keystore", legacy_cacerts_path(java_path)])
    else:
        args.append("-cacerts")
    return args


class TrustStoreSynchronizer:
    """Imports the CA certificate into the Java trust store unless already present."""

    def __init__(self, keytool: KeytoolClient, config: ProvisionerConfig) -> None:
        """Initialize trust-store synchronizer.

        Args:
            keytool: keytool client for the target Java installation
            config: Provisioner configuration with alias, store password and probe policy
        """
        self.keytool = keytool
        self.config = config

    def probe(self, args: list[str]) -> ProbeResult:
        """Probe the trust store and apply the probe policy.

        Raises:
            TrustStoreProbeError: If the probe failed and the policy is FAIL_FAST
        """
        probe = self.keytool.list_alias(args, self.config.cert_alias)

        if probe.status is TrustStoreStatus.PROBE_ERROR:
            if self.config.probe_policy is ProbePolicy.FAIL_FAST:
                raise TrustStoreProbeError(probe)
            logger.info(
                "keytool probe failed (%s), treating alias %s as absent",
                probe.message,
                self.config.cert_alias,
            )
        elif probe.status is TrustStoreStatus.ABSENT:
            logger.info(
                "Alias %s not in trust store, this is expected on first run",
                self.config.cert_alias,
            )

        return probe

    def sync(self, ca_cert_path: Path, java_path: str | Path, java_version: str) -> SyncResult:
        """Ensure the CA certificate is in the trust store exactly once.

        Import failures are logged and reported as IMPORT_FAILED; they never raise.

        Args:
            ca_cert_path: CA certificate file to import
            java_path: Java installation directory
            java_version: Java major version, "8" selects the legacy cacerts path

        Returns:
            SyncResult with the terminal outcome and the probe result

        Raises:
            TrustStoreProbeError: If the probe failed and the policy is FAIL_FAST
        """
        args = build_keytool_args(self.config, java_path, java_version)
        probe = self.probe(args)

        if probe.status is TrustStoreStatus.PRESENT:
            logger.info("Alias %s already in trust store", self.config.cert_alias)
            return SyncResult(outcome=SyncOutcome.PRESENT, probe=probe)

        logger.info("Importing CA certificate as alias %s", self.config.cert_alias)
        try:
            completed = self.keytool.import_certificate(args, ca_cert_path)
        except subprocess.TimeoutExpired:
            message = f"keytool timed out after {self.keytool.timeout}s"
            logger.error("keytool import failed: %s", message)
            return SyncResult(outcome=SyncOutcome.IMPORT_FAILED, probe=probe, message=message)
        except OSError as e:
            logger.error("keytool import failed: %s", e)
            return SyncResult(outcome=SyncOutcome.IMPORT_FAILED, probe=probe, message=str(e))

        output = output_of(completed)
        if completed.returncode != 0:
            logger.error(
                "keytool import failed with exit code %d: %s", completed.returncode, output
            )
            return SyncResult(outcome=SyncOutcome.IMPORT_FAILED, probe=probe, message=output)

        return SyncResult(outcome=SyncOutcome.IMPORTED, probe=probe, message=output)
