"""Exceptions raised during Maven mTLS provisioning."""

from .models import ProbeResult


class ProvisioningError(Exception):
    """Base class for provisioning failures."""


class CredentialDecodeError(ProvisioningError, ValueError):
    """Raised when a credential input cannot be decoded."""

    def __init__(self, field_name: str, reason: str = "is not valid base64") -> None:
        super().__init__(f"{field_name} {reason}")
        self.field_name = field_name


class TrustStoreProbeError(ProvisioningError):
    """Raised under the fail-fast policy when keytool cannot probe the trust store."""

    def __init__(self, probe: ProbeResult) -> None:
        super().__init__(
            f"keytool probe failed (exit code {probe.returncode}): {probe.message}"
        )
        self.probe = probe


class JavaPathMissingError(ProvisioningError):
    """Raised when no Java installation is configured for the trust-store step."""

    def __init__(self) -> None:
        super().__init__("java_path is empty; set the java-path input or JAVA_HOME")
