"""Request and result models for Maven mTLS provisioning."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

REQUIRED_FIELDS = ("ca_cert", "keystore", "password", "settings", "security_settings")


@dataclass(frozen=True)
class ProvisioningRequest:
    """Inputs for one provisioning run.

    Content fields hold base64 text as received from the CI secrets. They are
    excluded from repr so the request can be logged safely.
    """

    ca_cert: str = field(repr=False)
    keystore: str = field(repr=False)
    password: str = field(repr=False)
    settings: str = field(repr=False)
    security_settings: str = field(repr=False)
    java_path: str = ""
    java_version: str = ""


class TrustStoreStatus(Enum):
    """Outcome of probing the trust store for the certificate alias."""

    PRESENT = "present"
    ABSENT = "absent"
    PROBE_ERROR = "probe_error"


class SyncOutcome(Enum):
    """Terminal state of a trust-store synchronization."""

    PRESENT = "present"
    IMPORTED = "imported"
    IMPORT_FAILED = "import_failed"


@dataclass
class ProbeResult:
    """Result of `keytool -list` for the certificate alias.

    returncode is None when keytool never produced an exit status
    (missing binary, OS error, timeout).
    """

    status: TrustStoreStatus
    returncode: int | None
    message: str = ""


@dataclass
class SyncResult:
    """Result from trust-store synchronization."""

    outcome: SyncOutcome
    probe: ProbeResult
    message: str = ""


@dataclass
class ProvisioningResult:
    """Result from a provisioning run.

    Contains the written file paths and the MAVEN_OPTS value for the caller
    to export.
    """

    settings_path: Path
    security_settings_path: Path
    ca_cert_path: Path
    keystore_path: Path
    maven_opts: str = field(repr=False)
    trust_store: SyncResult
