"""Provisioner configuration dataclasses."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class ProbePolicy(Enum):
    """What to do when the trust-store probe fails for an unknown reason."""

    FAIL_OPEN = "fail-open"
    FAIL_FAST = "fail-fast"


@dataclass
class ProvisionerConfig:
    """Paths, keytool constants and policies for Maven mTLS provisioning."""

    home_dir: Path = field(default_factory=Path.home)
    settings_subdir: str = ".m2"
    certs_subdir: str = "certs"
    settings_filename: str = "settings.xml"
    security_settings_filename: str = "settings-security.xml"
    ca_cert_filename: str = "rootca.crt"
    keystore_filename: str = "certificate.p12"
    keystore_type: str = "pkcs12"
    truststore_password: str = "changeit"
    cert_alias: str = "mycert"
    probe_policy: ProbePolicy = ProbePolicy.FAIL_OPEN
    keytool_timeout: float | None = None
    decode_text_inputs: bool = True
    verify_material: bool = True
    secret_file_mode: int = 0o600
    maven_opts_variable: str = "MAVEN_OPTS"

    @property
    def default_settings_dir(self) -> Path:
        """Maven settings directory used when no override is supplied."""
        return self.home_dir / self.settings_subdir

    @property
    def certs_dir(self) -> Path:
        """Directory holding the CA certificate and client keystore."""
        return self.home_dir / self.certs_subdir

    @property
    def ca_cert_path(self) -> Path:
        return self.certs_dir / self.ca_cert_filename

    @property
    def keystore_path(self) -> Path:
        return self.certs_dir / self.keystore_filename
