"""keytool client for Java trust-store operations."""

import logging
import subprocess
from pathlib import Path

from .models import ProbeResult, TrustStoreStatus

logger = logging.getLogger(__name__)

# keytool exits 1 for a missing alias and for real failures alike, so the
# message is the only way to tell them apart. {alias} is filled in per probe.
ALIAS_ABSENT_MESSAGES = ("Alias <{alias}> does not exist",)


def output_of(completed: subprocess.CompletedProcess) -> str:
    """Join the non-empty stdout and stderr of a keytool run."""
    parts = [completed.stdout or "", completed.stderr or ""]
    return "\n".join(part.strip() for part in parts if part and part.strip())


class KeytoolClient:
    """Runs the keytool binary of a Java installation."""

    def __init__(self, java_path: str | Path, timeout: float | None = None) -> None:
        """Initialize keytool client.

        Args:
            java_path: Java installation directory (JAVA_HOME)
            timeout: Seconds to wait for each keytool call, None waits forever
        """
        self.java_path = Path(java_path)
        self.timeout = timeout

    @property
    def keytool_path(self) -> Path:
        return self.java_path / "bin" / "keytool"

    def run(self, args: list[str]) -> subprocess.CompletedProcess:
        """Run keytool with the given arguments.

        Returns:
            Completed process with text stdout/stderr; a non-zero exit does not raise

        Raises:
            OSError: If keytool cannot be started
            subprocess.TimeoutExpired: If keytool does not finish within timeout
        """
        cmd = [str(self.keytool_path), *args]
        logger.debug("Running %s %s", cmd[0], args[0] if args else "")
        return subprocess.run(
            cmd,
            check=False,
            capture_output=True,
            text=True,
            timeout=self.timeout,
        )

    def list_alias(self, args: list[str], alias: str) -> ProbeResult:
        """Probe the trust store for an alias with `keytool -list`.

        Args:
            args: Common keytool arguments (store password, alias, target store)
            alias: Alias being probed, used to match the absent-alias message

        Returns:
            ProbeResult with PRESENT on exit code 0, ABSENT when the output matches
            a known absent-alias message, PROBE_ERROR otherwise
        """
        try:
            completed = self.run(["-list", *args])
        except subprocess.TimeoutExpired:
            return ProbeResult(
                status=TrustStoreStatus.PROBE_ERROR,
                returncode=None,
                message=f"keytool timed out after {self.timeout}s",
            )
        except OSError as e:
            return ProbeResult(
                status=TrustStoreStatus.PROBE_ERROR,
                returncode=None,
                message=str(e),
            )

        message = output_of(completed)
        if completed.returncode == 0:
            return ProbeResult(TrustStoreStatus.PRESENT, completed.returncode, message)

        markers = [template.format(alias=alias).lower() for template in ALIAS_ABSENT_MESSAGES]
        if any(marker in message.lower() for marker in markers):
            return ProbeResult(TrustStoreStatus.ABSENT, completed.returncode, message)

        return ProbeResult(TrustStoreStatus.PROBE_ERROR, completed.returncode, message)

    def import_certificate(
        self, args: list[str], cert_path: Path
    ) -> subprocess.CompletedProcess:
        """Import a certificate file into the trust store with `keytool -importcert`.

        Raises:
            OSError: If keytool cannot be started
            subprocess.TimeoutExpired: If keytool does not finish within timeout
        """
        return self.run(["-importcert", *args, "-file", str(cert_path)])
