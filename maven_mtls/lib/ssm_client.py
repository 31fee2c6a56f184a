"""SSM client for reading Maven mTLS credentials from AWS Parameter Store."""

import boto3
from botocore.exceptions import ClientError

from .models import ProvisioningRequest

PARAMETER_NAMES = {
    "ca_cert": "ca-cert",
    "keystore": "keystore",
    "password": "password",
    "settings": "settings",
    "security_settings": "security-settings",
}


class SSMClient:
    """SSM client for reading provisioning credentials (writes handled elsewhere)."""

    def __init__(self, region: str = "eu-west-2") -> None:
        """Initialize SSM client.

        Args:
            region: AWS region for SSM client
        """
        self.client = boto3.client("ssm", region_name=region)

    def get_provisioning_request(
        self, prefix: str, java_path: str, java_version: str
    ) -> ProvisioningRequest:
        """Fetch the credential fields of a provisioning request from SSM.

        Parameters are read as <prefix>/ca-cert, <prefix>/keystore, <prefix>/password,
        <prefix>/settings and <prefix>/security-settings, with decryption.

        Args:
            prefix: Parameter path prefix (e.g., '/ci/maven-mtls')
            java_path: Java installation directory
            java_version: Java major version

        Returns:
            ProvisioningRequest populated from SSM values

        Raises:
            ValueError: If any parameter is not found
        """
        base = "/" + prefix.strip("/")
        paths = {field: f"{base}/{name}" for field, name in PARAMETER_NAMES.items()}

        try:
            response = self.client.get_parameters(
                Names=list(paths.values()), WithDecryption=True
            )
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "")
            if error_code == "ParameterNotFound":
                raise ValueError(
                    f"Provisioning parameters not found in SSM. "
                    f"Paths checked: {', '.join(paths.values())}"
                ) from e
            raise

        invalid = response.get("InvalidParameters", [])
        if invalid:
            raise ValueError(
                f"Provisioning parameters not found in SSM. Paths checked: {', '.join(invalid)}"
            )

        values = {p["Name"]: p["Value"] for p in response.get("Parameters", [])}

        return ProvisioningRequest(
            **{field: values.get(path, "") for field, path in paths.items()},
            java_path=java_path,
            java_version=java_version,
        )
