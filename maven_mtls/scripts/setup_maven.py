#!/usr/bin/env python3
"""Set up Maven mTLS access for a CI job."""

import argparse
import sys
from dataclasses import replace

from botocore.exceptions import BotoCoreError, ClientError

from maven_mtls.lib.action_inputs import (
    INPUT_SETTINGS_PATH,
    export_variable,
    mask_value,
    read_input,
    request_from_inputs,
)
from maven_mtls.lib.config import ProbePolicy, ProvisionerConfig
from maven_mtls.lib.exceptions import ProvisioningError
from maven_mtls.lib.logging_config import LOGGER
from maven_mtls.lib.models import ProvisioningRequest, SyncOutcome
from maven_mtls.lib.provisioner import MavenProvisioner
from maven_mtls.lib.ssm_client import SSMClient
from maven_mtls.lib.validator import missing_fields


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Write Maven mTLS credentials and trust the CA certificate in Java"
    )
    parser.add_argument(
        "--settings-path",
        default=None,
        help="Maven settings directory (default: settings-path input, then ~/.m2)",
    )
    parser.add_argument(
        "--java-path",
        default=None,
        help="Java installation directory (default: java-path input, then JAVA_HOME)",
    )
    parser.add_argument(
        "--java-version",
        default=None,
        help="Java major version, e.g. 8 or 17 (default: java-version input)",
    )
    parser.add_argument(
        "--ssm-prefix",
        default=None,
        help="Read credentials from SSM parameters under this prefix instead of inputs",
    )
    parser.add_argument(
        "--region",
        default="eu-west-2",
        help="AWS region for SSM (default: eu-west-2)",
    )
    parser.add_argument(
        "--probe-policy",
        choices=[policy.value for policy in ProbePolicy],
        default=ProbePolicy.FAIL_OPEN.value,
        help="On an unexpected keytool probe error: import anyway or abort (default: fail-open)",
    )
    parser.add_argument(
        "--keytool-timeout",
        type=float,
        default=None,
        help="Seconds to wait for each keytool call (default: no limit)",
    )
    parser.add_argument(
        "--no-export",
        action="store_true",
        help="Do not export MAVEN_OPTS to this process or GITHUB_ENV",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail instead of skipping when required inputs are missing",
    )
    return parser


def load_request(args: argparse.Namespace) -> ProvisioningRequest:
    """Build the request from CI inputs or SSM, then apply command-line overrides."""
    request = request_from_inputs()

    if args.ssm_prefix:
        request = SSMClient(region=args.region).get_provisioning_request(
            args.ssm_prefix, request.java_path, request.java_version
        )

    overrides = {}
    if args.java_path:
        overrides["java_path"] = args.java_path
    if args.java_version:
        overrides["java_version"] = args.java_version
    return replace(request, **overrides)


def main() -> int:
    """Provision Maven mTLS credentials.

    Returns:
        Exit code (0 for success or skip, 1 for failure)
    """
    args = build_parser().parse_args()

    try:
        request = load_request(args)
    except (ValueError, ClientError, BotoCoreError) as e:
        LOGGER.error("Failed to load credentials: %s", e)
        return 1
    except Exception as e:
        LOGGER.error("Credential loading failed: %s", e)
        return 1

    missing = missing_fields(request)
    if missing:
        if args.strict:
            LOGGER.error("Missing required inputs: %s", ", ".join(missing))
            return 1
        LOGGER.warning("Missing required inputs, skipping Maven mTLS setup: %s", ", ".join(missing))
        return 0

    mask_value(request.password)

    config = ProvisionerConfig(
        probe_policy=ProbePolicy(args.probe_policy),
        keytool_timeout=args.keytool_timeout,
    )
    settings_dir = args.settings_path or read_input(INPUT_SETTINGS_PATH) or None

    try:
        provisioner = MavenProvisioner(config)
        result = provisioner.provision(request, settings_dir=settings_dir)
    except ProvisioningError as e:
        LOGGER.error("Maven mTLS setup failed: %s", e)
        return 1
    except OSError as e:
        LOGGER.error("Failed to write credential files: %s", e)
        return 1
    except Exception as e:
        LOGGER.error("Maven mTLS setup failed unexpectedly: %s", e)
        return 1

    LOGGER.info("Maven mTLS setup complete:")
    LOGGER.info("  Settings: %s", result.settings_path)
    LOGGER.info("  Security settings: %s", result.security_settings_path)
    LOGGER.info("  CA cert: %s", result.ca_cert_path)
    LOGGER.info("  Keystore: %s", result.keystore_path)
    LOGGER.info("  Trust store: %s", result.trust_store.outcome.value)

    if result.trust_store.outcome is SyncOutcome.IMPORT_FAILED:
        LOGGER.warning("CA certificate was not imported into the Java trust store")

    if not args.no_export:
        try:
            export_variable(config.maven_opts_variable, result.maven_opts)
        except (OSError, ValueError) as e:
            LOGGER.error("Failed to export %s: %s", config.maven_opts_variable, e)
            return 1
        LOGGER.info("Exported %s for later steps", config.maven_opts_variable)

    return 0


if __name__ == "__main__":
    sys.exit(main())
