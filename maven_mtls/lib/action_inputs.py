"""CI action inputs and exported variables (GitHub Actions conventions)."""

import os
import sys
import uuid
from collections.abc import Mapping, MutableMapping
from pathlib import Path

from .models import ProvisioningRequest

INPUT_CA_CERT = "ca-cert"
INPUT_KEYSTORE = "keystore"
INPUT_PASSWORD = "password"
INPUT_SETTINGS = "settings"
INPUT_SECURITY_SETTINGS = "security-settings"
INPUT_SETTINGS_PATH = "settings-path"
INPUT_JAVA_PATH = "java-path"
INPUT_JAVA_VERSION = "java-version"


def input_env_name(name: str) -> str:
    """Return the environment variable the runner uses for an action input."""
    return f"INPUT_{name.replace(' ', '_').upper()}"


def read_input(name: str, environ: Mapping[str, str] | None = None) -> str:
    """Read an action input, stripped; empty string when unset."""
    env = os.environ if environ is None else environ
    return env.get(input_env_name(name), "").strip()


def request_from_inputs(environ: Mapping[str, str] | None = None) -> ProvisioningRequest:
    """Build a provisioning request from action inputs.

    java-path falls back to JAVA_HOME when the input is not set.
    """
    env = os.environ if environ is None else environ
    return ProvisioningRequest(
        ca_cert=read_input(INPUT_CA_CERT, env),
        keystore=read_input(INPUT_KEYSTORE, env),
        password=read_input(INPUT_PASSWORD, env),
        settings=read_input(INPUT_SETTINGS, env),
        security_settings=read_input(INPUT_SECURITY_SETTINGS, env),
        java_path=read_input(INPUT_JAVA_PATH, env) or env.get("JAVA_HOME", ""),
        java_version=read_input(INPUT_JAVA_VERSION, env),
    )


def export_variable(
    name: str, value: str, environ: MutableMapping[str, str] | None = None
) -> None:
    """Export a variable to this process and to later steps of the job.

    Later steps see it through the file named by GITHUB_ENV, written in the
    runner's heredoc format. Without GITHUB_ENV only this process is updated.

    Raises:
        ValueError: If name or value contains the generated delimiter
        OSError: If GITHUB_ENV cannot be appended to
    """
    env = os.environ if environ is None else environ
    env[name] = value

    env_file = env.get("GITHUB_ENV")
    if not env_file:
        return

    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    if delimiter in name or delimiter in value:
        raise ValueError(f"unexpected delimiter in exported variable {name}")

    with Path(env_file).open("a", encoding="utf-8") as fh:
        fh.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")


def mask_value(value: str) -> None:
    """Ask the runner to redact value from all later log output."""
    if value:
        sys.stdout.write(f"::add-mask::{value}\n")
        sys.stdout.flush()
