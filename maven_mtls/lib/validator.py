"""Validation of provisioning requests."""

from .models import REQUIRED_FIELDS, ProvisioningRequest


def missing_fields(request: ProvisioningRequest) -> list[str]:
    """Return names of required credential fields that are empty."""
    missing = []
    for name in REQUIRED_FIELDS:
        value = getattr(request, name)
        if not isinstance(value, str) or value == "":
            missing.append(name)
    return missing


def is_valid_options(request: ProvisioningRequest) -> bool:
    """Return True iff CA cert, keystore, password, settings and security settings are all set."""
    return not missing_fields(request)
