"""System environment checks."""

from __future__ import annotations

import boto3


def check_aws_credentials() -> tuple[bool, str]:
    """Check whether boto3 can resolve AWS credentials. Returns (found, info)."""
    credentials = boto3.Session().get_credentials()
    if credentials is None:
        return False, "No AWS credentials found. Set AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY."
    return True, f"resolved via {credentials.method}"
