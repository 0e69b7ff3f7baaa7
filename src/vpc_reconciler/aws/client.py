"""boto3 session and client construction.

Clients are built per call site and passed around explicitly; there is no
module-level client.
"""

from __future__ import annotations

from typing import Any, Optional

import boto3
from botocore.config import Config

DEFAULT_CONNECT_TIMEOUT = 10  # seconds
DEFAULT_READ_TIMEOUT = 30  # seconds

# A single attempt: a timed-out or throttled inventory query fails the
# resolution instead of being retried underneath it.
NO_RETRY_ATTEMPTS = 1


def create_session(profile_name: Optional[str] = None, region_name: Optional[str] = None) -> boto3.Session:
    """Create a boto3 session.

    Args:
        profile_name: AWS profile name (optional, default credential chain otherwise)
        region_name: Default region for the session (optional)

    Returns:
        boto3 Session
    """
    if profile_name:
        return boto3.Session(profile_name=profile_name, region_name=region_name)
    return boto3.Session(region_name=region_name)


def create_boto_client(
    service_name: str,
    region_name: Optional[str] = None,
    profile_name: Optional[str] = None,
    session: Optional[boto3.Session] = None,
    connect_timeout: int = DEFAULT_CONNECT_TIMEOUT,
    read_timeout: int = DEFAULT_READ_TIMEOUT,
) -> Any:
    """Create a boto3 client with explicit timeouts and retries disabled.

    Args:
        service_name: AWS service name (e.g., "ec2")
        region_name: AWS region
        profile_name: AWS profile name, ignored when a session is given
        session: Existing boto3 session to build the client from
        connect_timeout: Connection timeout in seconds
        read_timeout: Read timeout in seconds

    Returns:
        boto3 client
    """
    if session is None:
        session = create_session(profile_name=profile_name, region_name=region_name)

    config = Config(
        retries={"max_attempts": NO_RETRY_ATTEMPTS, "mode": "standard"},
        connect_timeout=connect_timeout,
        read_timeout=read_timeout,
    )

    return session.client(service_name, region_name=region_name, config=config)
