"""AWS credential validation."""

from __future__ import annotations

import logging
from typing import Dict, Optional

from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError

from .client import create_boto_client

logger = logging.getLogger(__name__)


class CredentialValidationError(Exception):
    """Raised when AWS credentials are missing or invalid."""


def validate_credentials(aws_profile: Optional[str] = None) -> Dict[str, str]:
    """Validate AWS credentials and return the caller identity.

    Args:
        aws_profile: AWS profile name (optional)

    Returns:
        Dictionary with account_id, arn and user_id

    Raises:
        CredentialValidationError: If credentials are missing or rejected
    """
    try:
        sts = create_boto_client("sts", profile_name=aws_profile)
        identity = sts.get_caller_identity()
    except NoCredentialsError as e:
        raise CredentialValidationError(
            "No AWS credentials found. Configure a profile or set AWS_ACCESS_KEY_ID/AWS_SECRET_ACCESS_KEY."
        ) from e
    except ClientError as e:
        error_code = e.response.get("Error", {}).get("Code", "Unknown")
        raise CredentialValidationError(f"AWS rejected credentials: {error_code}") from e
    except BotoCoreError as e:
        raise CredentialValidationError(f"Unable to validate AWS credentials: {e}") from e

    logger.debug(f"Validated credentials for account {identity['Account']}")
    return {
        "account_id": identity["Account"],
        "arn": identity["Arn"],
        "user_id": identity["UserId"],
    }
