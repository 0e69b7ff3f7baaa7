"""VPC inventory client.

Read-only boundary to EC2's ``describe_vpcs`` API. Issuing these queries
never creates, modifies, or deletes provider state.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..aws.client import DEFAULT_CONNECT_TIMEOUT, DEFAULT_READ_TIMEOUT, create_boto_client
from ..errors import ProviderError
from ..models.resource_record import NAME_TAG_KEY, ResourceRecord

logger = logging.getLogger(__name__)

DESCRIBE_OPERATION = "describe_vpcs"


class VpcInventoryClient:
    """Queries the VPCs visible to one account in one region.

    Constructed explicitly per resolution call and passed to the engine.

    Attributes:
        region: AWS region queried
    """

    def __init__(
        self,
        region: str,
        session: Optional[boto3.Session] = None,
        client: Optional[Any] = None,
        connect_timeout: int = DEFAULT_CONNECT_TIMEOUT,
        read_timeout: int = DEFAULT_READ_TIMEOUT,
    ) -> None:
        """Initialize inventory client.

        Args:
            region: AWS region to query
            session: boto3 session used to build the EC2 client
            client: Prebuilt EC2 client (takes precedence over session)
            connect_timeout: Connection timeout in seconds
            read_timeout: Read timeout in seconds
        """
        self.region = region
        self._session = session
        self._client = client
        self._connect_timeout = connect_timeout
        self._read_timeout = read_timeout

    def _create_client(self) -> Any:
        if self._client is None:
            self._client = create_boto_client(
                "ec2",
                region_name=self.region,
                session=self._session,
                connect_timeout=self._connect_timeout,
                read_timeout=self._read_timeout,
            )
        return self._client

    def find_by_name_tag(self, expected_name: str) -> List[ResourceRecord]:
        """Find VPCs whose Name tag exactly equals expected_name.

        Args:
            expected_name: Name tag value to match

        Returns:
            Matching records in provider listing order (empty when none match)

        Raises:
            ProviderError: On network, auth, or API failure
        """
        filters = [{"Name": f"tag:{NAME_TAG_KEY}", "Values": [expected_name]}]
        records = list(self._describe(Filters=filters))
        logger.debug(f"Found {len(records)} VPC(s) tagged Name={expected_name} in {self.region}")
        return records

    def list_all(self) -> List[ResourceRecord]:
        """List every VPC in the region with whatever tags it carries.

        Raises:
            ProviderError: On network, auth, or API failure
        """
        records = list(self._describe())
        logger.debug(f"Listed {len(records)} VPC(s) in {self.region}")
        return records

    def _describe(self, **kwargs: Any) -> Iterator[ResourceRecord]:
        try:
            client = self._create_client()
            paginator = client.get_paginator(DESCRIBE_OPERATION)
            # Materialize inside the try so mid-pagination failures are wrapped too
            pages = list(paginator.paginate(**kwargs))
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            raise ProviderError(
                f"{DESCRIBE_OPERATION} failed in {self.region}: {error_code}",
                operation=DESCRIBE_OPERATION,
                region=self.region,
                error_code=error_code,
            ) from e
        except BotoCoreError as e:
            raise ProviderError(
                f"{DESCRIBE_OPERATION} failed in {self.region}: {e}",
                operation=DESCRIBE_OPERATION,
                region=self.region,
            ) from e

        for page in pages:
            for vpc in page.get("Vpcs", []):
                yield ResourceRecord.from_describe_vpc(vpc, self.region)
