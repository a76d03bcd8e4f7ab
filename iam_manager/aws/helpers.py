"""
Shared AWS helper utilities for pagination and error inspection.
"""

from collections.abc import Iterator
from typing import Any

from botocore.client import BaseClient
from botocore.exceptions import ClientError

from ..constants import NO_SUCH_ENTITY_ERROR_CODE

__all__ = ["get_error_code", "is_no_such_entity", "paginate"]


def paginate(
    client: BaseClient,
    operation_name: str,
    **operation_kwargs: Any
) -> Iterator[dict[str, Any]]:
    """
    Yield pages for a paginated AWS API operation.
    """
    paginator = client.get_paginator(operation_name)
    for page in paginator.paginate(**operation_kwargs):
        yield page


def get_error_code(error: ClientError) -> str:
    """
    Return the AWS error code of a ClientError, or 'Unknown' when missing.
    """
    code: str = error.response.get("Error", {}).get("Code", "Unknown")
    return code


def is_no_such_entity(error: ClientError) -> bool:
    """
    Return True when the error means the IAM entity does not exist.
    """
    return get_error_code(error) == NO_SUCH_ENTITY_ERROR_CODE
