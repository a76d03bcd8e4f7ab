"""
AWS IAM user provisioning.

This module contains the existence check and idempotent creation of
IAM users.
"""

import logging

import boto3
from botocore.exceptions import ClientError
from mypy_boto3_iam.client import IAMClient

from ...enums import ResourceOutcome
from ..helpers import is_no_such_entity
from .errors import UserProvisioningError

# Set up logging
logger = logging.getLogger(__name__)


def user_exists(iam_client: IAMClient, user_name: str) -> bool:
    """
    Check whether an IAM user exists.

    Args:
        iam_client: IAM client for the target account
        user_name: Name of the IAM user

    Returns:
        True if the user exists, False if IAM reports NoSuchEntity

    Raises:
        ClientError: For any error other than NoSuchEntity
    """
    try:
        iam_client.get_user(UserName=user_name)
    except ClientError as e:
        if is_no_such_entity(e):
            return False
        logger.error(f"Failed to look up IAM user '{user_name}': {e}")
        raise
    return True


def create_iam_user(session: boto3.Session, user_name: str) -> ResourceOutcome:
    """
    Create an IAM user if it does not already exist.

    Args:
        session: boto3 Session for the target account
        user_name: Name of the IAM user

    Returns:
        ResourceOutcome.EXISTED or ResourceOutcome.CREATED

    Raises:
        UserProvisioningError: If CreateUser fails
        ClientError: If the existence check fails
    """
    iam_client: IAMClient = session.client("iam")
    logger.info(f"Checking if IAM user '{user_name}' exists...")

    if user_exists(iam_client, user_name):
        logger.info(f"IAM user '{user_name}' already exists. Skipping creation.")
        return ResourceOutcome.EXISTED

    logger.info(f"IAM user '{user_name}' does not exist. Creating...")
    try:
        iam_client.create_user(UserName=user_name)
    except ClientError as e:
        logger.error(f"Failed to create IAM user '{user_name}': {e}")
        raise UserProvisioningError(f"Failed to create IAM user '{user_name}': {e}") from e

    logger.info(f"Successfully created IAM user '{user_name}'.")
    return ResourceOutcome.CREATED
