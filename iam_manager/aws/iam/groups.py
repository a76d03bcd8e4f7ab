"""
AWS IAM group provisioning.

This module contains the check-then-act operations for IAM groups:
- creating the group
- attaching a managed policy to it
- adding users to it
"""

import logging

import boto3
from botocore.exceptions import ClientError
from mypy_boto3_iam.client import IAMClient

from ...enums import ResourceOutcome
from ..helpers import is_no_such_entity, paginate
from .errors import GroupProvisioningError, MembershipError, PolicyAttachmentError

# Set up logging
logger = logging.getLogger(__name__)


def group_exists(iam_client: IAMClient, group_name: str) -> bool:
    """
    Check whether an IAM group exists.

    Args:
        iam_client: IAM client for the target account
        group_name: Name of the IAM group

    Returns:
        True if the group exists, False if IAM reports NoSuchEntity

    Raises:
        ClientError: For any error other than NoSuchEntity
    """
    try:
        iam_client.get_group(GroupName=group_name)
    except ClientError as e:
        if is_no_such_entity(e):
            return False
        logger.error(f"Failed to look up IAM group '{group_name}': {e}")
        raise
    return True


def create_iam_group(session: boto3.Session, group_name: str) -> ResourceOutcome:
    """
    Create an IAM group if it does not already exist.

    Args:
        session: boto3 Session for the target account
        group_name: Name of the IAM group

    Returns:
        ResourceOutcome.EXISTED or ResourceOutcome.CREATED

    Raises:
        GroupProvisioningError: If CreateGroup fails
        ClientError: If the existence check fails
    """
    iam_client: IAMClient = session.client("iam")
    logger.info(f"Checking if IAM group '{group_name}' exists...")

    if group_exists(iam_client, group_name):
        logger.info(f"IAM group '{group_name}' already exists. Skipping creation.")
        return ResourceOutcome.EXISTED

    logger.info(f"IAM group '{group_name}' does not exist. Creating...")
    try:
        iam_client.create_group(GroupName=group_name)
    except ClientError as e:
        logger.error(f"Failed to create IAM group '{group_name}': {e}")
        raise GroupProvisioningError(f"Failed to create IAM group '{group_name}': {e}") from e

    logger.info(f"Successfully created IAM group '{group_name}'.")
    return ResourceOutcome.CREATED


def is_policy_attached(iam_client: IAMClient, group_name: str, policy_arn: str) -> bool:
    """
    Check whether a managed policy is attached to a group.

    Args:
        iam_client: IAM client for the target account
        group_name: Name of the IAM group
        policy_arn: ARN of the managed policy

    Returns:
        True if an attached policy has exactly this ARN
    """
    for page in paginate(iam_client, "list_attached_group_policies", GroupName=group_name):
        for policy in page.get("AttachedPolicies", []):
            if policy.get("PolicyArn") == policy_arn:
                return True
    return False


def attach_policy_to_group(session: boto3.Session, group_name: str, policy_arn: str) -> ResourceOutcome:
    """
    Attach a managed policy to an IAM group unless it is already attached.

    Args:
        session: boto3 Session for the target account
        group_name: Name of the IAM group
        policy_arn: ARN of the managed policy

    Returns:
        ResourceOutcome.EXISTED or ResourceOutcome.CREATED

    Raises:
        PolicyAttachmentError: If the attachment check or AttachGroupPolicy fails
    """
    iam_client: IAMClient = session.client("iam")
    logger.info(f"Checking if policy '{policy_arn}' is attached to group '{group_name}'...")

    try:
        if is_policy_attached(iam_client, group_name, policy_arn):
            logger.info(f"Policy '{policy_arn}' is already attached to group '{group_name}'. Skipping attachment.")
            return ResourceOutcome.EXISTED

        logger.info(f"Policy '{policy_arn}' is not attached to group '{group_name}'. Attaching...")
        iam_client.attach_group_policy(GroupName=group_name, PolicyArn=policy_arn)
    except ClientError as e:
        logger.error(f"Failed to attach policy '{policy_arn}' to group '{group_name}': {e}")
        raise PolicyAttachmentError(
            f"Failed to attach policy '{policy_arn}' to group '{group_name}': {e}"
        ) from e

    logger.info(f"Successfully attached policy '{policy_arn}' to group '{group_name}'.")
    return ResourceOutcome.CREATED


def is_user_in_group(iam_client: IAMClient, user_name: str, group_name: str) -> bool:
    """
    Check whether a user is a member of a group.

    Args:
        iam_client: IAM client for the target account
        user_name: Name of the IAM user
        group_name: Name of the IAM group

    Returns:
        True if a group member has exactly this user name
    """
    for page in paginate(iam_client, "get_group", GroupName=group_name):
        for user in page.get("Users", []):
            if user.get("UserName") == user_name:
                return True
    return False


def add_user_to_group(session: boto3.Session, user_name: str, group_name: str) -> ResourceOutcome:
    """
    Add an IAM user to an IAM group unless already a member.

    Args:
        session: boto3 Session for the target account
        user_name: Name of the IAM user
        group_name: Name of the IAM group

    Returns:
        ResourceOutcome.EXISTED or ResourceOutcome.CREATED

    Raises:
        MembershipError: If the membership check or AddUserToGroup fails
    """
    iam_client: IAMClient = session.client("iam")
    logger.info(f"Checking if IAM user '{user_name}' is already in group '{group_name}'...")

    try:
        if is_user_in_group(iam_client, user_name, group_name):
            logger.info(f"IAM user '{user_name}' is already a member of group '{group_name}'. Skipping addition.")
            return ResourceOutcome.EXISTED

        logger.info(f"IAM user '{user_name}' is not in group '{group_name}'. Adding...")
        iam_client.add_user_to_group(UserName=user_name, GroupName=group_name)
    except ClientError as e:
        logger.error(f"Failed to add IAM user '{user_name}' to group '{group_name}': {e}")
        raise MembershipError(
            f"Failed to add IAM user '{user_name}' to group '{group_name}': {e}"
        ) from e

    logger.info(f"Successfully added IAM user '{user_name}' to group '{group_name}'.")
    return ResourceOutcome.CREATED
