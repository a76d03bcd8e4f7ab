"""
IAM provisioning workflow.

Runs the group, policy and user steps in order against one account:

1. Create the admin group (fatal on failure)
2. Attach the managed policy to it (fatal on failure)
3. Create each user and add it to the group (failures are recorded and
   the run moves on to the next user)
"""

import logging

from boto3.session import Session
from botocore.exceptions import ClientError

from .aws.iam import (
    IamProvisioningError,
    add_user_to_group,
    attach_policy_to_group,
    create_iam_group,
    create_iam_user,
)
from .config import IamManagerConfig
from .enums import ResourceOutcome, ResourceType
from .output import OutputHandler
from .types import ProvisioningReport

logger = logging.getLogger(__name__)


def provision_user(
    session: Session,
    user_name: str,
    group_name: str,
    report: ProvisioningReport
) -> None:
    """
    Create one user and add it to the group, recording both steps.

    Errors are recorded in the report and never raised, so one user cannot
    stop the others from being processed.

    Args:
        session: boto3 Session for the target account
        user_name: Name of the IAM user
        group_name: Group the user should belong to
        report: Report to record outcomes in
    """
    try:
        outcome = create_iam_user(session, user_name)
    except (IamProvisioningError, ClientError) as e:
        report.record(ResourceType.USER, user_name, ResourceOutcome.FAILED, str(e))
        report.record(
            ResourceType.GROUP_MEMBERSHIP,
            user_name,
            ResourceOutcome.SKIPPED,
            "user creation failed"
        )
        OutputHandler.warning(f"Failed to create user '{user_name}'. Skipping adding to group.")
        logger.warning(f"Failed to create user '{user_name}': {e}")
        return
    report.record(ResourceType.USER, user_name, outcome)

    try:
        outcome = add_user_to_group(session, user_name, group_name)
    except (IamProvisioningError, ClientError) as e:
        report.record(ResourceType.GROUP_MEMBERSHIP, user_name, ResourceOutcome.FAILED, str(e))
        OutputHandler.warning(f"Failed to add user '{user_name}' to group '{group_name}'.")
        logger.warning(f"Failed to add user '{user_name}' to group '{group_name}': {e}")
        return
    report.record(ResourceType.GROUP_MEMBERSHIP, user_name, outcome)


def provision(session: Session, config: IamManagerConfig) -> ProvisioningReport:
    """
    Provision the admin group, its policy and its users.

    Args:
        session: boto3 Session for the target account
        config: Validated IAM manager configuration

    Returns:
        ProvisioningReport with one entry per step, in execution order

    Raises:
        GroupProvisioningError: If the group cannot be created
        PolicyAttachmentError: If the policy cannot be attached
        ClientError: If the group existence check fails
    """
    group_name = config.group_name
    policy_arn = config.policy_arn
    report = ProvisioningReport(group_name=group_name, policy_arn=policy_arn)

    OutputHandler.step(1, f"Creating IAM Group '{group_name}'...")
    outcome = create_iam_group(session, group_name)
    report.record(ResourceType.GROUP, group_name, outcome)

    OutputHandler.step(2, f"Attaching policy '{policy_arn}' to group '{group_name}'...")
    outcome = attach_policy_to_group(session, group_name, policy_arn)
    report.record(ResourceType.POLICY_ATTACHMENT, policy_arn, outcome)

    OutputHandler.step(3, f"Creating IAM Users and adding them to group '{group_name}'...")
    for user_name in config.users:
        print(f"\nProcessing user: {user_name}")
        provision_user(session, user_name, group_name, report)

    return report
