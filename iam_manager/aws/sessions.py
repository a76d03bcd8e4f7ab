"""AWS session management utilities."""

import logging
from typing import Optional

from boto3.session import Session
from mypy_boto3_sts.client import STSClient
from mypy_boto3_sts.type_defs import AssumeRoleResponseTypeDef, CredentialsTypeDef

from ..constants import DEFAULT_SESSION_NAME

logger = logging.getLogger(__name__)


def get_session(
    profile: Optional[str] = None,
    region: Optional[str] = None,
    role_arn: Optional[str] = None
) -> Session:
    """
    Build the boto3 session used for IAM calls.

    Args:
        profile: Named AWS profile (defaults to the standard credential chain)
        region: AWS region name (IAM is global, this only affects STS endpoints)
        role_arn: Optional role to assume on top of the profile credentials

    Returns:
        boto3 Session ready for IAM calls

    Raises:
        ClientError: If role assumption fails
    """
    base_session = Session(profile_name=profile, region_name=region)
    if not role_arn:
        return base_session

    logger.info(f"Assuming role {role_arn}")
    return assume_role(role_arn, DEFAULT_SESSION_NAME, base_session)


def assume_role(
    role_arn: str,
    session_name: str,
    base_session: Optional[Session] = None
) -> Session:
    """
    Assume an IAM role and return a session with temporary credentials.

    Args:
        role_arn: ARN of the role to assume
        session_name: Name for the role session
        base_session: Session to use for assuming role (defaults to boto3.Session())

    Returns:
        boto3 Session with assumed role credentials, in the base session's region

    Raises:
        ClientError: If role assumption fails (AccessDenied, InvalidParameterValue, etc.)
    """
    if base_session is None:
        base_session = Session()

    sts: STSClient = base_session.client("sts")
    resp: AssumeRoleResponseTypeDef = sts.assume_role(
        RoleArn=role_arn,
        RoleSessionName=session_name
    )

    creds: CredentialsTypeDef = resp["Credentials"]
    return Session(
        aws_access_key_id=creds["AccessKeyId"],
        aws_secret_access_key=creds["SecretAccessKey"],
        aws_session_token=creds["SessionToken"],
        region_name=base_session.region_name
    )
