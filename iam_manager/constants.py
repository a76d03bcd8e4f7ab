"""
Constants module for IAM resource defaults.

This module contains the default admin group, policy and user names used
when no configuration overrides them.
"""

from typing import List

# Name of the IAM group that receives the administrator policy
DEFAULT_GROUP_NAME = "admin"

# AWS-managed policy granting full access to AWS services and resources
# Reference: https://docs.aws.amazon.com/aws-managed-policy/latest/reference/AdministratorAccess.html
DEFAULT_POLICY_ARN = "arn:aws:iam::aws:policy/AdministratorAccess"

DEFAULT_USERS: List[str] = ["adedeji", "michael", "lateef", "mercy", "hammed"]

DEFAULT_SESSION_NAME = "IamManagerSession"

# IAM error code returned when a user, group or policy does not exist
NO_SUCH_ENTITY_ERROR_CODE = "NoSuchEntity"

# IAM name constraints
# Reference: https://docs.aws.amazon.com/IAM/latest/UserGuide/reference_iam-quotas.html
IAM_NAME_PATTERN = r'[A-Za-z0-9_+=,.@-]+'
MAX_USER_NAME_LENGTH = 64
MAX_GROUP_NAME_LENGTH = 128

# Policy ARN format: arn:<partition>:iam::<account-id or aws>:policy/<path><name>
IAM_POLICY_ARN_PATTERN = r'arn:aws[a-z-]*:iam::(aws|[0-9]{12}):policy/.+'
