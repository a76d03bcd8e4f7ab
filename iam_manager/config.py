import re
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .constants import (
    DEFAULT_GROUP_NAME,
    DEFAULT_POLICY_ARN,
    DEFAULT_USERS,
    IAM_NAME_PATTERN,
    IAM_POLICY_ARN_PATTERN,
    MAX_GROUP_NAME_LENGTH,
    MAX_USER_NAME_LENGTH,
)


def _validate_iam_name(name: str, kind: str, max_length: int) -> str:
    if not name or len(name) > max_length:
        raise ValueError(f"{kind} name '{name}' must be 1-{max_length} characters long")
    if not re.fullmatch(IAM_NAME_PATTERN, name):
        raise ValueError(f"{kind} name '{name}' contains characters IAM does not allow")
    return name


class IamManagerConfig(BaseModel):
    group_name: str = DEFAULT_GROUP_NAME
    policy_arn: str = DEFAULT_POLICY_ARN
    users: List[str] = Field(default_factory=lambda: list(DEFAULT_USERS))
    # AWS CLI profile and region used to build the boto3 session
    profile: Optional[str] = None
    region: Optional[str] = None
    # Role to assume before touching IAM (cross-account provisioning)
    role_arn: Optional[str] = None
    # Where to write the JSON run report, skipped when unset
    results_file: Optional[str] = None
    # Treat per-user failures as a failed run
    strict: bool = False

    @field_validator("group_name")
    @classmethod
    def check_group_name(cls, value: str) -> str:
        return _validate_iam_name(value, "Group", MAX_GROUP_NAME_LENGTH)

    @field_validator("policy_arn")
    @classmethod
    def check_policy_arn(cls, value: str) -> str:
        if not re.fullmatch(IAM_POLICY_ARN_PATTERN, value):
            raise ValueError(f"'{value}' is not an IAM policy ARN")
        return value

    @field_validator("users")
    @classmethod
    def check_users(cls, value: List[str]) -> List[str]:
        # Drop duplicates, keeping first-seen order
        unique_users: List[str] = []
        for user_name in value:
            _validate_iam_name(user_name, "User", MAX_USER_NAME_LENGTH)
            if user_name not in unique_users:
                unique_users.append(user_name)
        return unique_users
