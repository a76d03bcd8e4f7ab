"""
AWS IAM provisioning module.

This module provides the idempotent check-then-act operations:
- Group creation, policy attachment and membership
- User creation
"""

from .errors import (
    GroupProvisioningError,
    IamProvisioningError,
    MembershipError,
    PolicyAttachmentError,
    UserProvisioningError,
)

from .groups import (
    add_user_to_group,
    attach_policy_to_group,
    create_iam_group,
    group_exists,
    is_policy_attached,
    is_user_in_group,
)

from .users import (
    create_iam_user,
    user_exists,
)

__all__ = [
    # Errors
    "IamProvisioningError",
    "GroupProvisioningError",
    "PolicyAttachmentError",
    "UserProvisioningError",
    "MembershipError",
    # Groups
    "group_exists",
    "create_iam_group",
    "is_policy_attached",
    "attach_policy_to_group",
    "is_user_in_group",
    "add_user_to_group",
    # Users
    "user_exists",
    "create_iam_user",
]
