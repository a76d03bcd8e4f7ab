"""Exceptions raised when an IAM provisioning step fails."""


class IamProvisioningError(Exception):
    """Base class for failed IAM create/attach/add operations."""


class GroupProvisioningError(IamProvisioningError):
    """Raised when an IAM group cannot be created."""


class PolicyAttachmentError(IamProvisioningError):
    """Raised when a managed policy cannot be attached to a group."""


class UserProvisioningError(IamProvisioningError):
    """Raised when an IAM user cannot be created."""


class MembershipError(IamProvisioningError):
    """Raised when a user cannot be added to a group."""
