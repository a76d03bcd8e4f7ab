"""
Enumerations for the IAM manager.

This module contains all enum types used throughout the application
to replace magic strings and improve type safety.
"""

from enum import Enum


class ResourceType(str, Enum):
    """Kinds of IAM actions performed during a run."""
    GROUP = "group"
    POLICY_ATTACHMENT = "policy_attachment"
    USER = "user"
    GROUP_MEMBERSHIP = "group_membership"


class ResourceOutcome(str, Enum):
    """Result of a single check-then-act step."""
    CREATED = "created"
    EXISTED = "existed"
    FAILED = "failed"
    SKIPPED = "skipped"
