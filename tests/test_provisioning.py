"""
Tests for iam_manager.provisioning module.

Tests for step ordering, fatal group/policy failures and per-user
failure handling.
"""

import pytest
from botocore.exceptions import ClientError
from typing import List
from unittest.mock import MagicMock, call, patch
from iam_manager.aws.iam import (
    GroupProvisioningError,
    MembershipError,
    PolicyAttachmentError,
    UserProvisioningError,
)
from iam_manager.config import IamManagerConfig
from iam_manager.enums import ResourceOutcome, ResourceType
from iam_manager.provisioning import provision, provision_user
from iam_manager.types import ProvisioningReport


def _outcomes(report: ProvisioningReport) -> List[tuple[ResourceType, str, ResourceOutcome]]:
    return [(r.resource_type, r.name, r.outcome) for r in report.results]


class TestProvisionUser:
    """Test provision_user function."""

    def test_user_created_and_added(self) -> None:
        """Test both steps are recorded for a new user."""
        mock_session = MagicMock()
        report = ProvisioningReport(group_name="admin", policy_arn="arn:aws:iam::aws:policy/AdministratorAccess")

        with patch("iam_manager.provisioning.create_iam_user", return_value=ResourceOutcome.CREATED) as mock_create, \
                patch("iam_manager.provisioning.add_user_to_group", return_value=ResourceOutcome.CREATED) as mock_add:
            provision_user(mock_session, "mercy", "admin", report)

        mock_create.assert_called_once_with(mock_session, "mercy")
        mock_add.assert_called_once_with(mock_session, "mercy", "admin")
        assert _outcomes(report) == [
            (ResourceType.USER, "mercy", ResourceOutcome.CREATED),
            (ResourceType.GROUP_MEMBERSHIP, "mercy", ResourceOutcome.CREATED),
        ]

    def test_user_creation_failure_skips_membership(self) -> None:
        """Test a failed user is not added to the group."""
        mock_session = MagicMock()
        report = ProvisioningReport(group_name="admin", policy_arn="arn:aws:iam::aws:policy/AdministratorAccess")

        with patch("iam_manager.provisioning.create_iam_user", side_effect=UserProvisioningError("boom")), \
                patch("iam_manager.provisioning.add_user_to_group") as mock_add, \
                patch("builtins.print"):
            provision_user(mock_session, "mercy", "admin", report)

        mock_add.assert_not_called()
        assert _outcomes(report) == [
            (ResourceType.USER, "mercy", ResourceOutcome.FAILED),
            (ResourceType.GROUP_MEMBERSHIP, "mercy", ResourceOutcome.SKIPPED),
        ]
        assert report.results[0].error == "boom"

    def test_user_lookup_client_error_is_recorded(self) -> None:
        """Test a raw ClientError from the existence check is handled per user."""
        mock_session = MagicMock()
        report = ProvisioningReport(group_name="admin", policy_arn="arn:aws:iam::aws:policy/AdministratorAccess")
        error = ClientError({"Error": {"Code": "AccessDenied", "Message": "denied"}}, "GetUser")

        with patch("iam_manager.provisioning.create_iam_user", side_effect=error), \
                patch("iam_manager.provisioning.add_user_to_group") as mock_add, \
                patch("builtins.print"):
            provision_user(mock_session, "mercy", "admin", report)

        mock_add.assert_not_called()
        assert report.results[0].outcome == ResourceOutcome.FAILED

    def test_membership_failure_is_recorded(self) -> None:
        """Test a failed membership is recorded and not raised."""
        mock_session = MagicMock()
        report = ProvisioningReport(group_name="admin", policy_arn="arn:aws:iam::aws:policy/AdministratorAccess")

        with patch("iam_manager.provisioning.create_iam_user", return_value=ResourceOutcome.EXISTED), \
                patch("iam_manager.provisioning.add_user_to_group", side_effect=MembershipError("nope")), \
                patch("builtins.print"):
            provision_user(mock_session, "mercy", "admin", report)

        assert _outcomes(report) == [
            (ResourceType.USER, "mercy", ResourceOutcome.EXISTED),
            (ResourceType.GROUP_MEMBERSHIP, "mercy", ResourceOutcome.FAILED),
        ]


class TestProvision:
    """Test provision function."""

    def test_all_steps_run_in_order(self) -> None:
        """Test group, policy and every user are processed in order."""
        mock_session = MagicMock()
        config = IamManagerConfig(users=["adedeji", "michael"])
        manager = MagicMock()
        manager.create_iam_group.return_value = ResourceOutcome.CREATED
        manager.attach_policy_to_group.return_value = ResourceOutcome.CREATED
        manager.create_iam_user.return_value = ResourceOutcome.CREATED
        manager.add_user_to_group.return_value = ResourceOutcome.EXISTED

        with patch("iam_manager.provisioning.create_iam_group", manager.create_iam_group), \
                patch("iam_manager.provisioning.attach_policy_to_group", manager.attach_policy_to_group), \
                patch("iam_manager.provisioning.create_iam_user", manager.create_iam_user), \
                patch("iam_manager.provisioning.add_user_to_group", manager.add_user_to_group), \
                patch("builtins.print"):
            report = provision(mock_session, config)

        assert manager.mock_calls == [
            call.create_iam_group(mock_session, "admin"),
            call.attach_policy_to_group(mock_session, "admin", "arn:aws:iam::aws:policy/AdministratorAccess"),
            call.create_iam_user(mock_session, "adedeji"),
            call.add_user_to_group(mock_session, "adedeji", "admin"),
            call.create_iam_user(mock_session, "michael"),
            call.add_user_to_group(mock_session, "michael", "admin"),
        ]
        assert report.summary() == {"created": 4, "existed": 2, "failed": 0, "skipped": 0}
        assert report.has_failures is False

    def test_group_failure_is_fatal(self) -> None:
        """Test nothing runs after the group cannot be created."""
        mock_session = MagicMock()
        config = IamManagerConfig()

        with patch("iam_manager.provisioning.create_iam_group", side_effect=GroupProvisioningError("denied")), \
                patch("iam_manager.provisioning.attach_policy_to_group") as mock_attach, \
                patch("iam_manager.provisioning.create_iam_user") as mock_create_user, \
                patch("builtins.print"):
            with pytest.raises(GroupProvisioningError):
                provision(mock_session, config)

        mock_attach.assert_not_called()
        mock_create_user.assert_not_called()

    def test_policy_failure_is_fatal(self) -> None:
        """Test no users are processed after the policy cannot be attached."""
        mock_session = MagicMock()
        config = IamManagerConfig()

        with patch("iam_manager.provisioning.create_iam_group", return_value=ResourceOutcome.EXISTED), \
                patch("iam_manager.provisioning.attach_policy_to_group", side_effect=PolicyAttachmentError("denied")), \
                patch("iam_manager.provisioning.create_iam_user") as mock_create_user, \
                patch("builtins.print"):
            with pytest.raises(PolicyAttachmentError):
                provision(mock_session, config)

        mock_create_user.assert_not_called()

    def test_one_failing_user_does_not_stop_others(self) -> None:
        """Test a user failure is recorded and later users are still processed."""
        mock_session = MagicMock()
        config = IamManagerConfig(users=["lateef", "mercy", "hammed"])

        def create_user(session: MagicMock, user_name: str) -> ResourceOutcome:
            if user_name == "mercy":
                raise UserProvisioningError("quota")
            return ResourceOutcome.CREATED

        with patch("iam_manager.provisioning.create_iam_group", return_value=ResourceOutcome.EXISTED), \
                patch("iam_manager.provisioning.attach_policy_to_group", return_value=ResourceOutcome.EXISTED), \
                patch("iam_manager.provisioning.create_iam_user", side_effect=create_user), \
                patch("iam_manager.provisioning.add_user_to_group", return_value=ResourceOutcome.CREATED) as mock_add, \
                patch("builtins.print"):
            report = provision(mock_session, config)

        assert mock_add.call_args_list == [
            call(mock_session, "lateef", "admin"),
            call(mock_session, "hammed", "admin"),
        ]
        assert [r.name for r in report.failures] == ["mercy"]
        assert report.has_failures is True
        assert len(report.skipped) == 1
