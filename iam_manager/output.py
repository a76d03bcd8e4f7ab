"""
Centralized output handling with consistent formatting.

This module provides a single point of control for all user-facing output,
ensuring consistent formatting and making it easy to modify output behavior.
"""

import json
import logging
import sys
from typing import Any, Optional

from .types import ProvisioningReport

logger = logging.getLogger(__name__)


class OutputHandler:
    """Centralized output handling with consistent formatting."""

    @staticmethod
    def step(number: int, title: str) -> None:
        """
        Print the header of a numbered provisioning step.

        Args:
            number: Step number, starting at 1
            title: Step description
        """
        print(f"\nStep {number}: {title}")

    @staticmethod
    def error(title: str, error: Exception) -> None:
        """
        Print formatted error message.

        Args:
            title: Error title
            error: Exception that occurred
        """
        print(f"\n🚨 {title}:\n{error}\n")

    @staticmethod
    def warning(message: str) -> None:
        """
        Print formatted warning message to stderr.

        Args:
            message: Warning text
        """
        print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def success(title: str, data: Optional[Any] = None) -> None:
        """
        Print formatted success message.

        Args:
            title: Success message title
            data: Optional data to display (dict will be JSON formatted)
        """
        print(f"\n✅ {title}")
        if not data:
            return

        if isinstance(data, dict):
            print(json.dumps(data, indent=2, default=str))
            return

        print(data)

    @staticmethod
    def section_header(title: str) -> None:
        """
        Print section header with divider.

        Args:
            title: Section title
        """
        print("\n" + "=" * 80)
        print(title)
        print("=" * 80)

    @staticmethod
    def summary(report: ProvisioningReport) -> None:
        """
        Print per-outcome counts and any failed steps of a run.

        Args:
            report: Report returned by the provisioning run
        """
        OutputHandler.section_header("IAM PROVISIONING SUMMARY")
        counts = report.summary()
        print(
            f"Group '{report.group_name}' with policy '{report.policy_arn}': "
            f"{counts['created']} created, {counts['existed']} already present, "
            f"{counts['failed']} failed, {counts['skipped']} skipped"
        )
        for result in report.failures + report.skipped:
            print(f"  - {result.resource_type.value} '{result.name}' {result.outcome.value}: {result.error}")
