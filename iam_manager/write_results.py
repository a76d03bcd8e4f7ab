"""
Result Writing Module

Handles writing the provisioning run report to a JSON file.
"""

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict

from .types import ProvisioningReport

# Set up logging
logger = logging.getLogger(__name__)


def build_report_data(report: ProvisioningReport) -> Dict[str, Any]:
    """
    Convert a provisioning report into JSON-serializable data.

    Args:
        report: Report returned by the provisioning run

    Returns:
        Dictionary with a summary block and per-resource results
    """
    return {
        "summary": {
            "group_name": report.group_name,
            "policy_arn": report.policy_arn,
            **report.summary(),
        },
        "results": [
            {**asdict(result), "resource_type": result.resource_type.value, "outcome": result.outcome.value}
            for result in report.results
        ],
    }


def write_provisioning_report(report: ProvisioningReport, output_file: str) -> Path:
    """
    Write the provisioning report to a JSON file.

    Creates parent directories as needed.

    Args:
        report: Report returned by the provisioning run
        output_file: Destination path

    Returns:
        Path of the written file
    """
    output_path = Path(output_file)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w') as f:
        json.dump(build_report_data(report), f, indent=2, default=str)

    logger.info(f"Wrote provisioning report to {output_path}")
    return output_path
