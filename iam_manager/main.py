from typing import Dict
import argparse
import logging

from botocore.exceptions import BotoCoreError, ClientError

from .aws.helpers import get_error_code
from .aws.iam import IamProvisioningError
from .aws.sessions import get_session
from .config import IamManagerConfig
from .output import OutputHandler
from .provisioning import provision
from .types import ProvisioningReport
from .usage import load_yaml_config, parse_cli_args, merge_configs
from .write_results import write_provisioning_report

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Exit code when per-user failures occur and strict mode is on
STRICT_FAILURE_EXIT_CODE = 2


def configure_logging(verbose: bool) -> None:
    """Switch the root logger to DEBUG when verbose output is requested."""
    logging.getLogger().setLevel(logging.DEBUG if verbose else logging.INFO)


def setup_configuration(cli_args: argparse.Namespace, yaml_config: Dict) -> IamManagerConfig:
    """
    Merge and validate configuration from YAML and CLI arguments.

    Args:
        cli_args: Parsed command line arguments
        yaml_config: Configuration loaded from YAML file

    Returns:
        Validated IamManagerConfig object

    Raises:
        SystemExit: If configuration validation fails
    """
    try:
        final_config = merge_configs(yaml_config, cli_args)
    except (ValueError, TypeError) as e:
        OutputHandler.error("Configuration Error", e)
        exit(1)

    OutputHandler.success("Final Config", final_config.model_dump())

    return final_config


def run_provisioning(final_config: IamManagerConfig) -> ProvisioningReport:
    """
    Build the AWS session and provision the configured IAM resources.

    Args:
        final_config: Validated IAM manager configuration

    Returns:
        ProvisioningReport for the run

    Raises:
        SystemExit: If the group or policy step fails, or AWS cannot be reached
    """
    try:
        session = get_session(final_config.profile, final_config.region, final_config.role_arn)
        return provision(session, final_config)
    except IamProvisioningError as e:
        OutputHandler.error("FATAL: IAM provisioning failed", e)
        logger.error(f"IAM provisioning failed: {e}", exc_info=True)
        exit(1)
    except ClientError as e:
        error_code = get_error_code(e)
        OutputHandler.error(f"AWS API Error ({error_code})", e)
        logger.error(f"AWS API error: {e}", exc_info=True)
        exit(1)
    except BotoCoreError as e:
        OutputHandler.error("AWS Configuration Error", e)
        logger.error(f"AWS configuration error: {e}", exc_info=True)
        exit(1)


def finish_run(final_config: IamManagerConfig, report: ProvisioningReport) -> None:
    """
    Print the run summary, write the optional report and apply strict mode.

    Args:
        final_config: Validated IAM manager configuration
        report: Report returned by the provisioning run

    Raises:
        SystemExit: In strict mode when any step failed
    """
    OutputHandler.summary(report)

    if final_config.results_file:
        output_path = write_provisioning_report(report, final_config.results_file)
        OutputHandler.success(f"Report written to {output_path}")

    print("\nPlease verify the IAM users and group in the AWS Management Console.")
    print("Remember to set initial passwords and/or generate access keys for new users as needed.")

    if final_config.strict and report.has_failures:
        OutputHandler.error(
            "Strict mode",
            RuntimeError(f"{len(report.failures)} IAM step(s) failed")
        )
        exit(STRICT_FAILURE_EXIT_CODE)


def main() -> None:
    """Main entry point for IAM provisioning."""
    cli_args = parse_cli_args()
    configure_logging(cli_args.verbose)
    yaml_config = load_yaml_config(cli_args.config)

    final_config = setup_configuration(cli_args, yaml_config)

    OutputHandler.section_header("Starting AWS IAM Management")
    report = run_provisioning(final_config)

    finish_run(final_config, report)
