import argparse
from typing import Any, Dict, Optional

import yaml

from .config import IamManagerConfig


def load_yaml_config(path: Optional[str]) -> Dict[str, Any]:
    """
    Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file, or None to use defaults only

    Returns:
        Dictionary containing the loaded configuration, or empty dict if no file
    """
    if not path:
        return {}
    try:
        with open(path, 'r') as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        print(f"Config file '{path}' not found. Continuing without it.")
        return {}


def parse_cli_args() -> argparse.Namespace:
    """
    Parse command line arguments for the iam-manager tool.

    Returns:
        Parsed command line arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog="iam-manager",
        description="iam-manager - create an IAM admin group, attach its policy and add users to it"
    )

    parser.add_argument(
        '--config',
        type=str,
        help='Path to config YAML'
    )

    # IAM resources (override YAML if provided)
    parser.add_argument(
        '--group-name',
        dest='group_name',
        type=str,
        help='Name of the IAM group to create (default admin)'
    )
    parser.add_argument(
        '--policy-arn',
        dest='policy_arn',
        type=str,
        help='ARN of the managed policy to attach (default AdministratorAccess)'
    )
    parser.add_argument(
        '--user',
        dest='users',
        action='append',
        type=str,
        help='IAM user to create and add to the group; repeat for several users'
    )

    # AWS credentials
    parser.add_argument(
        '--profile',
        type=str,
        help='AWS profile to use'
    )
    parser.add_argument(
        '--region',
        type=str,
        help='AWS region to use'
    )
    parser.add_argument(
        '--role-arn',
        dest='role_arn',
        type=str,
        help='IAM role to assume before provisioning'
    )

    # Run behaviour
    parser.add_argument(
        '--results-file',
        dest='results_file',
        type=str,
        help='Write a JSON report of the run to this file'
    )
    parser.add_argument(
        '--strict',
        action='store_true',
        default=argparse.SUPPRESS,
        help='Exit non-zero when any user could not be created or added to the group'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    return parser.parse_args()


def merge_configs(yaml_config: Dict[str, Any], cli_args: argparse.Namespace) -> IamManagerConfig:
    """
    Merge YAML configuration with CLI arguments and validate the result.

    Args:
        yaml_config: Configuration loaded from YAML file
        cli_args: Parsed command line arguments

    Returns:
        Validated IamManagerConfig object

    Raises:
        ValueError: If configuration validation fails
        TypeError: If configuration has type errors
    """
    if not isinstance(yaml_config, dict):
        raise ValueError(
            f"Config file must contain a mapping of settings, got {type(yaml_config).__name__}"
        )

    # Start with YAML
    merged = yaml_config.copy()

    # Apply CLI overrides (only if CLI provided them)
    cli_dict = {
        k: v for k, v in vars(cli_args).items()
        if k in IamManagerConfig.model_fields and v is not None
    }
    merged.update(cli_dict)

    # Validate and return final config (will raise if fields have wrong types or values)
    return IamManagerConfig(**merged)
