"""
Shared data types for the IAM manager.

This module contains the data classes used across the application
to avoid circular import issues and provide a single source of truth
for data structures.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .enums import ResourceOutcome, ResourceType


@dataclass
class ResourceResult:
    """
    Outcome of one check-then-act step.

    Attributes:
        resource_type: Kind of IAM resource acted on
        name: Resource name (user name for users and memberships, group name, or policy ARN)
        outcome: What happened to the resource
        error: Error message when the step failed or was skipped
    """
    resource_type: ResourceType
    name: str
    outcome: ResourceOutcome
    error: Optional[str] = None


@dataclass
class ProvisioningReport:
    """Ordered record of every step performed by a provisioning run."""
    group_name: str
    policy_arn: str
    results: List[ResourceResult] = field(default_factory=list)

    def record(
        self,
        resource_type: ResourceType,
        name: str,
        outcome: ResourceOutcome,
        error: Optional[str] = None
    ) -> ResourceResult:
        result = ResourceResult(resource_type, name, outcome, error)
        self.results.append(result)
        return result

    def _with_outcome(self, outcome: ResourceOutcome) -> List[ResourceResult]:
        return [result for result in self.results if result.outcome == outcome]

    @property
    def created(self) -> List[ResourceResult]:
        return self._with_outcome(ResourceOutcome.CREATED)

    @property
    def existed(self) -> List[ResourceResult]:
        return self._with_outcome(ResourceOutcome.EXISTED)

    @property
    def failures(self) -> List[ResourceResult]:
        return self._with_outcome(ResourceOutcome.FAILED)

    @property
    def skipped(self) -> List[ResourceResult]:
        return self._with_outcome(ResourceOutcome.SKIPPED)

    @property
    def has_failures(self) -> bool:
        return bool(self.failures)

    def summary(self) -> Dict[str, int]:
        """Count results per outcome."""
        return {outcome.value: len(self._with_outcome(outcome)) for outcome in ResourceOutcome}
