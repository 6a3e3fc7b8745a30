"""DeploymentResult model."""
from abc import ABC
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True, kw_only=True)
class DeploymentResult(ABC):
    """Result of a Cloud Function deployment. Immutable."""
    function_name: str
    used_region: Optional[str] = None

    @property
    def success(self) -> bool:
        return isinstance(self, DeploymentSuccess)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'function_name': self.function_name,
            'used_region': self.used_region,
        }


@dataclass(frozen=True, kw_only=True)
class DeploymentSuccess(DeploymentResult):
    """Successful deployment result."""
    url: Optional[str]
    deployment_duration_seconds: float
    deploy_time: str
    attempts: int = 1

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d.update({
            'url': self.url,
            'deployment_duration_seconds': self.deployment_duration_seconds,
            'deploy_time': self.deploy_time,
            'attempts': self.attempts,
            'success': True,
        })
        return d


@dataclass(frozen=True, kw_only=True)
class DeploymentFailure(DeploymentResult):
    """Failed deployment result."""
    error: Exception
    attempts: int = 1

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d.update({
            'error': str(self.error),
            'attempts': self.attempts,
            'success': False,
        })
        return d
