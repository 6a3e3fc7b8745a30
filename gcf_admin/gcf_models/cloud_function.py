"""CloudFunction model."""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..resource_names import function_name


@dataclass
class CloudFunction:
    """
    Convenience builder for the Cloud Functions v1 `CloudFunction` resource body.

    FunctionsClient.deploy_function accepts any mapping; this class only renders
    the commonly used fields. Anything else goes in `extra_fields`, which is
    merged last and wins over the rendered values.
    """

    name: str
    region: str
    runtime: str
    entry_point: str

    # exactly one source pointer is expected
    source_upload_url: Optional[str] = None
    source_archive_url: Optional[str] = None

    # HTTP trigger unless an event trigger is given
    event_trigger: Optional[Dict[str, Any]] = None
    security_level: str = "SECURE_ALWAYS"

    memory_mb: Optional[int] = 256
    timeout_seconds: Optional[int] = 60
    max_instances: Optional[int] = None
    min_instances: Optional[int] = None
    service_account_email: Optional[str] = None
    description: Optional[str] = None
    env_vars: Dict[str, str] = field(default_factory=dict)
    labels: Dict[str, str] = field(default_factory=dict)
    extra_fields: Dict[str, Any] = field(default_factory=dict)

    def resource_name(self, project: str) -> str:
        return function_name(project, self.region, self.name)

    def to_descriptor(self, project: str) -> Dict[str, Any]:
        """Render the request body for projects.locations.functions.create."""
        descriptor: Dict[str, Any] = {
            'name': self.resource_name(project),
            'runtime': self.runtime,
            'entryPoint': self.entry_point,
        }

        if self.source_upload_url:
            descriptor['sourceUploadUrl'] = self.source_upload_url
        elif self.source_archive_url:
            descriptor['sourceArchiveUrl'] = self.source_archive_url

        if self.event_trigger:
            descriptor['eventTrigger'] = dict(self.event_trigger)
        else:
            descriptor['httpsTrigger'] = {'securityLevel': self.security_level}

        if self.memory_mb is not None:
            descriptor['availableMemoryMb'] = self.memory_mb
        if self.timeout_seconds is not None:
            descriptor['timeout'] = f"{self.timeout_seconds}s"
        if self.max_instances is not None:
            descriptor['maxInstances'] = self.max_instances
        if self.min_instances is not None:
            descriptor['minInstances'] = self.min_instances
        if self.service_account_email:
            descriptor['serviceAccountEmail'] = self.service_account_email
        if self.description:
            descriptor['description'] = self.description
        if self.env_vars:
            descriptor['environmentVariables'] = dict(self.env_vars)
        if self.labels:
            descriptor['labels'] = dict(self.labels)

        descriptor.update(self.extra_fields)
        return descriptor
