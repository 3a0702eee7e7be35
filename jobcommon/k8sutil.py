"""Helpers for working with pods, replicas and API errors."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Mapping, Optional

from jobcommon.models import GroupResource, Pod, PodPhase, ReplicaSpec, ReplicaStatus

RECOMMENDED_CONFIG_PATH_ENV_VAR = "KUBECONFIG"

_log = logging.getLogger(__name__)


class ResourceAlreadyExistsError(Exception):
    """Raised when a resource to be created exists already."""

    def __init__(self, resource: GroupResource | str, name: str) -> None:
        self.resource = resource
        self.name = name
        super().__init__(f'{resource} "{name}" already exists')


class ResourceNotFoundError(LookupError):
    """Raised when a requested resource does not exist."""

    def __init__(self, resource: GroupResource | str, name: str) -> None:
        self.resource = resource
        self.name = name
        super().__init__(f'{resource} "{name}" not found')

    def __str__(self) -> str:
        return f'{self.resource} "{self.name}" not found'


class DeletionPropagation(str, Enum):
    """How the deletion of an owner reaches its dependents."""

    ORPHAN = "Orphan"
    BACKGROUND = "Background"
    FOREGROUND = "Foreground"


@dataclass
class DeleteOptions:
    """Options of a delete request."""

    grace_period_seconds: Optional[int] = None
    propagation_policy: Optional[DeletionPropagation] = None


def is_kubernetes_resource_already_exist_error(err: BaseException) -> bool:
    """Tell whether ``err`` reports that a resource exists already."""
    return isinstance(err, ResourceAlreadyExistsError)


def is_kubernetes_resource_not_found_error(err: BaseException) -> bool:
    """Tell whether ``err`` reports that a resource was not found."""
    return isinstance(err, ResourceNotFoundError)


def cascade_delete_options(grace_period_seconds: int) -> DeleteOptions:
    """Options that delete dependents in the foreground after the grace period."""
    return DeleteOptions(
        grace_period_seconds=grace_period_seconds,
        propagation_policy=DeletionPropagation.FOREGROUND,
    )


def is_pod_active(pod: Pod) -> bool:
    """Tell whether a pod has neither terminated nor been marked for deletion."""
    return (
        pod.status.phase not in (PodPhase.SUCCEEDED, PodPhase.FAILED)
        and pod.metadata.deletion_timestamp is None
    )


def filter_active_pods(pods: Iterable[Pod]) -> list[Pod]:
    """Return the pods that have not terminated."""
    result = []
    for pod in pods:
        if is_pod_active(pod):
            result.append(pod)
        else:
            phase = getattr(pod.status.phase, "value", pod.status.phase)
            _log.info(
                "Ignoring inactive pod %s/%s in state %s, deletion time %s",
                pod.metadata.namespace,
                pod.metadata.name,
                phase,
                pod.metadata.deletion_timestamp,
            )
    return result


def filter_pod_count(pods: Iterable[Pod], phase: PodPhase) -> int:
    """Count the pods in the given phase."""
    return sum(1 for pod in pods if pod.status.phase == phase)


def get_total_replicas(replicas: Mapping[str, ReplicaSpec]) -> int:
    """Sum the replica counts; a spec without a count stands for one replica."""
    return sum(
        spec.replicas if spec.replicas is not None else 1 for spec in replicas.values()
    )


def get_total_failed_replicas(replicas: Mapping[str, ReplicaStatus]) -> int:
    """Sum the failed counts of all replica statuses."""
    return sum(status.failed for status in replicas.values())