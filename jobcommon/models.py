"""Resource types for the TestJob API and the Kubernetes objects it builds on."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Protocol

# API group registration.
GROUP_NAME = "kubeflow.org"
KIND = "TestJob"
GROUP_VERSION = "v1"
PLURAL = "testjobs"
SINGULAR = "testjob"
TESTCRD = "testjobs.kubeflow.org"

# Environment and container defaults.
ENV_KUBEFLOW_NAMESPACE = "KUBEFLOW_NAMESPACE"
DEFAULT_PORT_NAME = "job-port"
DEFAULT_CONTAINER_NAME = "test-container"
DEFAULT_PORT = 2222

NAMESPACE_DEFAULT = "default"
NAMESPACE_ALL = ""
JOB_ROLE_LABEL = "job-role"


class ConditionStatus(str, Enum):
    """Status of a condition."""

    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"


class JobConditionType(str, Enum):
    """Kinds of condition a job can be in."""

    CREATED = "Created"
    RUNNING = "Running"
    RESTARTING = "Restarting"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"


class PodPhase(str, Enum):
    """Lifecycle phase of a pod."""

    PENDING = "Pending"
    RUNNING = "Running"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    UNKNOWN = "Unknown"


class RestartPolicy(str, Enum):
    """Restart policy for the pods of a replica."""

    ALWAYS = "Always"
    ON_FAILURE = "OnFailure"
    NEVER = "Never"
    EXIT_CODE = "ExitCode"


class CleanPodPolicy(str, Enum):
    """Which pods are removed once a job finishes."""

    ALL = "All"
    RUNNING = "Running"
    NONE = "None"


class TestReplicaType(str, Enum):
    """Replica types of a TestJob."""

    __test__ = False

    WORKER = "Worker"
    MASTER = "Master"


DEFAULT_RESTART_POLICY = RestartPolicy.NEVER


@dataclass(frozen=True)
class GroupVersion:
    """An API group together with a version."""

    group: str
    version: str

    def __str__(self) -> str:
        return f"{self.group}/{self.version}" if self.group else self.version

    def with_kind(self, kind: str) -> GroupVersionKind:
        return GroupVersionKind(self.group, self.version, kind)

    def with_resource(self, resource: str) -> GroupVersionResource:
        return GroupVersionResource(self.group, self.version, resource)


@dataclass(frozen=True)
class GroupVersionKind:
    """An API group, version and kind."""

    group: str
    version: str
    kind: str

    @property
    def group_version(self) -> GroupVersion:
        return GroupVersion(self.group, self.version)

    def __str__(self) -> str:
        return f"{self.group}/{self.version}, Kind={self.kind}"


@dataclass(frozen=True)
class GroupResource:
    """An API group and a resource name, without a version."""

    group: str
    resource: str

    def __str__(self) -> str:
        return f"{self.resource}.{self.group}" if self.group else self.resource


@dataclass(frozen=True)
class GroupVersionResource:
    """An API group, version and resource name."""

    group: str
    version: str
    resource: str

    def group_resource(self) -> GroupResource:
        return GroupResource(self.group, self.resource)


SCHEME_GROUP_VERSION = GroupVersion(GROUP_NAME, GROUP_VERSION)
SCHEME_GROUP_VERSION_KIND = SCHEME_GROUP_VERSION.with_kind(KIND)


def resource(resource: str) -> GroupResource:
    """Qualify an unqualified resource name with this API group."""
    return SCHEME_GROUP_VERSION.with_resource(resource).group_resource()


@dataclass
class OwnerReference:
    """Reference from an object to the object that owns it."""

    api_version: str = ""
    kind: str = ""
    name: str = ""
    uid: str = ""
    controller: Optional[bool] = None
    block_owner_deletion: Optional[bool] = None


@dataclass
class ObjectMeta:
    """Metadata common to all stored objects."""

    name: str = ""
    namespace: str = ""
    uid: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    owner_references: list[OwnerReference] = field(default_factory=list)
    resource_version: str = ""
    deletion_timestamp: Optional[datetime] = None


class _HasMetadata:
    """Shortcuts to the identifying fields of ``metadata``."""

    metadata: ObjectMeta

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace

    @property
    def uid(self) -> str:
        return self.metadata.uid

    @property
    def labels(self) -> dict[str, str]:
        return self.metadata.labels


@dataclass
class ContainerPort:
    name: str = ""
    container_port: int = 0


@dataclass
class Container:
    name: str = ""
    image: str = ""
    args: list[str] = field(default_factory=list)
    ports: list[ContainerPort] = field(default_factory=list)


@dataclass
class PodSpec:
    containers: list[Container] = field(default_factory=list)


@dataclass
class PodTemplateSpec:
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: PodSpec = field(default_factory=PodSpec)


@dataclass
class ContainerStatus:
    name: str = ""
    restart_count: int = 0


@dataclass
class PodStatus:
    phase: Optional[PodPhase] = None
    container_statuses: list[ContainerStatus] = field(default_factory=list)


@dataclass
class Pod(_HasMetadata):
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: PodSpec = field(default_factory=PodSpec)
    status: PodStatus = field(default_factory=PodStatus)
    kind: str = "Pod"


@dataclass
class Service(_HasMetadata):
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    kind: str = "Service"


@dataclass
class ReplicaSpec:
    """Desired state of one replica type."""

    replicas: Optional[int] = None
    template: PodTemplateSpec = field(default_factory=PodTemplateSpec)
    restart_policy: Optional[RestartPolicy] = None


@dataclass
class ReplicaStatus:
    """Observed pod counts of one replica type."""

    active: int = 0
    succeeded: int = 0
    failed: int = 0


@dataclass
class RunPolicy:
    """Runtime policies applied to a job."""

    clean_pod_policy: Optional[CleanPodPolicy] = None
    ttl_seconds_after_finished: Optional[int] = None
    active_deadline_seconds: Optional[int] = None
    backoff_limit: Optional[int] = None


@dataclass
class JobCondition:
    """One observed condition of a job."""

    type: JobConditionType
    status: ConditionStatus
    reason: str = ""
    message: str = ""
    last_update_time: Optional[datetime] = None
    last_transition_time: Optional[datetime] = None


@dataclass
class JobStatus:
    """Observed state of a job."""

    conditions: list[JobCondition] = field(default_factory=list)
    replica_statuses: dict[str, ReplicaStatus] = field(default_factory=dict)
    start_time: Optional[datetime] = None
    completion_time: Optional[datetime] = None
    last_reconcile_time: Optional[datetime] = None


@dataclass
class TestJobSpec:
    """Desired state of a TestJob."""

    __test__ = False

    run_policy: RunPolicy = field(default_factory=RunPolicy)
    test_replica_specs: dict[str, ReplicaSpec] = field(default_factory=dict)


@dataclass
class TestJob(_HasMetadata):
    """A generic job resource."""

    __test__ = False

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: TestJobSpec = field(default_factory=TestJobSpec)
    status: JobStatus = field(default_factory=JobStatus)
    kind: str = KIND
    api_version: str = str(SCHEME_GROUP_VERSION)


@dataclass
class TestJobList:
    """A list of TestJobs."""

    __test__ = False

    items: list[TestJob] = field(default_factory=list)
    resource_version: str = ""
    kind: str = "TestJobList"
    api_version: str = str(SCHEME_GROUP_VERSION)


class _MetadataObject(Protocol):
    metadata: ObjectMeta


def get_controller_of(obj: _MetadataObject) -> Optional[OwnerReference]:
    """Return a copy of the owner reference that controls ``obj``, if any."""
    for ref in obj.metadata.owner_references:
        if ref.controller:
            return dataclasses.replace(ref)
    return None


def new_controller_ref(owner: _MetadataObject, gvk: GroupVersionKind) -> OwnerReference:
    """Build an owner reference that marks ``owner`` as the controller."""
    return OwnerReference(
        api_version=str(gvk.group_version),
        kind=gvk.kind,
        name=owner.metadata.name,
        uid=owner.metadata.uid,
        block_owner_deletion=True,
        controller=True,
    )