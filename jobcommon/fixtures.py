"""Builders of TestJobs, pods and services for controller tests."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional

from jobcommon.lister import Indexer, meta_namespace_key_func
from jobcommon.models import (
    GROUP_NAME,
    KIND,
    SCHEME_GROUP_VERSION,
    SCHEME_GROUP_VERSION_KIND,
    ConditionStatus,
    ContainerStatus,
    JobConditionType,
    ObjectMeta,
    OwnerReference,
    Pod,
    PodPhase,
    PodStatus,
    Service,
    TestJob,
    new_controller_ref,
)

TEST_IMAGE_NAME = "test-image-for-kubeflow-common:latest"
TEST_JOB_NAME = "test-job"
LABEL_WORKER = "worker"

SLEEP_INTERVAL = 0.5  # seconds
THREAD_COUNT = 1

LABEL_GROUP_NAME = "group-name"
LABEL_TEST_JOB_NAME = "test-job-name"
TEST_GROUP_NAME = GROUP_NAME

_REPLICA_TYPE_LABEL = "test-replica-type"
_REPLICA_INDEX_LABEL = "test-replica-index"

_CONTROLLER_KIND = SCHEME_GROUP_VERSION_KIND


def always_ready() -> bool:
    """A readiness check that always passes."""
    return True


def gen_labels(job_name: str) -> dict[str, str]:
    """Labels identifying the objects of a job."""
    return {
        LABEL_GROUP_NAME: TEST_GROUP_NAME,
        LABEL_TEST_JOB_NAME: job_name.replace("/", "-"),
    }


def gen_owner_reference(test_job: TestJob) -> OwnerReference:
    """An owner reference marking ``test_job`` as controller."""
    return OwnerReference(
        api_version=str(SCHEME_GROUP_VERSION),
        kind=KIND,
        name=test_job.metadata.name,
        uid=test_job.metadata.uid,
        block_owner_deletion=True,
        controller=True,
    )


def get_key(test_job: TestJob) -> str:
    """The cache key of ``test_job``."""
    return meta_namespace_key_func(test_job)


def check_condition(
    test_job: TestJob, condition: JobConditionType, reason: str
) -> bool:
    """Tell whether the job has a true condition of this type with this reason."""
    return any(
        c.type == condition and c.status == ConditionStatus.TRUE and c.reason == reason
        for c in test_job.status.conditions
    )


def _base_meta(name: str, test_job: TestJob) -> ObjectMeta:
    return ObjectMeta(
        name=name,
        labels=gen_labels(test_job.metadata.name),
        namespace=test_job.metadata.namespace,
        owner_references=[new_controller_ref(test_job, _CONTROLLER_KIND)],
    )


def new_base_pod(name: str, test_job: TestJob) -> Pod:
    """A pod owned by ``test_job`` carrying its labels."""
    return Pod(metadata=_base_meta(name, test_job))


def new_pod(test_job: TestJob, typ: str, index: int) -> Pod:
    """The pod of replica ``typ`` number ``index``."""
    pod = new_base_pod(f"{typ}-{index}", test_job)
    pod.metadata.labels[_REPLICA_TYPE_LABEL] = typ
    pod.metadata.labels[_REPLICA_INDEX_LABEL] = str(index)
    return pod


def new_pod_list(
    count: int, status: PodPhase, test_job: TestJob, typ: str, start: int
) -> list[Pod]:
    """``count`` pods in phase ``status``, numbered from ``start``."""
    pods = []
    for index in range(start, start + count):
        pod = new_pod(test_job, typ, index)
        pod.status = PodStatus(phase=status)
        pods.append(pod)
    return pods


def set_pods_statuses(
    pod_indexer: Indexer,
    test_job: TestJob,
    typ: str,
    pending_pods: int,
    active_pods: int,
    succeeded_pods: int,
    failed_pods: int,
    restart_counts: Optional[Sequence[int]] = None,
) -> None:
    """Add pending, running, succeeded and failed pods of ``typ`` to the indexer.

    Pods are numbered consecutively across the phases. Running pods get the
    restart counts given, one per pod.
    """
    index = 0
    for pod in new_pod_list(pending_pods, PodPhase.PENDING, test_job, typ, index):
        pod_indexer.add(pod)
    index += pending_pods
    for i, pod in enumerate(
        new_pod_list(active_pods, PodPhase.RUNNING, test_job, typ, index)
    ):
        if restart_counts is not None:
            pod.status.container_statuses = [
                ContainerStatus(restart_count=restart_counts[i])
            ]
        pod_indexer.add(pod)
    index += active_pods
    for pod in new_pod_list(succeeded_pods, PodPhase.SUCCEEDED, test_job, typ, index):
        pod_indexer.add(pod)
    index += succeeded_pods
    for pod in new_pod_list(failed_pods, PodPhase.FAILED, test_job, typ, index):
        pod_indexer.add(pod)


def new_base_service(name: str, test_job: TestJob) -> Service:
    """A service owned by ``test_job`` carrying its labels."""
    return Service(metadata=_base_meta(name, test_job))


def new_service(test_job: TestJob, typ: str, index: int) -> Service:
    """The service of replica ``typ`` number ``index``."""
    service = new_base_service(f"{typ}-{index}", test_job)
    service.metadata.labels[_REPLICA_TYPE_LABEL] = typ
    service.metadata.labels[_REPLICA_INDEX_LABEL] = str(index)
    return service


def new_service_list(count: int, test_job: TestJob, typ: str) -> list[Service]:
    """``count`` services of ``typ``, numbered from zero."""
    return [new_service(test_job, typ, index) for index in range(count)]


def set_services(
    service_indexer: Indexer, test_job: TestJob, typ: str, active_worker_services: int
) -> None:
    """Add ``active_worker_services`` services of ``typ`` to the indexer."""
    for service in new_service_list(active_worker_services, test_job, typ):
        service_indexer.add(service)