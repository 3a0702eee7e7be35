import pytest

from jobcommon.fixtures import (
    LABEL_GROUP_NAME,
    LABEL_TEST_JOB_NAME,
    TEST_JOB_NAME,
    always_ready,
    check_condition,
    gen_labels,
    gen_owner_reference,
    get_key,
    new_base_pod,
    new_base_service,
    new_pod,
    new_pod_list,
    new_service,
    new_service_list,
    set_pods_statuses,
    set_services,
)
from jobcommon.k8sutil import filter_pod_count
from jobcommon.lister import Indexer
from jobcommon.models import (
    GROUP_NAME,
    KIND,
    JobConditionType,
    ObjectMeta,
    PodPhase,
    TestJob,
    get_controller_of,
)
from jobcommon.status import update_job_conditions


@pytest.fixture
def job():
    return TestJob(metadata=ObjectMeta(name=TEST_JOB_NAME, namespace="default", uid="uid-1"))


def test_always_ready():
    assert always_ready() is True


def test_gen_labels_replaces_slashes():
    labels = gen_labels("default/test-job")
    assert labels == {LABEL_GROUP_NAME: GROUP_NAME, LABEL_TEST_JOB_NAME: "default-test-job"}


def test_gen_owner_reference(job):
    ref = gen_owner_reference(job)
    assert ref.kind == KIND
    assert ref.api_version == "kubeflow.org/v1"
    assert ref.name == TEST_JOB_NAME
    assert ref.uid == "uid-1"
    assert ref.controller is True
    assert ref.block_owner_deletion is True


def test_get_key(job):
    assert get_key(job) == "default/test-job"


def test_check_condition(job):
    assert not check_condition(job, JobConditionType.RUNNING, "JobRunning")
    update_job_conditions(job.status, JobConditionType.RUNNING, "JobRunning", "msg")
    assert check_condition(job, JobConditionType.RUNNING, "JobRunning")
    assert not check_condition(job, JobConditionType.RUNNING, "Other")


def test_new_base_pod_owned_by_job(job):
    pod = new_base_pod("p", job)
    assert pod.metadata.namespace == "default"
    assert pod.metadata.labels == gen_labels(TEST_JOB_NAME)
    ref = get_controller_of(pod)
    assert ref.name == TEST_JOB_NAME and ref.kind == KIND


def test_new_pod_labels(job):
    pod = new_pod(job, "worker", 3)
    assert pod.metadata.name == "worker-3"
    assert pod.metadata.labels["test-replica-type"] == "worker"
    assert pod.metadata.labels["test-replica-index"] == "3"


def test_new_pod_list(job):
    pods = new_pod_list(2, PodPhase.RUNNING, job, "worker", 5)
    assert [p.metadata.name for p in pods] == ["worker-5", "worker-6"]
    assert all(p.status.phase == PodPhase.RUNNING for p in pods)


def test_set_pods_statuses(job):
    indexer = Indexer()
    set_pods_statuses(indexer, job, "worker", 1, 2, 3, 1, [4, 7])
    pods = indexer.list()
    assert len(pods) == 7
    assert filter_pod_count(pods, PodPhase.PENDING) == 1
    assert filter_pod_count(pods, PodPhase.RUNNING) == 2
    assert filter_pod_count(pods, PodPhase.SUCCEEDED) == 3
    assert filter_pod_count(pods, PodPhase.FAILED) == 1
    running = sorted(
        (p for p in pods if p.status.phase == PodPhase.RUNNING),
        key=lambda p: p.metadata.name,
    )
    assert [p.status.container_statuses[0].restart_count for p in running] == [4, 7]
    assert indexer.get_by_key("default/worker-0").status.phase == PodPhase.PENDING


def test_set_pods_statuses_without_restart_counts(job):
    indexer = Indexer()
    set_pods_statuses(indexer, job, "worker", 0, 2, 0, 0, None)
    assert all(p.status.container_statuses == [] for p in indexer.list())


def test_set_pods_statuses_short_restart_counts(job):
    with pytest.raises(IndexError):
        set_pods_statuses(Indexer(), job, "worker", 0, 2, 0, 0, [1])


def test_new_service(job):
    svc = new_service(job, "worker", 2)
    assert svc.metadata.name == "worker-2"
    assert svc.metadata.labels["test-replica-index"] == "2"
    assert get_controller_of(new_base_service("s", job)).uid == "uid-1"


def test_new_service_list_and_set_services(job):
    services = new_service_list(3, job, "worker")
    assert [s.metadata.name for s in services] == ["worker-0", "worker-1", "worker-2"]
    indexer = Indexer()
    set_services(indexer, job, "worker", 3)
    assert sorted(s.metadata.name for s in indexer.list()) == [
        s.metadata.name for s in services
    ]