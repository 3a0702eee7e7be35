import pytest

from jobcommon import models


def test_scheme_group_version_string():
    gv = models.GroupVersion(models.GROUP_NAME, models.GROUP_VERSION)
    assert str(gv) == "kubeflow.org/v1"
    assert gv == models.SCHEME_GROUP_VERSION


def test_group_version_without_group_is_version_only():
    assert str(models.GroupVersion("", "v1")) == "v1"


def test_with_kind_keeps_group_and_version():
    gvk = models.SCHEME_GROUP_VERSION.with_kind(models.KIND)
    assert gvk == models.GroupVersionKind("kubeflow.org", "v1", "TestJob")
    assert gvk.group_version == models.SCHEME_GROUP_VERSION
    assert models.SCHEME_GROUP_VERSION_KIND == gvk


def test_with_resource_and_group_resource_round_trip():
    gvr = models.SCHEME_GROUP_VERSION.with_resource(models.PLURAL)
    assert gvr.version == models.GROUP_VERSION
    assert gvr.group_resource() == models.GroupResource("kubeflow.org", "testjobs")


def test_resource_qualifies_name():
    gr = models.resource("testjobs")
    assert gr.group == models.GROUP_NAME
    assert str(gr) == models.TESTCRD


def test_test_job_defaults():
    job = models.TestJob()
    assert job.kind == "TestJob"
    assert job.api_version == "kubeflow.org/v1"
    assert job.spec.test_replica_specs == {}
    assert job.status.conditions == []


def test_metadata_shortcuts():
    job = models.TestJob(metadata=models.ObjectMeta(name="test-job", namespace="ns", uid="u1"))
    assert (job.name, job.namespace, job.uid) == ("test-job", "ns", "u1")


def test_str_enums_compare_with_strings():
    assert models.TestReplicaType.WORKER == "Worker"
    assert models.DEFAULT_RESTART_POLICY is models.RestartPolicy.NEVER
    assert models.CleanPodPolicy("Running") is models.CleanPodPolicy.RUNNING


def test_new_controller_ref_marks_controller():
    job = models.TestJob(metadata=models.ObjectMeta(name="test-job", uid="abc"))
    ref = models.new_controller_ref(job, models.SCHEME_GROUP_VERSION_KIND)
    assert ref.api_version == "kubeflow.org/v1"
    assert ref.kind == "TestJob"
    assert ref.name == "test-job"
    assert ref.uid == "abc"
    assert ref.controller is True
    assert ref.block_owner_deletion is True


def test_get_controller_of_finds_controller_reference():
    job = models.TestJob(metadata=models.ObjectMeta(name="owner", uid="abc"))
    ref = models.new_controller_ref(job, models.SCHEME_GROUP_VERSION_KIND)
    other = models.OwnerReference(kind="Other", name="x", controller=False)
    pod = models.Pod(metadata=models.ObjectMeta(owner_references=[other, ref]))
    found = models.get_controller_of(pod)
    assert found == ref
    found.name = "changed"
    assert pod.metadata.owner_references[1].name == "owner"


@pytest.mark.parametrize(
    "refs",
    [[], [models.OwnerReference(name="x")], [models.OwnerReference(name="y", controller=False)]],
)
def test_get_controller_of_without_controller(refs):
    svc = models.Service(metadata=models.ObjectMeta(owner_references=refs))
    assert models.get_controller_of(svc) is None