"""Defaulting of TestJob resources."""

from __future__ import annotations

from jobcommon.models import (
    DEFAULT_CONTAINER_NAME,
    DEFAULT_PORT,
    DEFAULT_PORT_NAME,
    DEFAULT_RESTART_POLICY,
    CleanPodPolicy,
    ContainerPort,
    PodSpec,
    ReplicaSpec,
    RunPolicy,
    TestJob,
    TestReplicaType,
)


def set_default_port(spec: PodSpec) -> None:
    """Give the job container the default port unless it already has one.

    The job container is the one with the default container name, or the
    first container when none has that name.
    """
    if not spec.containers:
        raise IndexError("pod spec has no containers")
    container = next(
        (c for c in spec.containers if c.name == DEFAULT_CONTAINER_NAME),
        spec.containers[0],
    )
    if not any(port.name == DEFAULT_PORT_NAME for port in container.ports):
        container.ports.append(
            ContainerPort(name=DEFAULT_PORT_NAME, container_port=DEFAULT_PORT)
        )


def set_default_replicas(spec: ReplicaSpec) -> None:
    """Default the replica count to one and the restart policy to the default."""
    if spec.replicas is None:
        spec.replicas = 1
    if not spec.restart_policy:
        spec.restart_policy = DEFAULT_RESTART_POLICY


def _set_type_name_to_camel_case(test_job: TestJob, typ: TestReplicaType) -> None:
    specs = test_job.spec.test_replica_specs
    wanted = typ.value
    for key in list(specs):
        if key.casefold() == wanted.casefold() and key != wanted:
            specs[wanted] = specs.pop(key)
            return


def set_type_names_to_camel_case(test_job: TestJob) -> None:
    """Rename replica type keys written in any case to their proper case."""
    _set_type_name_to_camel_case(test_job, TestReplicaType.WORKER)
    _set_type_name_to_camel_case(test_job, TestReplicaType.MASTER)


def set_defaults_test_job(test_job: TestJob) -> None:
    """Fill in every unspecified value of ``test_job`` with its default."""
    if test_job.spec.run_policy is None:
        test_job.spec.run_policy = RunPolicy()
    if test_job.spec.run_policy.clean_pod_policy is None:
        test_job.spec.run_policy.clean_pod_policy = CleanPodPolicy.RUNNING

    set_type_names_to_camel_case(test_job)

    for spec in test_job.spec.test_replica_specs.values():
        set_default_replicas(spec)
        set_default_port(spec.template.spec)