# jobcommon

Building blocks for controllers that run distributed training jobs: plain
data models for jobs, pods and services, job condition bookkeeping, replica
arithmetic, defaulting, an in-memory indexer with listers, and builders for
test objects. The package has no third-party dependencies.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `jobcommon.models`: dataclasses and enums such as `TestJob`, `TestJobSpec`,
  `TestJobList`, `JobStatus`, `JobCondition`, `Pod`, `Service`,
  `ReplicaSpec`, `ReplicaStatus` and `RunPolicy`; the enums
  `JobConditionType`, `ConditionStatus`, `PodPhase`, `RestartPolicy`,
  `CleanPodPolicy` and `TestReplicaType`; `GroupVersion` with
  `with_kind()` and `with_resource()`; `resource()`, `get_controller_of()`
  and `new_controller_ref()`.
- `jobcommon.status`: `update_job_conditions()`, `is_succeeded()`,
  `is_failed()`, and the helpers `new_condition()`, `get_condition()`,
  `set_condition()` and `filter_out_condition()`. Running and Restarting
  conditions replace each other, a Failed or Succeeded condition turns a
  Running condition false, and a failed job's conditions are left alone.
- `jobcommon.train`: `is_retryable_exit_code()` tells whether a container
  exit code is worth a retry (130, 137, 138 and 143 are; everything else is
  not).
- `jobcommon.k8sutil`: `filter_active_pods()`, `is_pod_active()`,
  `filter_pod_count()`, `get_total_replicas()` (a spec without a count
  counts as one), `get_total_failed_replicas()`,
  `cascade_delete_options()`, the exceptions `ResourceAlreadyExistsError`
  and `ResourceNotFoundError`, and predicates for them.
- `jobcommon.defaults`: `set_defaults_test_job()` sets the clean-pod policy
  to Running, fixes the case of replica type keys (`worker` becomes
  `Worker`), defaults replicas to 1 and the restart policy to Never, and
  adds the default port to the job container. The single steps are
  available as `set_default_port()`, `set_default_replicas()` and
  `set_type_names_to_camel_case()`.
- `jobcommon.lister`: a thread-safe `Indexer` keyed by `namespace/name`,
  `TestJobLister` and `TestJobNamespaceLister`. Selectors are a mapping of
  labels that must all match, a callable taking the labels, or `None`.
  `TestJobNamespaceLister.get()` raises `ResourceNotFoundError`.
- `jobcommon.logger`: `logger_for_job()`, `logger_for_replica()`,
  `logger_for_pod()`, `logger_for_service()`, `logger_for_key()` and
  `logger_for_unstructured()` return a `FieldLogger` that attaches the
  job, uid and related fields to every record.
- `jobcommon.util`: `pformat()` renders a value as indented JSON (strings
  come back unchanged) and `rand_string()` returns a random string of
  lowercase letters and digits.
- `jobcommon.signals`: `setup_signal_handler()` returns a
  `threading.Event` that is set on the first SIGINT or SIGTERM (SIGINT only
  on Windows); a second signal ends the process with exit code 1. Calling it
  twice raises `RuntimeError`.
- `jobcommon.fixtures`: builders such as `new_pod()`, `new_pod_list()`,
  `set_pods_statuses()`, `new_service_list()`, `set_services()`,
  `gen_labels()`, `gen_owner_reference()` and `check_condition()` for
  writing controller tests.

## Example

```python
from jobcommon.models import JobConditionType, JobStatus
from jobcommon.status import is_failed, update_job_conditions

status = JobStatus()
update_job_conditions(status, JobConditionType.RUNNING, "JobRunning", "Job is running")
update_job_conditions(status, JobConditionType.FAILED, "JobFailed", "Job failed")
assert is_failed(status)
```

```python
from jobcommon.fixtures import set_pods_statuses
from jobcommon.k8sutil import filter_active_pods
from jobcommon.lister import Indexer
from jobcommon.models import ObjectMeta, TestJob

job = TestJob(metadata=ObjectMeta(name="test-job", namespace="default"))
pods = Indexer()
set_pods_statuses(pods, job, "worker", 1, 2, 1, 0)
assert len(filter_active_pods(pods.list())) == 3
```

## What it does not do

The package works on in-memory objects only. It does not talk to a cluster
API server: there is no client, no cluster configuration loading, no
watching or informers, and no command-line program. Objects put into an
`Indexer` come from your own code.