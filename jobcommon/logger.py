"""Loggers carrying the identifying fields of jobs, pods and services."""

from __future__ import annotations

import logging
from collections.abc import Mapping, MutableMapping
from typing import Any

from jobcommon.models import Pod, Service, get_controller_of

_base_logger = logging.getLogger("jobcommon")


class FieldLogger(logging.LoggerAdapter):
    """Logger adapter that attaches structured fields to every record."""

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        suffix = " ".join(f"{key}={value}" for key, value in self.extra.items())
        return (f"{msg} {suffix}" if suffix else msg), kwargs

    @property
    def fields(self) -> dict[str, Any]:
        return dict(self.extra)


def _fields(**fields: Any) -> FieldLogger:
    return FieldLogger(_base_logger, fields)


def _plain(value: Any) -> Any:
    return getattr(value, "value", value)


def logger_for_replica(job: Any, rtype: Any) -> FieldLogger:
    """Logger for one replica type of a job."""
    return FieldLogger(
        _base_logger,
        {
            "job": f"{job.metadata.namespace}.{job.metadata.name}",
            "uid": job.metadata.uid,
            "replica-type": _plain(rtype),
        },
    )


def logger_for_job(job: Any) -> FieldLogger:
    """Logger for a job, keyed as namespace.name."""
    return _fields(
        job=f"{job.metadata.namespace}.{job.metadata.name}",
        uid=job.metadata.uid,
    )


def _owning_job(obj: Pod | Service, kind: str) -> str:
    ref = get_controller_of(obj)
    if ref is not None and ref.kind == kind:
        return f"{obj.metadata.namespace}.{ref.name}"
    return ""


def logger_for_pod(pod: Pod, kind: str) -> FieldLogger:
    """Logger for a pod; the job field is set when a controller of ``kind`` owns it."""
    return _fields(
        job=_owning_job(pod, kind),
        pod=f"{pod.metadata.namespace}.{pod.metadata.name}",
        uid=pod.metadata.uid,
    )


def logger_for_service(svc: Service, kind: str) -> FieldLogger:
    """Logger for a service; the job field is set when a controller of ``kind`` owns it."""
    return _fields(
        job=_owning_job(svc, kind),
        service=f"{svc.metadata.namespace}.{svc.metadata.name}",
        uid=svc.metadata.uid,
    )


def logger_for_key(key: str) -> FieldLogger:
    """Logger for a work-queue key of the form namespace/name."""
    return _fields(job=key.replace("/", "."))


def logger_for_unstructured(obj: Mapping[str, Any], kind: str) -> FieldLogger:
    """Logger for an object given in its raw mapping form."""
    metadata = obj.get("metadata") or {}
    job = ""
    if obj.get("kind", "") == kind:
        job = f"{metadata.get('namespace', '')}.{metadata.get('name', '')}"
    return _fields(job=job, uid=metadata.get("uid", ""))