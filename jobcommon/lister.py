"""An in-memory object cache and read-only listers of TestJobs over it."""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator, Mapping
from typing import Any, Optional, Union

from jobcommon.k8sutil import ResourceNotFoundError
from jobcommon.models import NAMESPACE_ALL, TestJob, resource

Selector = Union[Mapping[str, str], Callable[[Mapping[str, str]], bool], None]


def meta_namespace_key_func(obj: Any) -> str:
    """Return the cache key of ``obj``: ``namespace/name``, or ``name`` without a namespace.

    A string is taken to be a key already and is returned as it is.
    """
    if isinstance(obj, str):
        return obj
    meta = obj.metadata
    if meta.namespace:
        return f"{meta.namespace}/{meta.name}"
    return meta.name


def _matches(selector: Selector, labels: Mapping[str, str]) -> bool:
    if selector is None:
        return True
    if callable(selector):
        return bool(selector(labels))
    return all(labels.get(key) == value for key, value in selector.items())


class Indexer:
    """Thread-safe store of objects keyed by ``namespace/name``."""

    def __init__(self, key_func: Callable[[Any], str] = meta_namespace_key_func) -> None:
        self._key_func = key_func
        self._items: dict[str, Any] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.list())

    def add(self, obj: Any) -> None:
        """Store ``obj``, replacing any object under the same key."""
        key = self._key_func(obj)
        with self._lock:
            self._items[key] = obj

    def update(self, obj: Any) -> None:
        """Store the new state of ``obj``."""
        self.add(obj)

    def delete(self, obj: Any) -> None:
        """Remove ``obj`` (or the object under the key it maps to) if present."""
        key = self._key_func(obj)
        with self._lock:
            self._items.pop(key, None)

    def get_by_key(self, key: str) -> Optional[Any]:
        """Return the object stored under ``key``, or None."""
        with self._lock:
            return self._items.get(key)

    def list(self) -> list[Any]:
        """Return every stored object."""
        with self._lock:
            return list(self._items.values())

    def by_namespace(self, namespace: str) -> list[Any]:
        """Return the stored objects in ``namespace``; the empty namespace means all."""
        items = self.list()
        if namespace == NAMESPACE_ALL:
            return items
        return [obj for obj in items if obj.metadata.namespace == namespace]


class TestJobLister:
    """Lists TestJobs held in an indexer. Returned objects are to be treated as read-only."""

    __test__ = False

    def __init__(self, indexer: Indexer) -> None:
        self._indexer = indexer

    def list(self, selector: Selector = None) -> list[TestJob]:
        """Return all TestJobs whose labels match ``selector``."""
        return [
            job for job in self._indexer.list() if _matches(selector, job.metadata.labels)
        ]

    def test_jobs(self, namespace: str) -> TestJobNamespaceLister:
        """Return a lister restricted to ``namespace``."""
        return TestJobNamespaceLister(self._indexer, namespace)


class TestJobNamespaceLister:
    """Lists and gets TestJobs of one namespace."""

    __test__ = False

    def __init__(self, indexer: Indexer, namespace: str) -> None:
        self._indexer = indexer
        self.namespace = namespace

    def list(self, selector: Selector = None) -> list[TestJob]:
        """Return the TestJobs of this namespace whose labels match ``selector``."""
        return [
            job
            for job in self._indexer.by_namespace(self.namespace)
            if _matches(selector, job.metadata.labels)
        ]

    def get(self, name: str) -> TestJob:
        """Return the TestJob called ``name``; raise ResourceNotFoundError if absent."""
        obj = self._indexer.get_by_key(f"{self.namespace}/{name}")
        if obj is None:
            raise ResourceNotFoundError(resource("testjob"), name)
        return obj