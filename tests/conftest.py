"""Test configuration and fixtures for s3-actions."""

import io
from typing import Optional

import pytest

from s3_actions.core.exceptions import RemoteOperationFailed


class FakeStorageClient:
    """In-memory StorageClient that records every call it receives."""

    def __init__(self):
        self.buckets: dict[str, dict[str, tuple[bytes, str]]] = {}
        self.calls: list[tuple[str, tuple]] = []
        self.failures: dict[str, Exception] = {}
        self.accelerated: set[str] = set()

    def _record(self, name: str, *args) -> None:
        self.calls.append((name, args))
        if name in self.failures:
            raise self.failures[name]

    def called(self, name: str) -> int:
        return sum(1 for call, _ in self.calls if call == name)

    def bucket_exists(self, name: str) -> bool:
        self._record("bucket_exists", name)
        return name in self.buckets

    def create_bucket(self, name: str, region: Optional[str] = None) -> None:
        self._record("create_bucket", name, region)
        self.buckets[name] = {}

    def enable_bucket_acceleration(self, name: str) -> str:
        self._record("enable_bucket_acceleration", name)
        self.accelerated.add(name)
        return "Enabled"

    def delete_bucket(self, name: str) -> None:
        self._record("delete_bucket", name)
        del self.buckets[name]

    def object_exists(self, bucket: str, key: str) -> bool:
        self._record("object_exists", bucket, key)
        return key in self.buckets.get(bucket, {})

    def put_object(self, bucket, key, stream, content_type) -> None:
        self._record("put_object", bucket, key, content_type)
        self.buckets[bucket][key] = (stream.read(), content_type)

    def get_object(self, bucket: str, key: str):
        self._record("get_object", bucket, key)
        return io.BytesIO(self.buckets[bucket][key][0])

    def copy_object(self, source_bucket, source_key, bucket, key) -> None:
        self._record("copy_object", source_bucket, source_key, bucket, key)
        self.buckets[bucket][key] = self.buckets[source_bucket][source_key]

    def delete_object(self, bucket: str, key: str) -> None:
        self._record("delete_object", bucket, key)
        del self.buckets[bucket][key]


@pytest.fixture
def fake_client():
    """Create an empty in-memory storage client."""
    return FakeStorageClient()


@pytest.fixture
def populated_client(fake_client):
    """Create a storage client holding a source and a destination bucket."""
    fake_client.buckets["source-bucket"] = {
        "a.txt": (b"alpha", "text/plain"),
        "b.txt": (b"bravo", "text/plain"),
    }
    fake_client.buckets["archive-bucket"] = {}
    return fake_client


@pytest.fixture
def remote_failure():
    """Create a service-side failure to inject into the fake client."""
    return RemoteOperationFailed("service unavailable", bucket="source-bucket")
