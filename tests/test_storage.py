"""Tests for the optional S3 photo archive."""

import threading

import pytest

from cannaconnect.services import storage
from cannaconnect.services.validation import validate_photo_data_uri

pytestmark = [pytest.mark.fast]


class _FakeS3:
    def __init__(self, fail=False):
        self.fail = fail
        self.objects = []
        self.thread_ids = []

    def put_object(self, **kwargs):
        self.thread_ids.append(threading.get_ident())
        if self.fail:
            raise RuntimeError("access denied")
        self.objects.append(kwargs)


@pytest.mark.asyncio
async def test_archive_skipped_without_bucket(monkeypatch):
    def _no_client(*args, **kwargs):
        raise AssertionError("boto3 must not be used without a bucket")

    monkeypatch.setattr(storage.boto3, "client", _no_client)
    photo = validate_photo_data_uri("data:image/png;base64,aGVsbG8=")
    assert await storage.archive_photo(photo, kind="identify", bucket="") is None


@pytest.mark.asyncio
async def test_archive_uploads_decoded_bytes(monkeypatch):
    s3 = _FakeS3()
    monkeypatch.setattr(storage.boto3, "client", lambda *a, **kw: s3)
    photo = validate_photo_data_uri("data:image/png;base64,aGVsbG8=")

    url = await storage.archive_photo(photo, kind="analyze", bucket="grow-photos")

    assert len(s3.objects) == 1
    obj = s3.objects[0]
    assert obj["Bucket"] == "grow-photos"
    assert obj["Body"] == b"hello"
    assert obj["ContentType"] == "image/png"
    assert obj["Key"].startswith("scans/analyze/")
    assert obj["Key"].endswith(".png")
    assert url.startswith("https://grow-photos.s3.")


@pytest.mark.asyncio
async def test_archive_failure_is_non_blocking(monkeypatch):
    monkeypatch.setattr(storage.boto3, "client", lambda *a, **kw: _FakeS3(fail=True))
    photo = validate_photo_data_uri("data:image/png;base64,aGVsbG8=")
    assert await storage.archive_photo(photo, kind="identify", bucket="grow-photos") is None


@pytest.mark.asyncio
async def test_archive_upload_runs_off_the_event_loop_thread(monkeypatch):
    """The blocking boto3 call runs in a worker thread."""
    s3 = _FakeS3()
    monkeypatch.setattr(storage.boto3, "client", lambda *a, **kw: s3)
    photo = validate_photo_data_uri("data:image/png;base64,aGVsbG8=")

    await storage.archive_photo(photo, kind="identify", bucket="grow-photos")

    assert s3.thread_ids and s3.thread_ids[0] != threading.get_ident()
