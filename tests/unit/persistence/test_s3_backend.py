"""Unit tests for S3FileStore using moto."""

from __future__ import annotations

import boto3
import pytest
from moto import mock_aws

from seaquote.core.exceptions import StorageError
from seaquote.persistence.s3_backend import S3FileStore, content_type_for

BUCKET = "test-requisition-files"


@pytest.fixture
def client():
    with mock_aws():
        client = boto3.client("s3", region_name="us-east-1")
        client.create_bucket(Bucket=BUCKET)
        yield client


@pytest.fixture
def s3_backend(client):
    return S3FileStore(bucket=BUCKET, region="us-east-1")


class TestWrite:
    def test_write_returns_path(self, s3_backend):
        assert s3_backend.write("uploads/2024/03/abc.csv", b"a,b,c") == "uploads/2024/03/abc.csv"

    def test_write_sets_content_type(self, s3_backend, client):
        s3_backend.write("uploads/a.xlsx", b"PK", content_type=content_type_for(".xlsx"))
        head = client.head_object(Bucket=BUCKET, Key="uploads/a.xlsx")
        assert head["ContentType"].startswith("application/vnd.openxmlformats")

    def test_missing_bucket_raises_storage_error(self, client):
        store = S3FileStore(bucket="no-such-bucket")
        with pytest.raises(StorageError):
            store.write("x.csv", b"1")


class TestRead:
    def test_read_returns_bytes(self, s3_backend):
        s3_backend.write("docs/req.csv", b"\x00\x01\x02")
        assert s3_backend.read("docs/req.csv") == b"\x00\x01\x02"

    def test_read_missing_key_raises(self, s3_backend):
        with pytest.raises(StorageError):
            s3_backend.read("does/not/exist.csv")


class TestExists:
    def test_present(self, s3_backend):
        s3_backend.write("uploads/a.csv", b"1")
        assert s3_backend.exists("uploads/a.csv") is True

    def test_absent(self, s3_backend):
        assert s3_backend.exists("uploads/missing.csv") is False


class TestMove:
    def test_move_copies_and_deletes_source(self, s3_backend):
        s3_backend.write("src/file.csv", b"data")
        s3_backend.move("src/file.csv", "dst/file.csv")
        assert s3_backend.read("dst/file.csv") == b"data"
        assert not s3_backend.exists("src/file.csv")

    def test_move_missing_source(self, s3_backend):
        with pytest.raises(StorageError):
            s3_backend.move("src/none.csv", "dst/none.csv")


class TestListFiles:
    def test_list_returns_matching_keys(self, s3_backend):
        s3_backend.write("prefix/a.csv", b"1")
        s3_backend.write("prefix/b.csv", b"2")
        s3_backend.write("other/c.csv", b"3")
        assert sorted(s3_backend.list_files("prefix/")) == ["prefix/a.csv", "prefix/b.csv"]

    def test_list_empty_prefix_returns_nothing(self, s3_backend):
        assert s3_backend.list_files("nonexistent/") == []

    def test_list_handles_pagination(self, s3_backend):
        for i in range(1050):
            s3_backend.write(f"bulk/{i:04d}.txt", b"x")
        assert len(s3_backend.list_files("bulk/")) == 1050


def test_content_type_fallback():
    assert content_type_for(".CSV") == "text/csv"
    assert content_type_for(".bin") == "application/octet-stream"
