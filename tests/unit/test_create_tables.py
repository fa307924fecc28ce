"""Tests for the table and bucket setup script."""

from __future__ import annotations

import sys
from pathlib import Path

import boto3
import pytest
from moto import mock_aws

# Make scripts/ importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent / "scripts"))

from create_tables import create_bucket, create_tables  # noqa: E402


@pytest.fixture
def ddb():
    with mock_aws():
        yield boto3.resource("dynamodb", region_name="us-east-1")


class TestCreateTables:
    def test_creates_requisition_table(self, ddb):
        assert create_tables(ddb, suffix="-test") is True
        tables = boto3.client("dynamodb", region_name="us-east-1").list_tables()["TableNames"]
        assert tables == ["seaquote-requisitions-test"]

    def test_key_schema(self, ddb):
        create_tables(ddb)
        keys = {k["AttributeName"]: k["KeyType"] for k in ddb.Table("seaquote-requisitions").key_schema}
        assert keys == {"PK": "HASH", "SK": "RANGE"}

    def test_idempotent_skips_existing(self, ddb):
        create_tables(ddb, suffix="-test")
        assert create_tables(ddb, suffix="-test") is False


class TestCreateBucket:
    def test_creates_and_skips(self, ddb):
        s3 = boto3.client("s3", region_name="us-east-1")
        assert create_bucket(s3, "seaquote-test") is True
        assert create_bucket(s3, "seaquote-test") is False

    def test_regional_bucket(self, ddb):
        s3 = boto3.client("s3", region_name="eu-west-1")
        create_bucket(s3, "seaquote-eu", region="eu-west-1")
        assert s3.get_bucket_location(Bucket="seaquote-eu")["LocationConstraint"] == "eu-west-1"
