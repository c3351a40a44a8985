"""Tests for archive extraction and saving."""

import io
import tarfile

import pytest

from conftest import make_zip
from local_dynamodb.binaries.archives import (
    archive_format,
    extract_archive,
    save_archive,
    sniff_format,
)
from local_dynamodb.errors import ExtractionError, WriteError


@pytest.mark.parametrize(
    "name,expected",
    [
        ("https://example.com/dynamodb_local_latest.zip", ".zip"),
        ("https://example.com/dynamodb_local_latest.zip?sig=abc", ".zip"),
        ("/tmp/dynamodb_local_2.5.2.zip", ".zip"),
        ("/tmp/dynamodb_local_latest.tar.gz", ".tar.gz"),
        ("dynamodb.tgz", ".tgz"),
        ("dynamodb", ""),
    ],
)
def test_archive_format(name, expected):
    assert archive_format(name) == expected


def test_extract_zip(tmp_path, dynamodb_zip):
    dest = extract_archive(dynamodb_zip, ".zip", tmp_path)

    assert dest == tmp_path
    assert (tmp_path / "DynamoDBLocal.jar").read_bytes() == b"jar"
    assert (tmp_path / "DynamoDBLocal_lib").is_dir()


def test_extract_zip_overwrites(tmp_path):
    (tmp_path / "DynamoDBLocal.jar").write_bytes(b"old")

    extract_archive(make_zip({"DynamoDBLocal.jar": b"new"}), ".zip", tmp_path)

    assert (tmp_path / "DynamoDBLocal.jar").read_bytes() == b"new"


def test_extract_tar(tmp_path):
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as tf:
        info = tarfile.TarInfo("DynamoDBLocal.jar")
        info.size = 3
        tf.addfile(info, io.BytesIO(b"jar"))

    extract_archive(buffer.getvalue(), ".tar.gz", tmp_path)

    assert (tmp_path / "DynamoDBLocal.jar").read_bytes() == b"jar"


def test_extract_corrupt_archive(tmp_path):
    with pytest.raises(ExtractionError):
        extract_archive(b"not a zip", ".zip", tmp_path)


def test_extract_unrecognized_suffix_non_archive(tmp_path):
    with pytest.raises(ExtractionError):
        extract_archive(b"data", ".rar", tmp_path)


@pytest.mark.parametrize("hint", ["", ".bin", ".rar"])
def test_extract_sniffs_zip(tmp_path, dynamodb_zip, hint):
    extract_archive(dynamodb_zip, hint, tmp_path)

    assert (tmp_path / "DynamoDBLocal.jar").read_bytes() == b"jar"


def test_extract_sniffs_tar(tmp_path):
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as tf:
        info = tarfile.TarInfo("DynamoDBLocal.jar")
        info.size = 3
        tf.addfile(info, io.BytesIO(b"jar"))

    extract_archive(buffer.getvalue(), "", tmp_path)

    assert (tmp_path / "DynamoDBLocal.jar").read_bytes() == b"jar"


def test_sniff_format(dynamodb_zip):
    assert sniff_format(dynamodb_zip) == ".zip"
    assert sniff_format(b"not an archive") == ".zip"


def test_save_archive(tmp_path):
    target = tmp_path / "dynamodb_local_latest.zip"

    assert save_archive(b"raw", target) == target
    assert target.read_bytes() == b"raw"


def test_save_archive_missing_dir(tmp_path):
    with pytest.raises(WriteError):
        save_archive(b"raw", tmp_path / "missing" / "dynamodb_local_latest.zip")
