"""Storage service: keys, URLs, validation and transaction-bound uploads."""

import io
import os

import pytest
from starlette.datastructures import Headers, UploadFile

from esms.core.config import settings
from esms.services import storage_service


def _upload(name="report.pdf", content=b"%PDF-1.4", content_type="application/pdf"):
    return UploadFile(
        file=io.BytesIO(content),
        filename=name,
        headers=Headers({"content-type": content_type}),
    )


def test_storage_key_is_prefixed_and_sanitized():
    key = storage_service.build_storage_key("../Site Report (final).pdf")
    prefix, name = key.split("/", 1)
    assert prefix == "documents"
    timestamp, random_part, safe_name = name.split("-", 2)
    assert timestamp.isdigit()
    assert len(random_part) == 8
    assert safe_name == "Site-Report-final-.pdf"
    assert "/" not in safe_name


def test_storage_key_falls_back_for_empty_names():
    assert storage_service.build_storage_key("").endswith("-file")


def test_file_urls_round_trip_to_keys(monkeypatch):
    key = "documents/1700000000000-abcd1234-law.pdf"

    url = storage_service.build_file_url(key)
    assert url == f"/api/files/{key}"
    assert storage_service.get_key_from_url(url) == key

    monkeypatch.setattr(settings, "STORAGE_BACKEND", "s3")
    monkeypatch.setattr(settings, "S3_BUCKET", "esms-docs")
    monkeypatch.setattr(settings, "S3_REGION", "af-south-1")
    url = storage_service.build_file_url(key)
    assert url == f"https://esms-docs.s3.af-south-1.amazonaws.com/{key}"
    assert storage_service.get_key_from_url(url) == key

    assert storage_service.get_key_from_url("https://example.com/elsewhere.pdf") is None
    assert storage_service.get_key_from_url(None) is None


def test_local_paths_cannot_escape_the_storage_root(storage_root):
    assert storage_service.local_file_path("documents/a.pdf") == os.path.join(
        os.path.realpath(storage_root), "documents", "a.pdf"
    )
    assert storage_service.local_file_path("../../etc/passwd") is None


@pytest.mark.parametrize(
    "filename,content_type,size,error",
    [
        ("report.pdf", "application/pdf", 10, None),
        ("photo.JPG", "image/jpeg", 10, None),
        ("script.sh", "text/x-shellscript", 10, "File extension '.sh' not allowed"),
        ("report.pdf", "text/html", 10, "Content type 'text/html' not allowed"),
        ("report.pdf", "application/pdf", 26 * 1024 * 1024, "File size exceeds 25 MB limit"),
    ],
)
def test_validate_file(filename, content_type, size, error):
    is_valid, message = storage_service.validate_file(filename, content_type, size)
    assert is_valid is (error is None)
    assert message == error


def test_rollback_removes_uploaded_file(db, storage_root):
    url = storage_service.store_upload(db, _upload())
    path = storage_service.local_file_path(storage_service.get_key_from_url(url))
    assert os.path.exists(path)

    db.rollback()

    assert not os.path.exists(path)


def test_commit_keeps_uploaded_file(db, storage_root):
    url = storage_service.store_upload(db, _upload())
    path = storage_service.local_file_path(storage_service.get_key_from_url(url))

    db.commit()
    db.rollback()

    assert os.path.exists(path)


def test_discards_only_run_after_commit(db, storage_root):
    url = storage_service.store_upload(db, _upload())
    db.commit()
    path = storage_service.local_file_path(storage_service.get_key_from_url(url))

    db.begin()
    storage_service.schedule_discard(db, url)
    db.rollback()
    assert storage_service.process_discards(db) == 0
    assert os.path.exists(path)

    storage_service.schedule_discard(db, url)
    db.commit()
    assert storage_service.process_discards(db) == 0
    assert not os.path.exists(path)


def test_external_urls_are_never_deleted(db, monkeypatch):
    calls = []
    monkeypatch.setattr(storage_service, "delete_file", calls.append)

    storage_service.schedule_discard(db, "https://example.com/law.pdf")
    db.commit()
    storage_service.process_discards(db)

    assert calls == []


def test_presigned_upload_requires_s3():
    with pytest.raises(storage_service.UploadValidationError):
        storage_service.create_presigned_upload("law.pdf", "application/pdf")


def test_presigned_upload_with_s3(monkeypatch):
    class FakeS3:
        def generate_presigned_url(self, operation, Params, ExpiresIn):
            assert operation == "put_object"
            assert Params["ContentType"] == "application/pdf"
            return f"https://signed.example/{Params['Key']}?ttl={ExpiresIn}"

    monkeypatch.setattr(settings, "STORAGE_BACKEND", "s3")
    monkeypatch.setattr(storage_service, "_get_s3_client", lambda: FakeS3())

    result = storage_service.create_presigned_upload("law.pdf", "application/pdf")

    assert result["key"].startswith("documents/")
    assert result["url"] == f"https://signed.example/{result['key']}?ttl=3600"
    assert result["file_url"].endswith(result["key"])
