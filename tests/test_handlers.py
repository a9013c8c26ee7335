"""Tests for handlers layer."""

import base64
from unittest.mock import MagicMock, call, patch

import pytest

from inspection_uploader.exceptions import UploadError
from inspection_uploader.handlers.batch_upload import process_batch, process_item
from inspection_uploader.handlers.single_upload import (
    upload_binary,
    upload_form,
    upload_json,
)
from inspection_uploader.services.s3_uploader import S3Uploader

IMAGE_BYTES = b"\xff\xd8\xff\xe0 fake jpeg payload"
IMAGE_B64 = base64.b64encode(IMAGE_BYTES).decode()


@pytest.fixture
def mock_s3_uploader():
    uploader = MagicMock(spec=S3Uploader)
    uploader.bucket = "test-bucket"
    return uploader


def _batch(screenshots, **overrides):
    payload = {
        "mobileNumber": "+1 (234) 567-890!",
        "inspectionUuid": "insp-1",
        "screenshots": screenshots,
    }
    payload.update(overrides)
    return payload


def _shot(filename="shot", image=IMAGE_B64, **extra):
    return {"filename": filename, "image": image, **extra}


class TestProcessBatchEnvelope:
    """Tests for batch envelope rejection."""

    @pytest.mark.parametrize("screenshots", [None, [], "not-a-list", {"a": 1}])
    def test_invalid_screenshots_rejected(self, screenshots, mock_s3_uploader):
        """Test missing, empty or non-list screenshots give 400."""
        result = process_batch(_batch(screenshots), mock_s3_uploader)

        assert result.status_code == 400
        assert result.body == {"error": "Missing or invalid screenshots array"}
        mock_s3_uploader.upload.assert_not_called()

    def test_missing_screenshots_key_rejected(self, mock_s3_uploader):
        """Test a body without screenshots gives 400."""
        result = process_batch({"inspectionUuid": "insp-1"}, mock_s3_uploader)

        assert result.status_code == 400
        mock_s3_uploader.upload.assert_not_called()

    def test_non_object_payload_rejected(self, mock_s3_uploader):
        """Test a JSON array body gives 400."""
        result = process_batch([_shot()], mock_s3_uploader)

        assert result.status_code == 400
        mock_s3_uploader.upload.assert_not_called()

    def test_too_many_screenshots_rejected(self, mock_s3_uploader):
        """Test 101 screenshots give 400."""
        result = process_batch(_batch([_shot()] * 101), mock_s3_uploader)

        assert result.status_code == 400
        assert "Maximum 100" in result.body["error"]
        assert "101" in result.body["error"]
        mock_s3_uploader.upload.assert_not_called()

    def test_exactly_100_screenshots_accepted(self, mock_s3_uploader):
        """Test the batch ceiling is inclusive."""
        result = process_batch(_batch([_shot()] * 100), mock_s3_uploader)

        assert result.status_code == 200
        assert mock_s3_uploader.upload.call_count == 100

    @pytest.mark.parametrize("inspection_uuid", [None, "", "!!!///"])
    def test_missing_inspection_uuid_rejected(self, inspection_uuid, mock_s3_uploader):
        """Test absent or fully stripped inspection UUIDs give 400."""
        payload = _batch([_shot()], inspectionUuid=inspection_uuid)

        result = process_batch(payload, mock_s3_uploader)

        assert result.status_code == 400
        assert result.body == {"error": "Inspection UUID is required"}
        mock_s3_uploader.upload.assert_not_called()

    def test_omitted_inspection_uuid_rejected(self, mock_s3_uploader):
        """Test omitting inspectionUuid entirely gives 400."""
        payload = {"screenshots": [_shot()]}

        result = process_batch(payload, mock_s3_uploader)

        assert result.status_code == 400
        mock_s3_uploader.upload.assert_not_called()


class TestProcessBatch:
    """Tests for per-item processing and the aggregate report."""

    def test_all_items_succeed(self, mock_s3_uploader):
        """Test a fully valid batch reports every item as success."""
        payload = _batch([_shot("a"), _shot("b", extension="png")])

        result = process_batch(payload, mock_s3_uploader)
        body = result.body

        assert result.status_code == 200
        assert body["message"] == "Batch upload: 2/2 successful"
        assert body["bucket"] == "test-bucket"
        assert body["successful"] == 2
        assert body["failed"] == 0
        assert body["total"] == 2
        assert body["folderPath"] == "+1_234_567_890/insp-1/insp-1"
        assert body["mobileNumber"] == "+1_234_567_890"
        assert body["inspectionUuid"] == "insp-1"
        assert "duration" in body
        assert "avgTimePerFile" in body

        first, second = body["details"]
        assert first == {
            "index": 0,
            "filename": "a.jpg",
            "status": "success",
            "key": "+1_234_567_890/insp-1/insp-1/a.jpg",
            "size": len(IMAGE_BYTES),
            "sizeKB": f"{len(IMAGE_BYTES) / 1024:.2f}",
        }
        assert second["filename"] == "b.png"
        assert second["key"].endswith("/b.png")

        mock_s3_uploader.upload.assert_has_calls(
            [
                call("+1_234_567_890/insp-1/insp-1/a.jpg", IMAGE_BYTES, "image/jpeg"),
                call("+1_234_567_890/insp-1/insp-1/b.png", IMAGE_BYTES, "image/png"),
            ]
        )

    def test_bad_base64_isolated(self, mock_s3_uploader):
        """Test one undecodable item fails alone."""
        payload = _batch([_shot("a"), _shot("b", image="not base64!!!"), _shot("c")])

        result = process_batch(payload, mock_s3_uploader)
        body = result.body

        assert result.status_code == 200
        assert body["successful"] == 2
        assert body["failed"] == 1
        assert [d["status"] for d in body["details"]] == ["success", "failed", "success"]
        assert body["details"][1]["error"].startswith("Invalid base64 data")
        assert body["details"][1]["filename"] == "b"
        assert "key" not in body["details"][1]
        assert mock_s3_uploader.upload.call_count == 2

    def test_all_items_invalid_returns_500(self, mock_s3_uploader):
        """Test a batch where nothing uploads answers 500 with the full report."""
        payload = _batch([{"image": IMAGE_B64}, "junk", _shot(image="")])

        result = process_batch(payload, mock_s3_uploader)
        body = result.body

        assert result.status_code == 500
        assert body["successful"] == 0
        assert body["failed"] == body["total"] == 3
        assert body["message"] == "Batch upload: 0/3 successful"
        assert [d["error"] for d in body["details"]] == [
            "Screenshot at index 0 missing filename",
            "Screenshot at index 1 is not an object",
            "Screenshot at index 2 missing image data",
        ]
        assert body["details"][0]["filename"] == "unknown"
        mock_s3_uploader.upload.assert_not_called()

    def test_upload_error_isolated(self, mock_s3_uploader):
        """Test a storage failure affects only its own item."""
        mock_s3_uploader.upload.side_effect = [
            None,
            UploadError("k", "Access Denied"),
            None,
        ]
        payload = _batch([_shot("a"), _shot("b"), _shot("c")])

        result = process_batch(payload, mock_s3_uploader)
        body = result.body

        assert result.status_code == 200
        assert body["successful"] == 2
        assert body["details"][1] == {
            "index": 1,
            "filename": "b",
            "status": "failed",
            "error": "Access Denied",
        }
        assert mock_s3_uploader.upload.call_count == 3

    def test_counts_and_order_preserved(self, mock_s3_uploader):
        """Test one outcome per input index, in input order."""
        screenshots = [
            _shot(f"s{i}") if i % 3 else _shot(f"s{i}", image="%%%") for i in range(10)
        ]

        body = process_batch(_batch(screenshots), mock_s3_uploader).body

        assert body["successful"] + body["failed"] == body["total"] == 10
        assert [d["index"] for d in body["details"]] == list(range(10))

    def test_prdp_journey_folder(self, mock_s3_uploader):
        """Test the PRDP journey stores items under the PRDP folder."""
        payload = _batch(
            [_shot("a")],
            prdpUuid="prdp-9",
            journeyType="PRE_INSPECTION_PRDP",
        )

        body = process_batch(payload, mock_s3_uploader).body

        assert body["folderPath"] == "+1_234_567_890/insp-1/prdp-9"
        assert body["prdpUuid"] == "prdp-9"
        assert body["journeyType"] == "PRE_INSPECTION_PRDP"
        assert body["details"][0]["key"] == "+1_234_567_890/insp-1/prdp-9/a.jpg"

    def test_missing_mobile_number_uses_unknown(self, mock_s3_uploader):
        """Test a batch without mobile number is stored under unknown."""
        payload = {"inspectionUuid": "insp-1", "screenshots": [_shot("a")]}

        body = process_batch(payload, mock_s3_uploader).body

        assert body["folderPath"] == "unknown/insp-1/insp-1"

    def test_duplicate_filenames_share_key(self, mock_s3_uploader):
        """Test duplicate filenames are uploaded to the same key."""
        body = process_batch(_batch([_shot("a"), _shot("a")]), mock_s3_uploader).body

        assert body["details"][0]["key"] == body["details"][1]["key"]
        assert mock_s3_uploader.upload.call_count == 2

    @patch("inspection_uploader.handlers.batch_upload.time.monotonic")
    def test_duration_and_average(self, mock_monotonic, mock_s3_uploader):
        """Test duration is in milliseconds and averaged per file."""
        mock_monotonic.side_effect = [10.0, 10.5]

        body = process_batch(
            _batch([_shot("a"), _shot("b"), _shot("c")]), mock_s3_uploader
        ).body

        assert body["duration"] == 500
        assert body["avgTimePerFile"] == "166.67"


class TestProcessItem:
    """Tests for process_item."""

    def test_unexpected_error_becomes_failure(self, mock_s3_uploader):
        """Test an unexpected exception is recorded, not raised."""
        mock_s3_uploader.upload.side_effect = RuntimeError("unexpected")

        outcome = process_item(_shot("a"), 4, "f/p/c", mock_s3_uploader)

        assert outcome.status == "failed"
        assert outcome.index == 4
        assert outcome.filename == "a"
        assert outcome.error == "unexpected"

    def test_empty_payload_fails(self, mock_s3_uploader):
        """Test whitespace-only image data is reported as empty."""
        outcome = process_item(_shot("a", image="  "), 0, "f/p/c", mock_s3_uploader)

        assert outcome.status == "failed"
        assert outcome.error == "Empty image data"
        mock_s3_uploader.upload.assert_not_called()


class TestSingleUploads:
    """Tests for the single-image upload handlers."""

    @patch("inspection_uploader.handlers.single_upload.now_ms", return_value=1700000000000)
    def test_upload_json_success(self, mock_now, mock_s3_uploader):
        """Test JSON upload stores the decoded image under a timestamped key."""
        result = upload_json(
            {"filename": "photo", "extension": "png", "timestamp": 42, "image": IMAGE_B64},
            mock_s3_uploader,
        )

        assert result.status_code == 200
        assert result.body == {
            "message": "Upload successful (JSON → S3)",
            "key": "1700000000000-photo.png",
            "bucket": "test-bucket",
            "size": len(IMAGE_BYTES),
            "timestamp": 42,
        }
        mock_s3_uploader.upload.assert_called_once_with(
            "1700000000000-photo.png", IMAGE_BYTES, "image/png"
        )

    @pytest.mark.parametrize(
        "payload", [{}, {"filename": "photo"}, {"image": IMAGE_B64}, None]
    )
    def test_upload_json_missing_fields(self, payload, mock_s3_uploader):
        """Test JSON upload requires filename and image."""
        result = upload_json(payload, mock_s3_uploader)

        assert result.status_code == 400
        assert result.body == {"error": "Missing filename or image data"}
        mock_s3_uploader.upload.assert_not_called()

    def test_upload_json_bad_base64(self, mock_s3_uploader):
        """Test JSON upload rejects undecodable data."""
        result = upload_json({"filename": "p", "image": "%%%"}, mock_s3_uploader)

        assert result.status_code == 400
        mock_s3_uploader.upload.assert_not_called()

    def test_upload_json_storage_failure(self, mock_s3_uploader):
        """Test storage errors become 500 Upload failed."""
        mock_s3_uploader.upload.side_effect = UploadError("k", "Access Denied")

        result = upload_json({"filename": "p", "image": IMAGE_B64}, mock_s3_uploader)

        assert result.status_code == 500
        assert result.body == {"error": "Upload failed", "details": "Access Denied"}

    @patch("inspection_uploader.handlers.single_upload.now_ms", return_value=1700000000000)
    def test_upload_form_success(self, mock_now, mock_s3_uploader):
        """Test form upload keeps the original file name and content type."""
        result = upload_form("photo.png", b"png", "image/png", "99", mock_s3_uploader)

        assert result.status_code == 200
        assert result.body["key"] == "1700000000000-photo.png"
        assert result.body["timestamp"] == "99"
        mock_s3_uploader.upload.assert_called_once_with(
            "1700000000000-photo.png", b"png", "image/png"
        )

    @patch("inspection_uploader.handlers.single_upload.now_ms", return_value=1700000000000)
    def test_upload_form_defaults(self, mock_now, mock_s3_uploader):
        """Test missing content type and timestamp are filled in."""
        result = upload_form("photo.webp", b"w", None, None, mock_s3_uploader)

        assert result.body["timestamp"] == 1700000000000
        mock_s3_uploader.upload.assert_called_once_with(
            "1700000000000-photo.webp", b"w", "image/webp"
        )

    def test_upload_form_without_file(self, mock_s3_uploader):
        """Test form upload requires a file."""
        result = upload_form(None, None, None, None, mock_s3_uploader)

        assert result.status_code == 400
        assert result.body == {"error": "No file uploaded"}

    @patch("inspection_uploader.handlers.single_upload.now_ms", return_value=1700000000000)
    def test_upload_binary_success(self, mock_now, mock_s3_uploader):
        """Test binary upload derives the extension from the content type."""
        result = upload_binary("shot", "image/png", b"raw", "123", mock_s3_uploader)

        assert result.status_code == 200
        assert result.body["key"] == "1700000000000-shot.png"
        assert result.body["message"] == "Upload successful (Binary → S3)"
        mock_s3_uploader.upload.assert_called_once_with(
            "1700000000000-shot.png", b"raw", "image/png"
        )

    @patch("inspection_uploader.handlers.single_upload.now_ms", return_value=1700000000000)
    def test_upload_binary_without_content_type(self, mock_now, mock_s3_uploader):
        """Test binary upload defaults to jpg."""
        result = upload_binary("shot", None, b"raw", None, mock_s3_uploader)

        assert result.body["key"] == "1700000000000-shot.jpg"
        mock_s3_uploader.upload.assert_called_once_with(
            "1700000000000-shot.jpg", b"raw", "image/jpeg"
        )

    def test_upload_binary_missing_filename(self, mock_s3_uploader):
        """Test binary upload requires the filename header."""
        result = upload_binary(None, "image/png", b"raw", None, mock_s3_uploader)

        assert result.status_code == 400
        assert result.body == {"error": "Missing filename in headers"}
