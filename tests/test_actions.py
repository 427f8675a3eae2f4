"""Tests for action list parsing and request validation."""

import io

import pytest

from s3_actions.actions import (
    ActionKind,
    build_request,
    parse_actions,
    valid_actions,
    validate_sender_config,
)
from s3_actions.core.exceptions import ConfigurationError, InvalidRequestError
from s3_actions.parameters import ParameterValues
from s3_actions.schemas import SenderConfig

ALL_ACTIONS = "['copy', 'createBucket', 'delete', 'deleteBucket', 'download', 'upload']"


class TestParseActions:
    """Test splitting action lists into action kinds."""

    def test_parse_comma_separated(self):
        """Test comma separated tokens keep their order."""
        assert parse_actions("createBucket,upload") == (
            ActionKind.CREATE_BUCKET,
            ActionKind.UPLOAD,
        )

    def test_parse_mixed_separators(self):
        """Test commas, spaces and newlines all separate tokens."""
        assert parse_actions(" download ,\tcopy\n delete ") == (
            ActionKind.DOWNLOAD,
            ActionKind.COPY,
            ActionKind.DELETE,
        )

    def test_parse_keeps_repeats(self):
        """Test repeated actions are kept in order."""
        assert parse_actions("delete delete") == (ActionKind.DELETE, ActionKind.DELETE)

    def test_unknown_token_lists_all_actions(self):
        """Test an unknown token is reported with the sorted valid set."""
        with pytest.raises(ConfigurationError) as exc_info:
            parse_actions("createBucket, rename")

        message = str(exc_info.value)
        assert "[rename]" in message
        assert ALL_ACTIONS in message

    def test_tokens_are_case_sensitive(self):
        """Test tokens must match the documented spelling."""
        with pytest.raises(ConfigurationError, match="CREATEBUCKET"):
            parse_actions("CREATEBUCKET")

    @pytest.mark.parametrize("raw", ["", "  ,, ", None])
    def test_empty_list_rejected(self, raw):
        """Test an empty action list is a configuration error."""
        with pytest.raises(ConfigurationError, match="no actions configured"):
            parse_actions(raw)

    def test_valid_actions_sorted(self):
        """Test the valid action list is deterministic."""
        assert valid_actions() == sorted(valid_actions())
        assert len(valid_actions()) == 6


class TestValidateSenderConfig:
    """Test eager validation of sender configuration."""

    def test_valid_config_returns_actions(self):
        """Test a valid configuration returns the parsed sequence."""
        config = SenderConfig(
            actions="createBucket,upload",
            bucket_name="reports-bucket",
            parameters=["file"],
        )
        assert validate_sender_config(config) == (
            ActionKind.CREATE_BUCKET,
            ActionKind.UPLOAD,
        )

    def test_error_carries_sender_name(self):
        """Test errors are prefixed with the sender name."""
        config = SenderConfig(
            name="nightly", actions="explode", bucket_name="reports-bucket"
        )
        with pytest.raises(ConfigurationError, match=r"^\[nightly\] invalid action"):
            validate_sender_config(config)

    def test_invalid_region(self):
        """Test unknown client regions are rejected with the full region set."""
        config = SenderConfig(
            actions="createBucket",
            bucket_name="reports-bucket",
            client_region="moon-base-1",
        )
        with pytest.raises(ConfigurationError) as exc_info:
            validate_sender_config(config)

        assert "moon-base-1" in str(exc_info.value)
        assert "eu-west-1" in str(exc_info.value)

    @pytest.mark.parametrize(
        "bucket_name",
        ["Invalid bucket name", "ab", "bad..dots", "-leading", "192.168.0.1"],
    )
    def test_invalid_bucket_name(self, bucket_name):
        """Test bucket names breaking S3 naming rules are rejected."""
        config = SenderConfig(actions="createBucket", bucket_name=bucket_name)
        with pytest.raises(ConfigurationError, match="invalid bucketName"):
            validate_sender_config(config)

    def test_upload_requires_file_parameter(self):
        """Test upload needs a declared file parameter."""
        config = SenderConfig(actions="upload", bucket_name="reports-bucket")
        with pytest.raises(ConfigurationError, match="file parameter"):
            validate_sender_config(config)

    def test_copy_requires_destination_bucket(self):
        """Test copy needs a destination bucket."""
        config = SenderConfig(
            actions="copy",
            bucket_name="reports-bucket",
            parameters=["destination_file_name"],
        )
        with pytest.raises(ConfigurationError, match="destinationBucketName"):
            validate_sender_config(config)

    def test_copy_requires_destination_key(self):
        """Test copy needs a destination key parameter."""
        config = SenderConfig(
            actions="copy",
            bucket_name="reports-bucket",
            destination_bucket_name="archive-bucket",
        )
        with pytest.raises(ConfigurationError, match="destination_file_name"):
            validate_sender_config(config)

    def test_copy_accepts_destination_bucket_parameter(self):
        """Test a declared destination bucket parameter satisfies copy."""
        config = SenderConfig(
            actions="copy",
            bucket_name="reports-bucket",
            parameters=["destination_bucket_name", "destination_object_key"],
        )
        assert validate_sender_config(config) == (ActionKind.COPY,)

    def test_rules_apply_regardless_of_order(self):
        """Test a late invalid action still fails the whole configuration."""
        config = SenderConfig(
            actions="createBucket delete upload",
            bucket_name="reports-bucket",
        )
        with pytest.raises(ConfigurationError, match="file parameter"):
            validate_sender_config(config)

    def test_global_access_requires_bucket_region(self):
        """Test createBucket with global access needs a valid bucket region."""
        config = SenderConfig(
            actions="createBucket",
            bucket_name="reports-bucket",
            force_global_bucket_access=True,
            bucket_region="Invalid bucket region",
        )
        with pytest.raises(ConfigurationError, match="invalid bucketRegion"):
            validate_sender_config(config)

    def test_global_access_with_bucket_region(self):
        """Test createBucket with global access and a known region."""
        config = SenderConfig(
            actions="createBucket",
            bucket_name="reports-bucket",
            force_global_bucket_access=True,
            bucket_region="ap-south-1",
        )
        assert validate_sender_config(config) == (ActionKind.CREATE_BUCKET,)


class TestBuildRequest:
    """Test per-invocation request construction."""

    def setup_method(self, method):
        self.config = SenderConfig(
            actions="upload,copy",
            bucket_name="reports-bucket",
            destination_bucket_name="archive-bucket",
            parameters=["file", "destination_file_name"],
        )
        self.actions = (ActionKind.UPLOAD, ActionKind.COPY)

    def test_message_is_default_key(self):
        """Test the message becomes the key when no key parameter is set."""
        stream = io.BytesIO(b"data")
        request = build_request(
            self.config,
            self.actions,
            ParameterValues(
                {"file": stream, "destination_file_name": "copy.txt"}, "a.txt"
            ),
        )

        assert request.key == "a.txt"
        assert request.stream is stream
        assert request.destination_bucket == "archive-bucket"
        assert request.destination_key == "copy.txt"

    def test_file_name_overrides_message(self):
        """Test an explicit file_name parameter wins over the message."""
        request = build_request(
            self.config,
            self.actions,
            ParameterValues(
                {
                    "file": io.BytesIO(b"data"),
                    "file_name": "override.txt",
                    "destination_file_name": "copy.txt",
                },
                "a.txt",
            ),
        )
        assert request.key == "override.txt"

    def test_missing_key(self):
        """Test object actions need a key from a parameter or the message."""
        with pytest.raises(InvalidRequestError, match="file_name"):
            build_request(
                self.config,
                self.actions,
                ParameterValues({"file": io.BytesIO(b"data")}, ""),
            )

    def test_missing_stream(self):
        """Test upload needs a stream value."""
        with pytest.raises(InvalidRequestError, match="file parameter"):
            build_request(
                self.config,
                self.actions,
                ParameterValues({"destination_file_name": "copy.txt"}, "a.txt"),
            )

    def test_missing_destination_key(self):
        """Test copy needs a destination key value."""
        with pytest.raises(InvalidRequestError, match="destination key"):
            build_request(
                self.config,
                self.actions,
                ParameterValues({"file": io.BytesIO(b"data")}, "a.txt"),
            )

    def test_invalid_destination_bucket_parameter(self):
        """Test a per-call destination bucket must be a valid name."""
        with pytest.raises(InvalidRequestError, match="Not_A_Bucket"):
            build_request(
                self.config,
                self.actions,
                ParameterValues(
                    {
                        "file": io.BytesIO(b"data"),
                        "destination_bucket_name": "Not_A_Bucket",
                        "destination_file_name": "copy.txt",
                    },
                    "a.txt",
                ),
            )

    def test_bucket_actions_need_no_key(self):
        """Test bucket-level actions accept an empty message."""
        request = build_request(
            self.config,
            (ActionKind.CREATE_BUCKET, ActionKind.DELETE_BUCKET),
            ParameterValues(None, None),
        )
        assert request.key is None
        assert request.bucket == "reports-bucket"
