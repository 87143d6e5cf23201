"""Tests for error messages — the text the CLI prints before exiting."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from fissionpkg.core.errors import (
    ArchiveError,
    ConfigurationError,
    ControllerError,
    FissionError,
    StorageError,
    describe_validation_error,
)
from fissionpkg.models import ObjectMeta, Package


class TestErrorMessages:
    def test_action_and_cause(self):
        err = ArchiveError("stat hello.txt", "no such file")
        assert str(err) == "Failed to stat hello.txt: no such file"
        assert err.action == "stat hello.txt"

    def test_action_only(self):
        assert str(StorageError("upload file big.zip")) == "Failed to upload file big.zip"

    def test_configuration_message_verbatim(self):
        err = ConfigurationError("Need --server or FISSION_URL set to your fission server.")
        assert str(err) == "Need --server or FISSION_URL set to your fission server."

    def test_controller_status_code(self):
        err = ControllerError("create package", "HTTP 409: exists", status_code=409)
        assert err.status_code == 409
        assert str(err) == "Failed to create package: HTTP 409: exists"

    def test_common_base(self):
        for cls in (ArchiveError, ControllerError, StorageError):
            assert issubclass(cls, FissionError)
        assert issubclass(ConfigurationError, FissionError)
        assert issubclass(FissionError, RuntimeError)


class TestDescribeValidationError:
    def test_first_error_on_one_line(self):
        with pytest.raises(ValidationError) as excinfo:
            ObjectMeta.model_validate({"namespace": "default"})
        assert describe_validation_error(excinfo.value) == "name: Field required"

    def test_whole_body_rejected(self):
        with pytest.raises(ValidationError) as excinfo:
            ObjectMeta.model_validate(None)
        assert describe_validation_error(excinfo.value).startswith("body: ")

    def test_counts_further_errors(self):
        with pytest.raises(ValidationError) as excinfo:
            Package.model_validate({})
        assert describe_validation_error(excinfo.value) == "metadata: Field required (and 1 more)"
