import pytest

from partup.errors import ErrorCode, PackageError, PackageErrorCode, PartupError


def test_partup_error_carries_message_and_code():
    err = PartupError("Input offset exceeds input file size", ErrorCode.CHECKSUM)
    assert err.message == "Input offset exceeds input file size"
    assert str(err) == "Input offset exceeds input file size"
    assert err.code is ErrorCode.CHECKSUM


def test_partup_error_default_code_is_failed():
    err = PartupError("filename is empty")
    assert err.code is ErrorCode.FAILED


def test_error_code_order_matches_declaration():
    errors = [PartupError(f"error {i}", code) for i, code in enumerate(ErrorCode)]
    assert errors[0].code is ErrorCode.FAILED
    assert int(errors[0].code) == 0
    assert errors[-1].code is ErrorCode.MOUNT
    assert [int(err.code) for err in errors] == list(range(len(errors)))


def test_package_error_code_order_matches_declaration():
    errors = [PackageError(f"error {i}", code) for i, code in enumerate(PackageErrorCode)]
    assert errors[0].code is PackageErrorCode.CREATION_FAILED
    assert errors[-1].code is PackageErrorCode.FAILED
    assert [int(err.code) for err in errors] == list(range(len(errors)))


def test_package_error_is_partup_error():
    err = PackageError("No layout file found", PackageErrorCode.MISSING_LAYOUT)
    assert isinstance(err, PartupError)
    assert err.code is PackageErrorCode.MISSING_LAYOUT
    assert str(err) == "No layout file found"
    with pytest.raises(PartupError, match="No layout file found"):
        raise err


def test_package_error_default_code():
    err = PackageError("Failed cleaning up directory")
    assert err.code is PackageErrorCode.FAILED


def test_repr_contains_message():
    err = PartupError("Invalid device name '/dev/null'")
    assert "Invalid device name '/dev/null'" in repr(err)
    assert repr(err).startswith("PartupError(")