"""Tests for shared.result: Result / Error model."""

import pytest

from shared.result import Error, ErrorCode, Result, ResultAccessError


class TestError:
    def test_failure_factory(self):
        error = Error.failure(ErrorCode.DIRECTORY_NOT_FOUND, "Directory not found: /x", path="/x")
        assert error.code is ErrorCode.DIRECTORY_NOT_FOUND
        assert error.message == "Directory not found: /x"
        assert error.details == {"path": "/x"}

    def test_str(self):
        error = Error.failure(ErrorCode.NO_SEARCH_RESULTS, "Nothing found")
        assert str(error) == "NoSearchResults: Nothing found"

    def test_codes_are_strings(self):
        assert ErrorCode.DIMENSION_MISMATCH == "DimensionMismatch"
        assert ErrorCode("CollectionNotFound") is ErrorCode.COLLECTION_NOT_FOUND

    def test_frozen(self):
        error = Error.failure(ErrorCode.GENERAL_FAILURE, "x")
        with pytest.raises(AttributeError):
            error.message = "y"


class TestResult:
    def test_success(self):
        result = Result.success(42)
        assert result.is_success
        assert not result.is_failure
        assert result.value == 42

    def test_success_without_value(self):
        result = Result.success()
        assert result.is_success
        assert result.value is None

    def test_failure(self):
        error = Error.failure(ErrorCode.QUERY_EXECUTION_ERROR, "boom")
        result = Result.failure(error)
        assert result.is_failure
        assert result.error is error

    def test_failure_from_message(self):
        result = Result.failure("something broke")
        assert result.error.code is ErrorCode.GENERAL_FAILURE
        assert result.error.message == "something broke"

    def test_value_of_failure_raises(self):
        result = Result.failure("nope")
        with pytest.raises(ResultAccessError, match="nope"):
            _ = result.value

    def test_error_of_success_raises(self):
        with pytest.raises(ResultAccessError):
            _ = Result.success(1).error

    def test_needs_exactly_one(self):
        with pytest.raises(ValueError):
            Result()
        with pytest.raises(ValueError):
            Result(value=1, error=Error.failure(ErrorCode.GENERAL_FAILURE, "x"))

    def test_value_or(self):
        assert Result.success(1).value_or(0) == 1
        assert Result.failure("x").value_or(0) == 0

    def test_repr(self):
        assert repr(Result.success(1)) == "Success(1)"
        assert "GeneralFailure" in repr(Result.failure("x"))


class TestComposition:
    def test_map_success(self):
        assert Result.success(2).map(lambda v: v * 3).value == 6

    def test_map_failure_passes_through(self):
        failed = Result.failure("x")
        mapped = failed.map(lambda v: v * 3)
        assert mapped.is_failure
        assert mapped.error is failed.error

    def test_bind(self):
        def half(v):
            if v % 2:
                return Result.failure("odd")
            return Result.success(v // 2)

        assert Result.success(4).bind(half).value == 2
        assert Result.success(3).bind(half).error.message == "odd"
        assert Result.failure("first").bind(half).error.message == "first"

    def test_on_success_and_on_failure(self):
        seen = []
        Result.success(1).on_success(seen.append).on_failure(seen.append)
        error = Error.failure(ErrorCode.GENERAL_FAILURE, "x")
        Result.failure(error).on_success(seen.append).on_failure(seen.append)
        assert seen == [1, error]
