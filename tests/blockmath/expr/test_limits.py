"""
Tests for parser limits.
"""

import pytest

from blockmath.expr import (
    DEFAULT_PARSER_LIMITS,
    LimitExceededError,
    ParserConfig,
    ParserLimits,
    check_expression_length,
    parse,
)


def config_with(**limits) -> ParserConfig:
    return ParserConfig(expression_limits=ParserLimits(**limits))


class TestDefaults:
    def test_default_values(self):
        assert DEFAULT_PARSER_LIMITS.max_expression_length == 4096
        assert DEFAULT_PARSER_LIMITS.max_nesting_depth == 32
        assert DEFAULT_PARSER_LIMITS.max_output_elements == 256
        assert DEFAULT_PARSER_LIMITS.max_variables == 64

    def test_default_nesting_limit(self):
        source = "(" * 33 + "1" + ")" * 33
        with pytest.raises(LimitExceededError) as exc_info:
            parse(source)
        assert exc_info.value.limit_name == "max_nesting_depth"
        assert exc_info.value.actual == 33

    def test_nesting_within_limit(self):
        source = "(" * 32 + "1" + ")" * 32
        assert parse(source).evaluate() == 1


class TestCustomLimits:
    def test_expression_length(self):
        with pytest.raises(LimitExceededError, match="max_expression_length"):
            parse("1+2+3+4", config=config_with(max_expression_length=5))

    def test_output_elements(self):
        config = config_with(max_output_elements=3)
        assert parse("1+2", config=config).evaluate() == 3
        with pytest.raises(LimitExceededError) as exc_info:
            parse("1+2+3", config=config)
        assert exc_info.value.limit == 3
        assert exc_info.value.actual == 4

    def test_variable_count(self):
        with pytest.raises(LimitExceededError, match="max_variables"):
            parse("x", ["x", "y"], config=config_with(max_variables=1))

    def test_check_helper_uses_defaults(self):
        check_expression_length("x" * 4096)
        with pytest.raises(LimitExceededError):
            check_expression_length("x" * 4097)


class TestValidation:
    def test_rejects_zero(self):
        with pytest.raises(ValueError, match="max_nesting_depth must be at least 1"):
            ParserLimits(max_nesting_depth=0)

    def test_rejects_negative(self):
        with pytest.raises(ValueError):
            ParserLimits(max_expression_length=-1)

    def test_rejects_non_integer(self):
        with pytest.raises(ValueError, match="must be an integer"):
            ParserLimits(max_output_elements="8")  # type: ignore[arg-type]
        with pytest.raises(ValueError, match="must be an integer"):
            ParserLimits(max_variables=True)
