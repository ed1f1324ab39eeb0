"""
Tests for parser configuration.
"""

import pytest
from pydantic import ValidationError

from blockmath.expr import (
    DEFAULT_PARSER_CONFIG,
    DEFAULT_PARSER_LIMITS,
    ParserConfig,
    ParserLimits,
    load_parser_config,
)


class TestParserConfig:
    def test_defaults(self):
        assert DEFAULT_PARSER_CONFIG.case_fold is True
        assert DEFAULT_PARSER_CONFIG.limits == DEFAULT_PARSER_LIMITS

    def test_accepts_aliases(self):
        config = ParserConfig.model_validate(
            {"caseFold": False, "expressionLimits": {"max_nesting_depth": 4}}
        )
        assert config.case_fold is False
        assert config.limits == ParserLimits(max_nesting_depth=4)

    def test_accepts_field_names(self):
        config = ParserConfig(case_fold=False, expression_limits={"max_variables": 2})
        assert config.limits.max_variables == 2

    def test_rejects_unknown_limit(self):
        with pytest.raises(ValidationError, match="max_depth"):
            ParserConfig(expression_limits={"max_depth": 2})

    def test_rejects_unknown_field(self):
        with pytest.raises(ValidationError):
            ParserConfig.model_validate({"caseSensitive": True})

    def test_rejects_string_limit(self):
        with pytest.raises(ValidationError, match="max_nesting_depth must be an integer"):
            ParserConfig.model_validate({"expressionLimits": {"max_nesting_depth": "8"}})

    def test_rejects_non_positive_limit(self):
        with pytest.raises(ValidationError, match="max_expression_length must be at least 1"):
            ParserConfig.model_validate({"expressionLimits": {"max_expression_length": -1}})

    def test_rejects_zero_limit(self):
        with pytest.raises(ValidationError):
            ParserConfig(expression_limits={"max_variables": 0})


class TestLoadParserConfig:
    def test_loads_yaml(self, tmp_path):
        path = tmp_path / "parser.yaml"
        path.write_text(
            "caseFold: false\n"
            "expressionLimits:\n"
            "  max_expression_length: 128\n"
            "  max_nesting_depth: 2\n"
        )
        config = load_parser_config(path)
        assert config.case_fold is False
        assert config.limits.max_expression_length == 128
        assert config.limits.max_nesting_depth == 2
        assert config.limits.max_output_elements == 256

    def test_loads_json(self, tmp_path):
        path = tmp_path / "parser.json"
        path.write_text('{"caseFold": true, "expressionLimits": {"max_variables": 3}}')
        assert load_parser_config(str(path)).limits.max_variables == 3

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_parser_config(path) == ParserConfig()

    def test_rejects_quoted_limit_in_yaml(self, tmp_path):
        path = tmp_path / "parser.yaml"
        path.write_text("expressionLimits:\n  max_nesting_depth: \"8\"\n")
        with pytest.raises(ValidationError):
            load_parser_config(path)

    def test_rejects_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ValueError, match="must be a mapping"):
            load_parser_config(path)
