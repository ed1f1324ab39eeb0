"""
Parser configuration.

Configuration can be built in code or loaded from a YAML (or JSON) file,
e.g.::

    caseFold: true
    expressionLimits:
      max_expression_length: 512
      max_nesting_depth: 8
"""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .limits import DEFAULT_PARSER_LIMITS, ParserLimits

logger = logging.getLogger("blockmath.expr.config")

_LIMIT_FIELDS = frozenset(field.name for field in dataclasses.fields(ParserLimits))


class ParserConfig(BaseModel):
    """Configuration for the shunting-yard parser."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    # Lower-case the expression and the variable names before scanning
    case_fold: bool = Field(default=True, alias="caseFold")

    # Resource limits; defaults apply when omitted
    expression_limits: Optional[ParserLimits] = Field(
        default=None, alias="expressionLimits"
    )

    @field_validator("expression_limits", mode="before")
    @classmethod
    def _normalize_limits(cls, value: Any) -> Any:
        if value is None or isinstance(value, ParserLimits):
            return value
        if not isinstance(value, dict):
            raise ValueError("expressionLimits must be a mapping")
        unknown = set(value) - _LIMIT_FIELDS
        if unknown:
            raise ValueError(f"Unknown expression limits: {', '.join(sorted(unknown))}")
        return ParserLimits(**value)

    @property
    def limits(self) -> ParserLimits:
        return self.expression_limits or DEFAULT_PARSER_LIMITS


DEFAULT_PARSER_CONFIG = ParserConfig()


def load_parser_config(path: Union[str, Path]) -> ParserConfig:
    """
    Loads a parser configuration from a YAML or JSON file.

    Args:
        path: Path to the configuration file

    Returns:
        The validated configuration

    Raises:
        ValueError: If the document is not a mapping
        pydantic.ValidationError: If a field is invalid
    """
    file_path = Path(path)
    content = file_path.read_text(encoding="utf-8")
    parsed = yaml.safe_load(content or "")

    if parsed is None:
        parsed = {}
    if not isinstance(parsed, dict):
        raise ValueError(f"Parser config in {file_path} must be a mapping")

    config = ParserConfig.model_validate(parsed)
    logger.debug("parser_config_loaded", extra={"path": str(file_path)})
    return config
