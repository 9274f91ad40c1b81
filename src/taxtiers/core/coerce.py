"""Boundary coercion from raw form fields to a :class:`FilingInput`."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from taxtiers.config.schema import FilingInput

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")

# Form field names that do not snake-case to the model field name
_ALIASES = {
    "children_under17": "children_under_17",
    "pre_tax": "pre_tax_contributions",
    "income": "annual_income",
    "status": "filing_status",
    "employment": "employment_type",
}


def _field_name(key: str) -> str:
    snake = _CAMEL_BOUNDARY.sub("_", key.strip()).lower().replace("-", "_")
    return _ALIASES.get(snake, snake)


def filing_input_from_form(fields: Mapping[str, Any]) -> FilingInput:
    """Build a :class:`FilingInput` from loosely-typed form values.

    Keys may be camelCase (``annualIncome``), snake_case or kebab-case.
    Unknown keys are ignored, malformed numbers become 0 and unknown enum
    values fall back to defaults; this never raises for bad values.
    """
    data = {_field_name(key): value for key, value in fields.items()}
    return FilingInput.model_validate(data)
