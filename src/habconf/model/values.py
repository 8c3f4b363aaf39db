# Copyright 2026 habconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Typed property values and ordered property lists."""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from pydantic import BaseModel, model_validator
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class ValueType(Enum):
    """Primitive value types understood by the configuration grammar."""

    INT = "Int"
    DECIMAL = "Decimal"
    BOOL = "Bool"
    STRING = "String"
    # Fallback for explicitly constructed values; never inferred.
    UNKNOWN = "Unknown"


def infer_value_type(raw: str) -> ValueType:
    """Infer the value type of a raw textual value.

    Tried in order: boolean literal, integer, decimal (comma or dot
    separator), string.
    """
    if raw.lower() in _BOOL_LITERALS:
        return ValueType.BOOL
    if _INT_PATTERN.fullmatch(raw):
        return ValueType.INT
    if _DECIMAL_PATTERN.fullmatch(raw):
        return ValueType.DECIMAL
    return ValueType.STRING


def normalize_decimal(raw: str) -> str:
    """Return *raw* as a dot-separated decimal literal.

    Raises:
        ValueError: If *raw* is not a finite number.
    """
    text = raw.strip().replace(",", ".")
    if _PLAIN_DECIMAL_PATTERN.fullmatch(text):
        return text
    try:
        number = Decimal(text)
    except InvalidOperation:
        raise ValueError(f"'{raw}' is not a valid decimal literal") from None
    if not number.is_finite():
        raise ValueError(f"'{raw}' is not a finite decimal literal")
    return format(number, "f")


class TypedValue(BaseModel):
    """A named raw value together with its primitive type.

    When ``type`` is not given it is inferred from ``raw`` with
    :func:`infer_value_type`. Numeric and boolean values are checked at
    construction time so that malformed literals never reach the output.

    ``metadata_mode`` quotes decimal and boolean values, as required for
    configuration attached to links and annotations.
    """

    name: str
    raw: str
    type: ValueType = ValueType.STRING
    metadata_mode: bool = False

    @model_validator(mode="before")
    @classmethod
    def infer_missing_type(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("type") is None:
            raw = data.get("raw")
            if isinstance(raw, str):
                data = {**data, "type": infer_value_type(raw)}
        return data

    @model_validator(mode="after")
    def check_literal(self) -> TypedValue:
        if self.type is ValueType.INT and not _SIGNED_INT_PATTERN.fullmatch(self.raw.strip()):
            raise ValueError(f"'{self.raw}' is not a valid integer literal for '{self.name}'")
        if self.type is ValueType.DECIMAL:
            try:
                normalize_decimal(self.raw)
            except ValueError as exc:
                raise ValueError(f"{exc} for '{self.name}'") from None
        if self.type is ValueType.BOOL and self.raw.strip().lower() not in _BOOL_LITERALS:
            raise ValueError(f"'{self.raw}' is not a valid boolean literal for '{self.name}'")
        return self


class PropertyList(BaseModel):
    """An ordered list of typed values. Entries keep their insertion order."""

    entries: list[TypedValue] = _Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """Return True if the list has no entries."""
        return not self.entries

    def add(
        self,
        name: str,
        raw: str,
        type: ValueType | None = None,
        *,
        metadata_mode: bool = False,
    ) -> TypedValue:
        """Append a new value and return it."""
        value = TypedValue(name=name, raw=raw, type=type, metadata_mode=metadata_mode)
        self.entries.append(value)
        return value


# ################
# Implementation
# ################

_BOOL_LITERALS = ("true", "false")
_INT_PATTERN = re.compile(r"\d+")
_SIGNED_INT_PATTERN = re.compile(r"-?\d+")
_DECIMAL_PATTERN = re.compile(r"-?\d+([,.]\d+)?")
_PLAIN_DECIMAL_PATTERN = re.compile(r"-?\d+(\.\d+)?")
