# Copyright 2026 habconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Consistency checks for built catalogs."""

from habconf.validation.checks import ValidationResult, ValidationWarning, validate

__all__ = [
    "ValidationResult",
    "ValidationWarning",
    "validate",
]
