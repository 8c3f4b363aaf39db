# Copyright 2026 habconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Consistency checks for a built catalog.

These checks never fail a conversion. They point out records that will be
written but are likely to confuse the platform when it loads the files.
Whether referenced endpoint or item types exist is not checked.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from habconf.model.entities import Catalog, Device, Link

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class ValidationWarning:
    """A non-fatal consistency issue found in a catalog.

    Attributes:
        message: Human-readable description of the warning.
    """

    message: str


@dataclass
class ValidationResult:
    """Result of running the catalog checks.

    Attributes:
        warnings: Issues found during validation.
    """

    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        """Return True if any warning was found."""
        return len(self.warnings) > 0


def validate(catalog: Catalog) -> ValidationResult:
    """Run all consistency checks on a catalog.

    Checks performed:

    1. **Duplicate variables**: two variables with the same name.
    2. **Duplicate devices**: two devices or containers with the same id.
    3. **Dangling links**: a link whose endpoint id does not belong to any
       device in the catalog (for example because the device was filtered out).

    Args:
        catalog: The catalog to check.

    Returns:
        A :class:`ValidationResult`; an empty result means no issues.
    """
    warnings: list[ValidationWarning] = []
    warnings.extend(_check_duplicate_variables(catalog))
    warnings.extend(_check_duplicate_devices(catalog))
    warnings.extend(_check_dangling_links(catalog))
    return ValidationResult(warnings=warnings)


# ################
# Implementation
# ################


def _all_devices(catalog: Catalog) -> list[Device]:
    devices = list(catalog.devices)
    for container in catalog.containers:
        devices.extend(container.children)
    return devices


def _check_duplicate_variables(catalog: Catalog) -> list[ValidationWarning]:
    counts = Counter(v.name for v in catalog.variables)
    return [
        ValidationWarning(message=f"Variable '{name}' is defined {count} times.")
        for name, count in counts.items()
        if count > 1
    ]


def _check_duplicate_devices(catalog: Catalog) -> list[ValidationWarning]:
    uids = [c.uid for c in catalog.containers] + [d.uid for d in _all_devices(catalog)]
    counts = Counter(uids)
    return [
        ValidationWarning(message=f"Device '{uid}' is defined {count} times.")
        for uid, count in counts.items()
        if count > 1
    ]


def _check_dangling_links(catalog: Catalog) -> list[ValidationWarning]:
    """Return warnings for links whose endpoint id has no device prefix in the catalog."""
    device_uids = {d.uid for d in _all_devices(catalog)}
    warnings: list[ValidationWarning] = []
    for variable in catalog.variables:
        for entry in variable.entries:
            if not isinstance(entry, Link):
                continue
            device_uid = entry.endpoint_full_id.rpartition(":")[0]
            if device_uid not in device_uids:
                warnings.append(
                    ValidationWarning(
                        message=(
                            f"Variable '{variable.name}' links to '{entry.endpoint_full_id}', "
                            f"but device '{device_uid}' is not part of the output."
                        )
                    )
                )
    return warnings
