# Copyright 2026 habconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Reading the platform's JSON database into input records."""

from habconf.jsondb.reader import (
    ANNOTATIONS_FILE,
    DATABASE_FILES,
    DEVICES_FILE,
    LINKS_FILE,
    VARIABLES_FILE,
    JsonDbError,
    load_database,
    parse_category,
    to_record_properties,
)

__all__ = [
    "ANNOTATIONS_FILE",
    "DATABASE_FILES",
    "DEVICES_FILE",
    "JsonDbError",
    "LINKS_FILE",
    "VARIABLES_FILE",
    "load_database",
    "parse_category",
    "to_record_properties",
]
