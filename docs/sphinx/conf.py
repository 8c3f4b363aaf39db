# Copyright 2026 habconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sphinx configuration for habconf documentation."""

project = "habconf"
author = "habconf Contributors"
release = "0.1.0"

extensions: list[str] = []

html_theme = "alabaster"
