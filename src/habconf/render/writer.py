# Copyright 2026 habconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Ordering and writing of the two rendered configuration streams.

Both files are rendered and encoded completely in memory before anything
touches the filesystem, and each file is replaced atomically. A failure
therefore never leaves a half-written configuration behind.
"""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path

from habconf.model.entities import Catalog, Container, Device, Variable
from habconf.render.options import RenderOptions
from habconf.render.text import render_container, render_device, render_variable

# ###############
# Public Interface
# ###############

# The platform's configuration parser reads files in this code page.
OUTPUT_ENCODING = "cp1252"
DEFAULT_DEVICES_FILE = "habconf.things"
DEFAULT_VARIABLES_FILE = "habconf.items"


class ExportError(Exception):
    """Raised when rendered text cannot be encoded or written."""


def sort_device_entries(catalog: Catalog) -> list[Container | Device]:
    """Return containers, then standalone devices, each stably sorted by namespace."""
    containers = sorted(catalog.containers, key=lambda c: c.namespace_id)
    devices = sorted(catalog.devices, key=lambda d: d.namespace_id)
    return [*containers, *devices]


def sort_variables(catalog: Catalog) -> list[Variable]:
    """Return the variables stably sorted by data type, then name."""
    return sorted(catalog.variables, key=lambda v: (v.data_type, v.name))


def render_devices_text(catalog: Catalog, options: RenderOptions | None = None) -> str:
    """Render the complete device/container stream."""
    opts = options if options is not None else RenderOptions()
    parts: list[str] = []
    for entry in sort_device_entries(catalog):
        if isinstance(entry, Container):
            parts.append(render_container(entry, opts))
        else:
            parts.append(render_device(entry, opts))
    return "".join(parts)


def render_variables_text(catalog: Catalog, options: RenderOptions | None = None) -> str:
    """Render the complete variable stream, one blank line between variables."""
    opts = options if options is not None else RenderOptions()
    return opts.newline.join(render_variable(v, opts) for v in sort_variables(catalog))


def encode_text(text: str, label: str = "<output>") -> bytes:
    """Encode rendered text in the output code page.

    Raises:
        ExportError: If *text* contains a character the code page cannot hold.
    """
    try:
        return text.encode(OUTPUT_ENCODING)
    except UnicodeEncodeError as exc:
        bad = exc.object[exc.start : exc.end]
        raise ExportError(
            f"{label}: character {bad!r} at offset {exc.start} cannot be encoded as {OUTPUT_ENCODING}"
        ) from exc


def export_catalog(
    catalog: Catalog,
    output_dir: Path,
    options: RenderOptions | None = None,
    *,
    devices_file: str = DEFAULT_DEVICES_FILE,
    variables_file: str = DEFAULT_VARIABLES_FILE,
) -> dict[str, Path]:
    """Render a catalog and write both configuration files into *output_dir*.

    Returns:
        A mapping ``{"devices": path, "variables": path}``.

    Raises:
        ExportError: If either stream cannot be encoded or written.
    """
    devices_path = output_dir / devices_file
    variables_path = output_dir / variables_file
    payloads = {
        "devices": (devices_path, encode_text(render_devices_text(catalog, options), str(devices_path))),
        "variables": (variables_path, encode_text(render_variables_text(catalog, options), str(variables_path))),
    }
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ExportError(f"Cannot create output directory '{output_dir}': {exc}") from exc

    written: dict[str, Path] = {}
    for key, (path, data) in payloads.items():
        _write_bytes(data, path)
        written[key] = path
    return written


# ################
# Implementation
# ################


def _write_bytes(data: bytes, path: Path) -> None:
    """Write to a temporary file next to *path*, then move it into place.

    The result keeps the mode of the file it replaces. A new file gets the
    mode a plain ``open()`` would give it under the current umask.
    """
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    except OSError as exc:
        raise ExportError(f"Cannot write '{path}': {exc}") from exc
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
        os.chmod(tmp_name, _target_mode(path))
        os.replace(tmp_name, path)
    except OSError as exc:
        Path(tmp_name).unlink(missing_ok=True)
        raise ExportError(f"Cannot write '{path}': {exc}") from exc


def _target_mode(path: Path) -> int:
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        # os.umask can only be read by setting it.
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask
