# Copyright 2026 habconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Text renderer for configuration entities.

Each entity kind has its own ``render_*`` function producing the exact text
the platform's configuration parser expects: spacing, quoting, and line
terminators are significant. :func:`render` dispatches on the entity type.

All functions are pure; the formatting switches arrive through an explicit
:class:`~habconf.render.options.RenderOptions` argument.
"""

from __future__ import annotations

from habconf.model.entities import Annotation, Container, Device, Endpoint, Link, Variable
from habconf.model.values import PropertyList, TypedValue, ValueType, normalize_decimal
from habconf.render.options import RenderOptions

# ###############
# Public Interface
# ###############

DEVICE_KEYWORD = "Device"
CONTAINER_KEYWORD = "Container"
ENDPOINTS_LABEL = "Endpoints:"
LINK_KEYWORD = "channel"
COUNT_FUNCTION = "COUNT"

Renderable = TypedValue | PropertyList | Endpoint | Device | Container | Link | Annotation | Variable


def render(
    target: Renderable,
    options: RenderOptions | None = None,
    *,
    indent: int = 0,
    single_line: bool | None = None,
    is_container_child: bool = False,
) -> str:
    """Render any configuration entity.

    Args:
        target: The entity to render.
        options: Formatting options; defaults to :class:`RenderOptions`.
        indent: Indentation (in spaces) of the entity's first line.
        single_line: Overrides the option-derived inline switch for property
            lists, links, and annotations.
        is_container_child: Render a device with the short header used
            inside a container block.

    Returns:
        The rendered text.

    Raises:
        TypeError: If *target* is not a configuration entity.
    """
    opts = options if options is not None else RenderOptions()
    if isinstance(target, TypedValue):
        return render_value(target)
    if isinstance(target, PropertyList):
        inline = True if single_line is None else single_line
        return render_properties(target, indent, inline, newline=opts.newline)
    if isinstance(target, Endpoint):
        return render_endpoint(target, indent, opts)
    if isinstance(target, Device):
        return render_device(target, opts, indent=indent, is_container_child=is_container_child)
    if isinstance(target, Container):
        return render_container(target, opts)
    if isinstance(target, (Link, Annotation)):
        inline = opts.variable_entries_inline if single_line is None else single_line
        render_entry = render_link if isinstance(target, Link) else render_annotation
        return render_entry(target, indent, inline, newline=opts.newline)
    if isinstance(target, Variable):
        return render_variable(target, opts)
    raise TypeError(f"render() expects a configuration entity, got {type(target).__name__}")


def quote(text: str) -> str:
    """Escape backslashes and double quotes, then wrap *text* in double quotes."""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def render_value(value: TypedValue) -> str:
    """Render the right-hand side of a ``name=value`` pair."""
    if value.type is ValueType.INT:
        return value.raw.strip()
    if value.type is ValueType.DECIMAL:
        number = normalize_decimal(value.raw)
        return f'"{number}"' if value.metadata_mode else number
    if value.type is ValueType.BOOL:
        flag = value.raw.strip().lower()
        return f'"{flag}"' if value.metadata_mode else flag
    if value.type is ValueType.STRING:
        return quote(value.raw)
    return value.raw


def render_properties(
    properties: PropertyList,
    indent: int,
    single_line: bool,
    *,
    newline: str = "\r\n",
) -> str:
    """Render a bracketed property list, or an empty string if it has no entries.

    Single-line form: ``[ a=1, b="x" ]``. Block form puts one entry per
    line, indented two spaces deeper than *indent*, and closes the bracket
    at *indent*.
    """
    items = [f"{value.name}={render_value(value)}" for value in properties.entries]
    return _render_list(items, "[", "]", indent, single_line, newline)


def render_endpoint(endpoint: Endpoint, indent: int, options: RenderOptions) -> str:
    """Render one endpoint line, or an empty string when it is suppressed.

    Endpoints without properties are only written when
    ``options.include_default_endpoints`` is set.
    """
    if endpoint.properties.is_empty and not options.include_default_endpoints:
        return ""
    line = f"{_pad(indent)}{endpoint.display_kind} {endpoint.declared_type} : {endpoint.id}"
    if endpoint.display_name:
        line += f" {quote(endpoint.display_name)}"
    if not endpoint.properties.is_empty:
        props = render_properties(
            endpoint.properties, indent, options.endpoint_properties_inline, newline=options.newline
        )
        line += f" {props}"
    return line + options.newline


def render_device(
    device: Device,
    options: RenderOptions,
    *,
    indent: int = 0,
    is_container_child: bool = False,
) -> str:
    """Render a device with its endpoint block.

    Children of a container use the short ``Device type id`` header;
    standalone devices use the full ``namespace:type:id`` form and are
    followed by a blank line.
    """
    nl = options.newline
    pad = _pad(indent)
    if is_container_child:
        text = f"{pad}{DEVICE_KEYWORD} {device.type_id} {device.device_id}"
    else:
        type_id = options.device_type_id(device.namespace_id, device.type_id)
        text = f"{pad}{DEVICE_KEYWORD} {device.namespace_id}:{type_id}:{device.device_id}"
    text += _label_and_location(device.display_name, device.location)

    if not device.properties.is_empty:
        text += " " + render_properties(device.properties, indent, options.device_properties_inline, newline=nl)

    endpoint_lines = [render_endpoint(endpoint, indent + 4, options) for endpoint in device.endpoints]
    endpoint_lines = [line for line in endpoint_lines if line]
    if endpoint_lines:
        text += f" {{{nl}{_pad(indent + 2)}{ENDPOINTS_LABEL}{nl}"
        text += "".join(endpoint_lines)
        text += f"{pad}}}"

    text += nl
    if not is_container_child:
        text += nl
    return text


def render_container(container: Container, options: RenderOptions) -> str:
    """Render a container and its child devices, followed by a blank line."""
    nl = options.newline
    text = f"{CONTAINER_KEYWORD} {container.uid}"
    text += _label_and_location(container.display_name, container.location)

    if not container.properties.is_empty:
        text += " " + render_properties(container.properties, 0, options.container_properties_inline, newline=nl)

    if container.children:
        text += f" {{{nl}"
        for child in container.children:
            text += render_device(child, options, indent=2, is_container_child=True)
        text += f"}}{nl}"
    else:
        text += nl
    return text + nl


def render_link(link: Link, indent: int, single_line: bool, *, newline: str = "\r\n") -> str:
    """Render ``channel="<endpoint id>"`` with optional properties."""
    text = f"{LINK_KEYWORD}={quote(link.endpoint_full_id)}"
    return text + _entry_properties(link.properties, indent, single_line, newline)


def render_annotation(annotation: Annotation, indent: int, single_line: bool, *, newline: str = "\r\n") -> str:
    """Render ``namespace="value"`` with optional properties."""
    text = f"{annotation.namespace}={quote(annotation.value)}"
    return text + _entry_properties(annotation.properties, indent, single_line, newline)


def render_variable(variable: Variable, options: RenderOptions) -> str:
    """Render one variable definition line (or block)."""
    nl = options.newline
    text = variable.data_type + _aggregate_suffix(variable)
    text += f" {variable.name}"
    if variable.display_name:
        text += f" {quote(variable.display_name)}"
    if variable.icon_name:
        text += f" <{variable.icon_name}>"
    if variable.groups:
        text += " ( " + ", ".join(variable.groups) + " )"
    if variable.tags:
        text += " [ " + ", ".join(quote(tag) for tag in variable.tags) + " ]"

    if variable.entries:
        single_line = options.variable_entries_inline
        items: list[str] = []
        for entry in variable.entries:
            if isinstance(entry, Link):
                items.append(render_link(entry, 2, single_line, newline=nl))
            else:
                items.append(render_annotation(entry, 2, single_line, newline=nl))
        text += " " + _render_list(items, "{", "}", 0, single_line, nl)
    return text + nl


# ################
# Implementation
# ################


def _pad(indent: int) -> str:
    return " " * indent


def _render_list(
    items: list[str],
    open_bracket: str,
    close_bracket: str,
    indent: int,
    single_line: bool,
    newline: str,
) -> str:
    """Join pre-rendered items into a bracketed list, inline or as a block."""
    if not items:
        return ""
    if single_line:
        return f"{open_bracket} " + ", ".join(items) + f" {close_bracket}"
    inner = _pad(indent + 2)
    lines = [f"{inner}{item}," for item in items]
    lines[-1] = lines[-1][:-1]
    return open_bracket + newline + newline.join(lines) + newline + _pad(indent) + close_bracket


def _entry_properties(properties: PropertyList, indent: int, single_line: bool, newline: str) -> str:
    if properties.is_empty:
        return ""
    return " " + render_properties(properties, indent, single_line, newline=newline)


def _label_and_location(display_name: str | None, location: str | None) -> str:
    text = ""
    if display_name:
        text += f" {quote(display_name)}"
    if location:
        text += f" @ {quote(location)}"
    return text


def _aggregate_suffix(variable: Variable) -> str:
    """Return ``:base[:function[params]]`` for group variables, else ``""``."""
    if not variable.aggregate_base_type:
        return ""
    suffix = f":{variable.aggregate_base_type}"
    if not variable.aggregate_function:
        return suffix
    suffix += f":{variable.aggregate_function}"
    if not variable.aggregate_params:
        return suffix
    if variable.aggregate_function.upper() == COUNT_FUNCTION:
        return suffix + quote(",".join(variable.aggregate_params))
    return suffix + "(" + ",".join(variable.aggregate_params) + ")"
