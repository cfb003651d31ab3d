"""
Renders the structured filter model into ffmpeg filtergraph syntax.

ffmpeg unescapes a graph twice: once when splitting the graph into
filters, once when splitting a filter's options. Values are escaped
for the inner level first, then for the outer one.
"""
import math
from decimal import Decimal
from typing import Optional

from audiochain.core.errors import InvalidParameter
from ..domain.models import FilterChain, FilterGraph, FilterNode, OptionValue

_OPTION_SPECIALS = ("\\", "'", ":")
_GRAPH_SPECIALS = ("\\", "'", "[", "]", ",", ";")


# Significant digits kept when rendering floats
SIGNIFICANT_DIGITS = 15


def format_number(value: float, precision: Optional[int] = None) -> str:
    """
    Plain decimal with trailing zeros stripped: 2.0 -> '2', 0.5 -> '0.5',
    1e-07 -> '0.0000001'.

    Without `precision` the value keeps SIGNIFICANT_DIGITS significant digits
    (a nonzero value never renders as '0'); with it, it is rounded to that
    many decimal places.
    """
    if isinstance(value, bool):
        raise InvalidParameter(f"Expected a number, got {value!r}")
    if isinstance(value, int):
        return str(value)
    if not math.isfinite(value):
        raise InvalidParameter(f"Cannot render non-finite number: {value}")
    if precision is None:
        # Positional notation: no exponent form inside filter arguments
        text = format(Decimal(f"{value:.{SIGNIFICANT_DIGITS}g}"), "f")
    else:
        text = f"{value:.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def format_seconds(seconds: float) -> str:
    """Seconds with millisecond precision: 1.0 -> '1', 2.5 -> '2.5'."""
    return format_number(float(seconds), precision=3)


def _escape(text: str, specials) -> str:
    return "".join(f"\\{ch}" if ch in specials else ch for ch in text)


def escape_option_value(value: OptionValue) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return format_number(value)
    text = str(value)
    return _escape(_escape(text, _OPTION_SPECIALS), _GRAPH_SPECIALS)


def _render_pad(label: str) -> str:
    if not label or any(ch in label for ch in "[];,= "):
        raise InvalidParameter(f"Invalid pad label: {label!r}")
    return f"[{label}]"


def render_node(node: FilterNode) -> str:
    args = [escape_option_value(v) for v in node.positional]
    args += [f"{key}={escape_option_value(v)}" for key, v in node.options]

    body = node.name
    if args:
        body = f"{body}={':'.join(args)}"

    inputs = "".join(_render_pad(label) for label in node.inputs)
    outputs = "".join(_render_pad(label) for label in node.outputs)
    return f"{inputs}{body}{outputs}"


def render_chain(chain: FilterChain) -> str:
    return ",".join(render_node(node) for node in chain.nodes)


def render_graph(graph: FilterGraph) -> str:
    return ";".join(render_chain(chain) for chain in graph.chains)
