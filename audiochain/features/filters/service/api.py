import logging
from typing import List

from audiochain.core.errors import InvalidParameter
from audiochain.core.shared_types import TimeValue, require_positive, to_seconds
from ..data.serializer import format_seconds, render_chain, render_graph
from ..domain.models import Echo, EffectSpec, FadeIn, FadeOut, FilterChain, FilterGraph, FilterNode

logger = logging.getLogger(__name__)

# Native single-stage range of the atempo filter
ATEMPO_MIN = 0.5
ATEMPO_MAX = 2.0

# Fixed aecho gains
ECHO_IN_GAIN = 0.8
ECHO_OUT_GAIN = 0.9


def effect_to_filter(effect: EffectSpec) -> FilterChain:
    """
    Converts an effect into its ffmpeg filter chain.

    Raises:
        InvalidParameter: for anything that is not a known effect.
    """
    if isinstance(effect, FadeIn):
        return FilterChain((
            FilterNode("afade", options=(("t", "in"), ("st", 0), ("d", format_seconds(effect.seconds)))),
        ))

    if isinstance(effect, FadeOut):
        if effect.clip_duration is None:
            logger.warning("Fade-out without a known clip duration, anchoring the fade at 0s")
            start = 0.0
        else:
            start = max(to_seconds(effect.clip_duration) - effect.seconds, 0.0)
        return FilterChain((
            FilterNode("afade", options=(
                ("t", "out"),
                ("st", format_seconds(start)),
                ("d", format_seconds(effect.seconds)),
            )),
        ))

    if isinstance(effect, Echo):
        return FilterChain((
            FilterNode("aecho", positional=(ECHO_IN_GAIN, ECHO_OUT_GAIN, effect.delay_ms, float(effect.decay))),
        ))

    raise InvalidParameter(f"Unsupported effect: {effect!r}")


def gain_filter(factor: float) -> FilterChain:
    factor = require_positive(factor, "gain factor")
    return FilterChain((FilterNode("volume", positional=(factor,)),))


def tempo_stages(factor: float) -> List[float]:
    """
    Splits a tempo factor into atempo-sized stages whose product is `factor`.
    3.0 -> [2.0, 1.5], 0.25 -> [0.5, 0.5], 1.25 -> [1.25]
    """
    factor = require_positive(factor, "speed factor")
    stages = []
    remaining = factor
    while remaining > ATEMPO_MAX:
        stages.append(ATEMPO_MAX)
        remaining /= ATEMPO_MAX
    while remaining < ATEMPO_MIN:
        stages.append(ATEMPO_MIN)
        remaining /= ATEMPO_MIN
    stages.append(remaining)
    return stages


def speed_filters(factor: float) -> FilterChain:
    return FilterChain(tuple(FilterNode("atempo", positional=(stage,)) for stage in tempo_stages(factor)))


def reverse_filter() -> FilterChain:
    return FilterChain((FilterNode("areverse"),))


def normalize_filter() -> FilterChain:
    return FilterChain((FilterNode("loudnorm"),))


def overlay_graph(start: TimeValue) -> FilterGraph:
    """
    Delays input 1 (both channels) by `start`, then mixes it onto input 0.
    The mix lasts as long as input 0.
    """
    delay_ms = int(round(to_seconds(start, "overlay start") * 1000))
    delayed = FilterChain((
        FilterNode("adelay", positional=(f"{delay_ms}|{delay_ms}",), inputs=("1",), outputs=("d",)),
    ))
    mixed = FilterChain((
        FilterNode("amix", options=(("inputs", 2), ("duration", "first")), inputs=("0", "d")),
    ))
    return FilterGraph((delayed, mixed))


def build_filter(effect: EffectSpec) -> str:
    """Rendered form of effect_to_filter, e.g. 'aecho=0.8:0.9:500:0.5'."""
    return render_chain(effect_to_filter(effect))


def build_overlay_filter(start: TimeValue) -> str:
    return render_graph(overlay_graph(start))
