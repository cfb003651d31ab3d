from dataclasses import dataclass
from typing import Optional, Tuple, Union

from audiochain.core.errors import InvalidParameter
from audiochain.core.shared_types import TimeValue, to_seconds

# Option values are kept typed until serialization
OptionValue = Union[str, int, float]


@dataclass(frozen=True)
class FilterNode:
    """
    A single filter invocation inside a filter graph, e.g.
    `[1]adelay=500|500[d]`.

    positional: unnamed option values, joined with ':' in order.
    options: named option values rendered as key=value after the positional ones.
    inputs / outputs: pad labels (without brackets).
    """
    name: str
    positional: Tuple[OptionValue, ...] = ()
    options: Tuple[Tuple[str, OptionValue], ...] = ()
    inputs: Tuple[str, ...] = ()
    outputs: Tuple[str, ...] = ()

    def __post_init__(self):
        if not self.name or not self.name.replace("_", "").isalnum():
            raise InvalidParameter(f"Invalid filter name: {self.name!r}")


@dataclass(frozen=True)
class FilterChain:
    """Filters applied one after the other (joined with ',')."""
    nodes: Tuple[FilterNode, ...]

    def __post_init__(self):
        if not self.nodes:
            raise InvalidParameter("A filter chain needs at least one filter.")

    def then(self, other: "FilterChain") -> "FilterChain":
        return FilterChain(self.nodes + other.nodes)


@dataclass(frozen=True)
class FilterGraph:
    """Independent chains of a complex graph (joined with ';')."""
    chains: Tuple[FilterChain, ...]

    def __post_init__(self):
        if not self.chains:
            raise InvalidParameter("A filter graph needs at least one chain.")


# --- Effects ---

@dataclass(frozen=True)
class FadeIn:
    duration: TimeValue

    def __post_init__(self):
        to_seconds(self.duration, "fade-in duration")

    @property
    def seconds(self) -> float:
        return to_seconds(self.duration)


@dataclass(frozen=True)
class FadeOut:
    """
    Fade to silence over `duration`.
    clip_duration is the total length of the faded clip; the fade starts at
    clip_duration - duration. Left as None it is resolved by the processor.
    """
    duration: TimeValue
    clip_duration: Optional[TimeValue] = None

    def __post_init__(self):
        to_seconds(self.duration, "fade-out duration")
        if self.clip_duration is not None:
            to_seconds(self.clip_duration, "clip duration")

    @property
    def seconds(self) -> float:
        return to_seconds(self.duration)

    def with_clip_duration(self, clip_duration: TimeValue) -> "FadeOut":
        return FadeOut(self.duration, clip_duration)


@dataclass(frozen=True)
class Echo:
    delay: TimeValue
    decay: float

    def __post_init__(self):
        to_seconds(self.delay, "echo delay")
        if isinstance(self.decay, bool) or not isinstance(self.decay, (int, float)):
            raise InvalidParameter(f"Echo decay must be a number, got {type(self.decay).__name__}")
        if not 0 < self.decay <= 1:
            raise InvalidParameter(f"Echo decay must lie in (0, 1], got {self.decay}")

    @property
    def delay_ms(self) -> int:
        return int(round(to_seconds(self.delay) * 1000))


EffectSpec = Union[FadeIn, FadeOut, Echo]
