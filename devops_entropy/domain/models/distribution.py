"""
Distributions

Random variables used for the latency and failure-rate characteristics of
nodes and edges. Parameters are never validated at construction because
instances are also rebuilt from plain dicts; invalid parameters are detected
when sampling and degrade to the location parameter.

Example:
    >>> import random
    >>> latency = Normal(mean=50.0, std_dev=10.0)
    >>> value = latency.sample(random.Random(42))
    >>> Normal(mean=50.0, std_dev=-1.0).sample()
    50.0
"""

from __future__ import annotations
import logging
import math
import random
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .types import DistributionKind

logger = logging.getLogger(__name__)

# Process-wide source used when the caller does not inject one
_default_rng = random.Random()


@dataclass(frozen=True)
class Distribution:
    """Base class of the tagged numeric samplers."""

    kind = None

    @property
    def location(self) -> float:
        raise NotImplementedError

    def is_valid(self) -> bool:
        raise NotImplementedError

    def _draw(self, rng: random.Random) -> float:
        raise NotImplementedError

    def sample(self, rng: Optional[random.Random] = None) -> float:
        """
        Draw one value.

        Never raises: invalid parameters, or a generator failure, fall back
        to the location parameter.

        Args:
            rng: Random source exposing gauss() and lognormvariate().
                 Defaults to the module-level source.
        """
        if not self.is_valid():
            return self.location
        try:
            return self._draw(rng or _default_rng)
        except (ValueError, OverflowError) as e:
            logger.debug(f"Sampling {self!r} failed ({e}); using location")
            return self.location

    def to_dict(self) -> Dict[str, Any]:
        raise NotImplementedError

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Distribution":
        """Rebuild a distribution from its to_dict() form."""
        tag = data.get("type")
        try:
            kind = DistributionKind(tag)
        except ValueError:
            valid = [k.value for k in DistributionKind]
            raise ValueError(f"Unknown distribution type '{tag}'. Valid: {valid}")

        if kind is DistributionKind.NORMAL:
            return Normal(mean=float(data["mean"]), std_dev=float(data["std_dev"]))
        return LogNormal(location=float(data["location"]), scale=float(data["scale"]))


@dataclass(frozen=True)
class Normal(Distribution):
    """Gaussian N(mean, std_dev)."""
    mean: float = 0.0
    std_dev: float = 1.0

    kind = DistributionKind.NORMAL

    @property
    def location(self) -> float:
        return self.mean

    def is_valid(self) -> bool:
        return (
            math.isfinite(self.mean)
            and math.isfinite(self.std_dev)
            and self.std_dev > 0.0
        )

    def _draw(self, rng: random.Random) -> float:
        return rng.gauss(self.mean, self.std_dev)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.kind.value, "mean": self.mean, "std_dev": self.std_dev}


@dataclass(frozen=True)
class LogNormal(Distribution):
    """exp(N(location, scale)); location and scale are those of the underlying Gaussian."""
    location: float = 0.0
    scale: float = 1.0

    kind = DistributionKind.LOG_NORMAL

    def is_valid(self) -> bool:
        return (
            math.isfinite(self.location)
            and math.isfinite(self.scale)
            and self.scale >= 0.0
        )

    def _draw(self, rng: random.Random) -> float:
        return rng.lognormvariate(self.location, self.scale)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.kind.value, "location": self.location, "scale": self.scale}
