"""Configuration objects for precision and region algebra behaviour."""
from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional, Union

from .constants import DEFAULT_EPSILON, DEPTH_WARNING
from .errors import InvalidConfiguration


@dataclass(frozen=True)
class GeometryConfig:
    """Unified configuration.

    Attributes
    ----------
    epsilon : float
        Absolute tolerance of the precision context built by ``precision()``.
    simplify : bool
        Collapse uniform subtrees after every boolean operation. Chains of
        un-simplified operations grow tree depth linearly.
    depth_warning : int
        Tree depth above which the region factory logs a warning.
    log_level : str or int, optional
        Level applied by ``bspgeom.configure_logging`` when given.
    """
    epsilon: float = DEFAULT_EPSILON
    simplify: bool = True
    depth_warning: int = DEPTH_WARNING
    log_level: Optional[Union[str, int]] = None

    def __post_init__(self):
        if not isinstance(self.epsilon, (int, float)) or not math.isfinite(self.epsilon) or self.epsilon < 0:
            raise InvalidConfiguration(f'epsilon must be finite and >= 0, got {self.epsilon!r}')
        if self.depth_warning < 1:
            raise InvalidConfiguration(f'depth_warning must be positive, got {self.depth_warning!r}')

    def precision(self):
        from .precision import PrecisionContext
        return PrecisionContext(self.epsilon)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> 'GeometryConfig':
        """Build a config from a plain mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {k: v for k, v in dict(values).items() if k in known}
        return cls(**kwargs)


DEFAULT_CONFIG = GeometryConfig()

__all__ = ['GeometryConfig', 'DEFAULT_CONFIG']
