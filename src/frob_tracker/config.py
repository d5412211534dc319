"""Configuration models and helpers for the frob tracker."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional


@dataclass(slots=True)
class TrackerSettings:
    """Runtime configuration for frob commands."""

    exclusive: bool = True
    trailing_space: bool = True
    clock: Callable[[], float] = time.time

    @classmethod
    def from_options(
        cls,
        exclusive: Optional[bool] = None,
        trailing_space: Optional[bool] = None,
    ) -> "TrackerSettings":
        defaults = cls()
        return cls(
            exclusive=exclusive if exclusive is not None else defaults.exclusive,
            trailing_space=(
                trailing_space if trailing_space is not None else defaults.trailing_space
            ),
        )
