from __future__ import annotations
import enum
from dataclasses import dataclass


class PathMode(enum.Enum):
    # a mid-path moveto keeps accumulating into the same vertex list
    CONTINUOUS = "continuous"
    # each moveto flushes the open vertex list to the canvas
    DISCONTINUOUS = "discontinuous"

    @classmethod
    def parse(cls, value: str | int | PathMode) -> PathMode:
        if isinstance(value, PathMode):
            return value
        text = str(value).strip().lower()
        if text in ('0', 'continuous'):
            return cls.CONTINUOUS
        if text in ('1', 'discontinuous'):
            return cls.DISCONTINUOUS
        raise ValueError(f"Unknown path mode: {value!r}")


@dataclass(frozen=True)
class RenderOptions:
    path_mode: PathMode = PathMode.CONTINUOUS
    antialias: bool = False
    background: tuple[int, int, int, int] = (0, 0, 0, 0)
