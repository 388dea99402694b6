from dataclasses import dataclass
import numpy as np
from ..errors import InvalidDimensions


@dataclass(frozen=True, eq=False)
class SampleSet:
    """
    Immutable ordered set of (x, y) samples used as fitting input.
    """
    x: np.ndarray
    y: np.ndarray

    def __post_init__(self):
        x = np.array(self.x, dtype=np.float64).reshape(-1)
        y = np.array(self.y, dtype=np.float64).reshape(-1)
        if x.size == 0:
            raise InvalidDimensions("A sample set needs at least one sample.")
        if x.shape != y.shape:
            raise InvalidDimensions("x and y must have the same number of samples.")
        x.flags.writeable = False
        y.flags.writeable = False
        object.__setattr__(self, 'x', x)
        object.__setattr__(self, 'y', y)

    @classmethod
    def from_pairs(cls, pairs):
        pairs = [tuple(p) for p in pairs]
        if any(len(p) != 2 for p in pairs):
            raise InvalidDimensions("Every sample must be an (x, y) pair.")
        if not pairs:
            raise InvalidDimensions("A sample set needs at least one sample.")
        x, y = zip(*pairs)
        return cls(x, y)

    def __len__(self):
        return self.x.shape[0]

    def __iter__(self):
        return iter(zip(self.x.tolist(), self.y.tolist()))
