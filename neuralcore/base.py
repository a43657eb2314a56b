import logging
from abc import ABC, abstractmethod

import numpy as np

from .errors import ShapeError

logger = logging.getLogger(__name__)

DEFAULT_DTYPE = np.float64


def parse_dtype(dtype_str):
    """
    Convert a string representation of a NumPy dtype (or type) to the actual NumPy dtype.

    Works with inputs like:
      - "<class 'numpy.float32'>"
      - "float32"
      - "dtype('float64')"
    """
    s = str(dtype_str).strip()

    # Handle cases like "dtype('float64')"
    if s.startswith("dtype(") and s.endswith(")"):
        s = s[6:-1].strip("'\"")

    s = s.replace("<class '", "").replace("'>", "")

    if s.startswith("numpy."):
        s = s[len("numpy."):]

    try:
        return np.dtype(s).type
    except TypeError as e:
        raise ValueError(f"Invalid dtype string: {dtype_str}") from e


def uniform(shape, scale, dtype=DEFAULT_DTYPE):
    """Sample an array of the given shape uniformly from [-scale, scale]."""
    return np.random.uniform(-scale, scale, size=shape).astype(dtype)


def owned_copy(value, dtype=DEFAULT_DTYPE):
    """Copy ``value`` into a fresh array so the caller keeps no handle on it."""
    if value is None:
        return None
    return np.array(value, dtype=dtype, copy=True)


class Base_Layer(ABC):
    """
    Contract shared by every layer kind.

    A layer owns its parameter arrays. ``get_parameters`` hands out the
    arrays themselves, so in-place edits through the returned dict (as done
    by the optimizers) are seen by the next ``forward`` call.
    """

    kind = None
    _id_counter = 0

    def __init__(self, dtype=DEFAULT_DTYPE):
        self.dtype = dtype
        self.id = f"{self.__class__.__name__}_{self.get_next_id()}"

    def get_next_id(self):
        Base_Layer._id_counter += 1
        return Base_Layer._id_counter

    def __call__(self, x):
        """Enable layer calling syntax: layer(input)"""
        return self.forward(x)

    @abstractmethod
    def forward(self, inputs):
        pass

    @abstractmethod
    def get_parameters(self):
        pass

    def update(self, *args, **kwargs):
        """Replace parameters wholesale; layers without parameters accept nothing."""
        if args or any(v is not None for v in kwargs.values()):
            raise TypeError(f"{self.__class__.__name__} has no parameters to update")

    def get_config(self):
        return {}

    @property
    def parameters(self):
        """Non-empty parameter arrays, in declaration order"""
        return [p for p in self.get_parameters().values() if p is not None]

    def _replace(self, name, value):
        current = getattr(self, name)
        value = owned_copy(value, self.dtype)
        if current is not None and value.shape != current.shape:
            raise ShapeError(
                f"{self.id}: '{name}' expects shape {current.shape}, got {value.shape}",
                expected=current.shape, actual=value.shape,
            )
        setattr(self, name, value)

    def state_dict(self):
        params = {
            name: (value.copy() if value is not None else None)
            for name, value in self.get_parameters().items()
        }
        return {
            "type": self.kind,
            "params": params,
            "config": self.get_config(),
            "dtype": str(self.dtype),
        }

    def load_state_dict(self, state_dict):
        self.dtype = parse_dtype(state_dict.get("dtype", self.dtype))
        self.update(**state_dict.get("params", {}))

    def __repr__(self):
        config = ", ".join(f"{k}={v!r}" for k, v in self.get_config().items())
        return f"{self.__class__.__name__}({config})"
