import logging

import numpy as np

from .errors import UnsupportedConfigurationError

logger = logging.getLogger(__name__)

__all__ = [
    'Activation', 'ReLU', 'Sigmoid', 'Tanh', 'Softmax', 'Linear',
    'ACTIVATIONS', 'lookup_activation', 'get_activation',
]


def _as_float(inputs):
    inputs = np.asarray(inputs)
    if not np.issubdtype(inputs.dtype, np.floating):
        inputs = inputs.astype(float)
    return inputs


class Activation:
    """Elementwise (or row-wise, for softmax) transform applied after a layer's linear step."""

    name = None

    def forward(self, inputs):
        raise NotImplementedError

    def state_dict(self):
        return {"activation": self.name}

    def __call__(self, x):
        return self.forward(x)

    def __repr__(self):
        return f"{self.__class__.__name__}()"


class ReLU(Activation):
    name = "relu"

    def forward(self, inputs):
        return np.maximum(inputs, 0)


class Sigmoid(Activation):
    name = "sigmoid"

    def forward(self, inputs):
        inputs = _as_float(inputs)
        # exp of a non-positive value never overflows
        z = np.exp(-np.abs(inputs))
        return np.where(inputs >= 0, 1 / (1 + z), z / (1 + z)).astype(inputs.dtype, copy=False)


class Tanh(Activation):
    name = "tanh"

    def forward(self, inputs):
        return np.tanh(inputs)


class Softmax(Activation):
    name = "softmax"

    def __init__(self, axis=-1):
        self.axis = axis

    def forward(self, inputs):
        inputs = _as_float(inputs)
        # Shift by the row max so exp never overflows
        shifted = inputs - inputs.max(axis=self.axis, keepdims=True)
        exps = np.exp(shifted)
        return exps / exps.sum(axis=self.axis, keepdims=True)


class Linear(Activation):
    """Identity; also stands in for unknown activation names."""

    name = "linear"

    def forward(self, inputs):
        return np.asarray(inputs)


ACTIVATIONS = {
    cls.name: cls
    for cls in (ReLU, Sigmoid, Tanh, Softmax, Linear)
}


def lookup_activation(name):
    """Return a fresh activation for ``name``, or None when the name is not registered."""
    cls = ACTIVATIONS.get(name)
    return cls() if cls is not None else None


def get_activation(name, strict=False):
    """
    Resolve an activation name for use by a layer.

    Unknown names fall back to the identity with a warning, unless
    ``strict`` is set, in which case UnsupportedConfigurationError is raised.
    A name of None means no activation and resolves to the identity silently.
    """
    if name is None:
        return Linear()
    activation = lookup_activation(name)
    if activation is None:
        if strict:
            raise UnsupportedConfigurationError(
                f"Unknown activation '{name}', expected one of {sorted(ACTIVATIONS)}"
            )
        logger.warning("Unknown activation %r, applying identity instead", name)
        return Linear()
    return activation
