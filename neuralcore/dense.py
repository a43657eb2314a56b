import logging

import numpy as np

from .activations import get_activation
from .base import DEFAULT_DTYPE, Base_Layer, uniform
from .errors import ShapeError

logger = logging.getLogger(__name__)


def init_scale(input_size, output_size, weight_init):
    if weight_init == 'xavier':
        return np.sqrt(2.0 / (input_size + output_size))
    if weight_init == 'he':
        # Better suited to ReLU
        return np.sqrt(2.0 / input_size)
    return 0.1


class Dense(Base_Layer):
    kind = 'dense'

    def __init__(self, input_size, output_size, activation='relu', use_bias=True,
                 weight_init='xavier', dtype=DEFAULT_DTYPE):
        super().__init__(dtype=dtype)
        self.input_size = input_size
        self.output_size = output_size
        self.activation = activation
        self.activation_fn = get_activation(activation)
        self.use_bias = use_bias
        self.weight_init = weight_init

        scale = init_scale(input_size, output_size, weight_init)
        self.weights = uniform((input_size, output_size), scale, dtype)
        self.bias = np.zeros(output_size, dtype=dtype) if use_bias else None
        logger.debug("Built %s %dx%d (init=%s, scale=%.4f)",
                     self.id, input_size, output_size, weight_init, scale)

    def forward(self, x):
        x = np.asarray(x, dtype=self.dtype)
        if x.ndim != 2:
            raise ShapeError(
                f"{self.id}: expected a batch of rows of length {self.input_size}, "
                f"got an array of shape {x.shape}",
                expected=(None, self.input_size), actual=x.shape,
            )
        if x.shape[1] != self.input_size:
            raise ShapeError(
                f"Input size mismatch: expected {self.input_size}, got {x.shape[1]}",
                expected=self.input_size, actual=x.shape[1],
            )
        out = x @ self.weights
        if self.bias is not None:
            out = out + self.bias
        return self.activation_fn(out)

    def update(self, weights=None, bias=None):
        if weights is not None:
            self._replace('weights', weights)
        if bias is not None and self.use_bias:
            self._replace('bias', bias)

    def get_parameters(self):
        return {'weights': self.weights, 'bias': self.bias}

    def get_config(self):
        return {
            'input_size': self.input_size,
            'output_size': self.output_size,
            'activation': self.activation,
            'use_bias': self.use_bias,
            'weight_init': self.weight_init,
        }


def dense_layer(input_size, output_size, activation='relu', use_bias=True,
                weight_init='xavier', dtype=DEFAULT_DTYPE):
    """
    Create a fully connected layer computing ``activation(x @ W + b)``.

    Args:
        input_size: Length of each input row
        output_size: Length of each output row
        activation: Registered activation name (unknown names act as identity)
        use_bias: Allocate a zero bias vector of length ``output_size``
        weight_init: 'xavier', 'he', or anything else for uniform [-0.1, 0.1]
    """
    return Dense(input_size, output_size, activation=activation, use_bias=use_bias,
                 weight_init=weight_init, dtype=dtype)
