import logging

import numpy as np

from .activations import get_activation
from .base import DEFAULT_DTYPE, Base_Layer, uniform
from .errors import ShapeError

logger = logging.getLogger(__name__)


class Conv2D(Base_Layer):
    kind = 'conv2d'

    def __init__(self, in_channels, out_channels, kernel_size=3, stride=1, padding=0,
                 activation='relu', use_bias=True, dtype=DEFAULT_DTYPE):
        super().__init__(dtype=dtype)
        if stride < 1:
            raise ValueError(f"stride must be positive, got {stride}")
        if padding < 0:
            raise ValueError(f"padding must be non-negative, got {padding}")
        self.in_channels = in_channels
        self.out_channels = out_channels
        self.kernel_size = kernel_size
        self.stride = stride
        self.padding = padding
        self.activation = activation
        self.activation_fn = get_activation(activation)
        self.use_bias = use_bias

        scale = np.sqrt(2.0 / (in_channels * kernel_size * kernel_size))
        self.kernels = uniform((out_channels, in_channels, kernel_size, kernel_size), scale, dtype)
        self.bias = np.zeros(out_channels, dtype=dtype) if use_bias else None
        logger.debug("Built %s %d->%d channels, kernel %d, stride %d, padding %d",
                     self.id, in_channels, out_channels, kernel_size, stride, padding)

    def output_shape(self, height, width):
        h_out = (height + 2*self.padding - self.kernel_size) // self.stride + 1
        w_out = (width + 2*self.padding - self.kernel_size) // self.stride + 1
        return h_out, w_out

    def _check_input(self, x):
        if x.ndim != 4:
            raise ShapeError(
                f"{self.id}: expected input of shape [batch, {self.in_channels}, height, width], "
                f"got {x.shape}",
                expected=4, actual=x.ndim,
            )
        if x.shape[1] != self.in_channels:
            raise ShapeError(
                f"Channel mismatch: expected {self.in_channels}, got {x.shape[1]}",
                expected=self.in_channels, actual=x.shape[1],
            )
        padded = (x.shape[2] + 2*self.padding, x.shape[3] + 2*self.padding)
        if min(padded) < self.kernel_size:
            raise ShapeError(
                f"{self.id}: padded input {padded} is smaller than kernel {self.kernel_size}",
                expected=self.kernel_size, actual=padded,
            )

    def forward(self, x):
        x = np.asarray(x, dtype=self.dtype)
        self._check_input(x)
        batch_size = x.shape[0]
        h_out, w_out = self.output_shape(x.shape[2], x.shape[3])

        # Zero padding on both spatial axes
        if self.padding > 0:
            p = self.padding
            x = np.pad(x, ((0, 0), (0, 0), (p, p), (p, p)), mode='constant')
        x = np.ascontiguousarray(x)

        # Extract windows using stride tricks
        strides = (
            x.strides[0],  # Batch
            x.strides[1],  # Channels
            self.stride * x.strides[2],  # Height
            self.stride * x.strides[3],  # Width
            x.strides[2],  # Kernel height
            x.strides[3]   # Kernel width
        )
        windows = np.lib.stride_tricks.as_strided(
            x,
            shape=(batch_size, self.in_channels, h_out, w_out, self.kernel_size, self.kernel_size),
            strides=strides,
            writeable=False,
        )

        x_col = windows.transpose(1, 4, 5, 0, 2, 3).reshape(
            self.in_channels * self.kernel_size * self.kernel_size,
            batch_size * h_out * w_out
        )
        k_col = self.kernels.reshape(self.out_channels, -1)

        out = (k_col @ x_col).reshape(
            self.out_channels, batch_size, h_out, w_out
        ).transpose(1, 0, 2, 3)

        if self.bias is not None:
            out = out + self.bias.reshape(1, self.out_channels, 1, 1)

        # Per-channel feature maps; softmax therefore normalizes along width
        return self.activation_fn(np.ascontiguousarray(out))

    def update(self, kernels=None, bias=None):
        if kernels is not None:
            self._replace('kernels', kernels)
        if bias is not None and self.use_bias:
            self._replace('bias', bias)

    def get_parameters(self):
        return {'kernels': self.kernels, 'bias': self.bias}

    def get_config(self):
        return {
            'input_channels': self.in_channels,
            'output_channels': self.out_channels,
            'kernel_size': self.kernel_size,
            'stride': self.stride,
            'padding': self.padding,
            'activation': self.activation,
            'use_bias': self.use_bias,
        }


class Flatten(Base_Layer):
    """Reshape [batch, channels, height, width] into [batch, channels*height*width]."""

    kind = 'flatten'

    def forward(self, x):
        x = np.asarray(x)
        return x.reshape(x.shape[0], -1)

    def get_parameters(self):
        return {}


def conv_layer_2d(input_channels, output_channels, kernel_size=3, stride=1, padding=0,
                  activation='relu', use_bias=True, dtype=DEFAULT_DTYPE):
    return Conv2D(input_channels, output_channels, kernel_size=kernel_size, stride=stride,
                  padding=padding, activation=activation, use_bias=use_bias, dtype=dtype)
