"""
neuralcore - A minimal neural network computation core on numpy
"""

import logging

# Core components
from .errors import NeuralCoreError, ShapeError, UnsupportedConfigurationError
from .activations import *
from .base import Base_Layer, DEFAULT_DTYPE, parse_dtype
from .dense import Dense, dense_layer
from .conv import Conv2D, Flatten, conv_layer_2d
from .recurrent import LSTM, SimpleRNN, lstm_layer, rnn_layer
from .sequential import Sequential, feed_forward, simple_cnn
from .optimizer import SGD, Momentum, Optimizer, optimizer
from .serialization import (
    load_network,
    load_network_from_file,
    save_network,
    save_network_to_file,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Version
__version__ = "0.1.0"

# Public API
__all__ = [
    'NeuralCoreError',
    'ShapeError',
    'UnsupportedConfigurationError',
    'Activation',
    'ReLU',
    'Sigmoid',
    'Tanh',
    'Softmax',
    'Linear',
    'ACTIVATIONS',
    'lookup_activation',
    'get_activation',
    'Base_Layer',
    'DEFAULT_DTYPE',
    'parse_dtype',
    'Dense',
    'dense_layer',
    'Conv2D',
    'Flatten',
    'conv_layer_2d',
    'SimpleRNN',
    'LSTM',
    'rnn_layer',
    'lstm_layer',
    'Sequential',
    'feed_forward',
    'simple_cnn',
    'Optimizer',
    'SGD',
    'Momentum',
    'optimizer',
    'save_network',
    'load_network',
    'save_network_to_file',
    'load_network_from_file',
]
