class NeuralCoreError(Exception):
    """Base class for errors raised by neuralcore"""


class ShapeError(NeuralCoreError, ValueError):
    """An input, parameter or gradient does not match the declared geometry"""

    def __init__(self, message, expected=None, actual=None):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class UnsupportedConfigurationError(NeuralCoreError, ValueError):
    """A layer type, activation or optimizer type is not supported"""
