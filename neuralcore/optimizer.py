import logging

import numpy as np

from .errors import ShapeError, UnsupportedConfigurationError

logger = logging.getLogger(__name__)


class Optimizer:
    """Base optimizer working on a network's live parameter dicts"""

    def __init__(self, network, lr=0.01):
        """
        Args:
            network: Object exposing get_parameters() (a Sequential), or the
                list of parameter dicts itself
            lr: Fixed learning rate
        """
        if hasattr(network, 'get_parameters'):
            network = network.get_parameters()
        # Live references: updates below must stay in place
        self.param_groups = list(network)
        self.lr = lr
        self.iterations = 0

    def _check_gradients(self, gradients):
        """Validate the full gradient structure and return it as arrays, before any update."""
        if len(gradients) != len(self.param_groups):
            raise ShapeError(
                f"Expected gradients for {len(self.param_groups)} layers, got {len(gradients)}",
                expected=len(self.param_groups), actual=len(gradients),
            )
        checked = []
        for index, (params, grads) in enumerate(zip(self.param_groups, gradients)):
            grads = grads or {}
            unknown = set(grads) - set(params)
            if unknown:
                raise ShapeError(f"Layer {index}: gradients for unknown parameters {sorted(unknown)}")
            layer_grads = {}
            for name, param in params.items():
                grad = grads.get(name)
                if param is None:
                    if grad is not None:
                        raise ShapeError(f"Layer {index}: gradient given for absent parameter '{name}'")
                    continue
                if grad is None:
                    raise ShapeError(f"Layer {index}: missing gradient for '{name}'")
                grad = np.asarray(grad, dtype=param.dtype)
                if grad.shape != param.shape:
                    raise ShapeError(
                        f"Layer {index}: gradient for '{name}' has shape {grad.shape}, "
                        f"expected {param.shape}",
                        expected=param.shape, actual=grad.shape,
                    )
                layer_grads[name] = grad
            checked.append(layer_grads)
        return checked

    def step(self, gradients):
        """Apply one update from gradients mirroring network.get_parameters()."""
        checked = self._check_gradients(gradients)
        for index, layer_grads in enumerate(checked):
            for name, grad in layer_grads.items():
                self._update(index, name, self.param_groups[index][name], grad)
        self.iterations += 1

    def _update(self, index, name, param, grad):
        raise NotImplementedError


class SGD(Optimizer):
    """Plain gradient descent: p <- p - lr * g"""

    def _update(self, index, name, param, grad):
        param -= self.lr * grad


class Momentum(Optimizer):
    """Momentum SGD with an exponential moving average of gradients"""

    def __init__(self, network, lr=0.01, momentum=0.9):
        super().__init__(network, lr)
        self.momentum = momentum
        self.velocities = [
            {name: np.zeros_like(p) for name, p in params.items() if p is not None}
            for params in self.param_groups
        ]

    def _update(self, index, name, param, grad):
        velocity = self.velocities[index][name]
        velocity *= self.momentum
        velocity += (1 - self.momentum) * grad
        param -= self.lr * velocity


OPTIMIZERS = {
    'sgd': SGD,
    'momentum': Momentum,
}


def optimizer(network, learning_rate=0.01, type='sgd'):
    """
    Create an optimizer bound to ``network``'s current parameters.

    Only 'sgd' and 'momentum' are defined. 'adam' and any other name raise
    UnsupportedConfigurationError rather than silently skipping updates.
    """
    cls = OPTIMIZERS.get(type)
    if cls is None:
        raise UnsupportedConfigurationError(
            f"Unsupported optimizer type '{type}', expected one of {sorted(OPTIMIZERS)}"
        )
    logger.debug("Created %s optimizer (lr=%s)", type, learning_rate)
    return cls(network, lr=learning_rate)
