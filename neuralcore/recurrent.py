import logging

import numpy as np

from .activations import Sigmoid, Tanh, get_activation
from .base import DEFAULT_DTYPE, Base_Layer, uniform
from .errors import ShapeError

logger = logging.getLogger(__name__)

GATES = ('i', 'f', 'c', 'o')


class _Recurrent(Base_Layer):
    """Shared input handling for layers that scan a [batch, seq, features] input."""

    def __init__(self, input_size, hidden_size, return_sequences=False, use_bias=True,
                 dtype=DEFAULT_DTYPE):
        super().__init__(dtype=dtype)
        self.input_size = input_size
        self.hidden_size = hidden_size
        self.return_sequences = return_sequences
        self.use_bias = use_bias

    def _check_sequence(self, x):
        x = np.asarray(x, dtype=self.dtype)
        if x.ndim != 3 or x.shape[2] != self.input_size:
            raise ShapeError(
                f"{self.id}: expected input of shape [batch, seq, {self.input_size}], got {x.shape}",
                expected=(None, None, self.input_size), actual=x.shape,
            )
        return x

    def _initial_state(self, state, batch_size, name):
        if state is None:
            return np.zeros((batch_size, self.hidden_size), dtype=self.dtype)
        state = np.asarray(state, dtype=self.dtype)
        if state.shape != (batch_size, self.hidden_size):
            raise ShapeError(
                f"{self.id}: {name} must have shape {(batch_size, self.hidden_size)}, got {state.shape}",
                expected=(batch_size, self.hidden_size), actual=state.shape,
            )
        return state


class SimpleRNN(_Recurrent):
    kind = 'rnn'

    def __init__(self, input_size, hidden_size, activation='tanh', return_sequences=False,
                 use_bias=True, dtype=DEFAULT_DTYPE):
        super().__init__(input_size, hidden_size, return_sequences, use_bias, dtype)
        self.activation = activation
        self.activation_fn = get_activation(activation)

        self.wxh = uniform((input_size, hidden_size), 0.1, dtype)
        self.whh = uniform((hidden_size, hidden_size), 0.1, dtype)
        self.bh = np.zeros(hidden_size, dtype=dtype) if use_bias else None
        logger.debug("Built %s input %d, hidden %d", self.id, input_size, hidden_size)

    def forward(self, x, initial_hidden=None):
        """
        Run the recurrence h = act(x_t @ wxh + h @ whh + bh) over every time step.

        Returns the final hidden state, or when ``return_sequences`` is set,
        the list of hidden states starting with the initial one.
        """
        x = self._check_sequence(x)
        hidden = self._initial_state(initial_hidden, x.shape[0], 'initial_hidden')
        history = [hidden] if self.return_sequences else None

        for t in range(x.shape[1]):
            pre = x[:, t, :] @ self.wxh + hidden @ self.whh
            if self.bh is not None:
                pre = pre + self.bh
            hidden = self.activation_fn(pre)
            if history is not None:
                history.append(hidden)

        return history if history is not None else hidden

    def update(self, wxh=None, whh=None, bh=None):
        if wxh is not None:
            self._replace('wxh', wxh)
        if whh is not None:
            self._replace('whh', whh)
        if bh is not None and self.use_bias:
            self._replace('bh', bh)

    def get_parameters(self):
        return {'wxh': self.wxh, 'whh': self.whh, 'bh': self.bh}

    def get_config(self):
        return {
            'input_size': self.input_size,
            'hidden_size': self.hidden_size,
            'activation': self.activation,
            'return_sequences': self.return_sequences,
            'use_bias': self.use_bias,
        }


class LSTM(_Recurrent):
    kind = 'lstm'

    def __init__(self, input_size, hidden_size, return_sequences=False, use_bias=True,
                 dtype=DEFAULT_DTYPE):
        super().__init__(input_size, hidden_size, return_sequences, use_bias, dtype)
        self.sigmoid = Sigmoid()
        self.tanh = Tanh()

        scale = np.sqrt(1.0 / (input_size + hidden_size))
        for gate in GATES:
            setattr(self, f'wx{gate}', uniform((input_size, hidden_size), scale, dtype))
            setattr(self, f'wh{gate}', uniform((hidden_size, hidden_size), scale, dtype))
            bias = None
            if use_bias:
                # Forget gate starts at 1 so the cell initially remembers
                fill = 1.0 if gate == 'f' else 0.0
                bias = np.full(hidden_size, fill, dtype=dtype)
            setattr(self, f'b{gate}', bias)
        logger.debug("Built %s input %d, hidden %d", self.id, input_size, hidden_size)

    def _gate(self, gate, xt, hidden):
        pre = xt @ getattr(self, f'wx{gate}') + hidden @ getattr(self, f'wh{gate}')
        bias = getattr(self, f'b{gate}')
        if bias is not None:
            pre = pre + bias
        return pre

    def step(self, xt, hidden, cell):
        """Advance one time step, returning the new (hidden, cell) pair."""
        i = self.sigmoid(self._gate('i', xt, hidden))
        f = self.sigmoid(self._gate('f', xt, hidden))
        c_hat = self.tanh(self._gate('c', xt, hidden))
        cell = f * cell + i * c_hat
        o = self.sigmoid(self._gate('o', xt, hidden))
        hidden = o * np.tanh(cell)
        return hidden, cell

    def forward(self, x, initial_hidden=None, initial_cell=None):
        x = self._check_sequence(x)
        batch_size = x.shape[0]
        hidden = self._initial_state(initial_hidden, batch_size, 'initial_hidden')
        cell = self._initial_state(initial_cell, batch_size, 'initial_cell')
        history = [hidden] if self.return_sequences else None

        for t in range(x.shape[1]):
            hidden, cell = self.step(x[:, t, :], hidden, cell)
            if history is not None:
                history.append(hidden)

        return {
            'output': history if history is not None else hidden,
            'hidden': hidden,
            'cell': cell,
        }

    def update(self, **params):
        names = self.get_parameters()
        for name, value in params.items():
            if name not in names:
                raise KeyError(f"{self.id} has no parameter '{name}'")
            if value is None or (name.startswith('b') and not self.use_bias):
                continue
            self._replace(name, value)

    def get_parameters(self):
        params = {}
        for gate in GATES:
            for prefix in ('wx', 'wh', 'b'):
                name = f'{prefix}{gate}'
                params[name] = getattr(self, name)
        return params

    def get_config(self):
        return {
            'input_size': self.input_size,
            'hidden_size': self.hidden_size,
            'return_sequences': self.return_sequences,
            'use_bias': self.use_bias,
        }


def rnn_layer(input_size, hidden_size, activation='tanh', return_sequences=False,
              use_bias=True, dtype=DEFAULT_DTYPE):
    return SimpleRNN(input_size, hidden_size, activation=activation,
                     return_sequences=return_sequences, use_bias=use_bias, dtype=dtype)


def lstm_layer(input_size, hidden_size, return_sequences=False, use_bias=True,
               dtype=DEFAULT_DTYPE):
    return LSTM(input_size, hidden_size, return_sequences=return_sequences,
                use_bias=use_bias, dtype=dtype)
