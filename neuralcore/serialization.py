"""
serialization.py
~~~~~~~~~~~~~~~~

Convert Dense-only networks to and from a plain ``{"layers": [...]}`` tree,
and persist that tree as JSON.
"""

import json
import logging
import os
from typing import Any, Dict

import numpy as np

from .dense import Dense
from .errors import UnsupportedConfigurationError
from .sequential import Sequential

logger = logging.getLogger(__name__)


class NetworkEncoder(json.JSONEncoder):
    """JSON encoder that writes numpy arrays and scalars as plain lists and floats."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, np.generic):
            return obj.item()
        return super().default(obj)


def save_network(network) -> Dict[str, Any]:
    """
    Snapshot a network's Dense layers.

    Returns:
        ``{"layers": [{"type", "params", "config"}]}`` holding copies of the
        weights, so later training does not alter the snapshot.

    Raises:
        UnsupportedConfigurationError: if the network has a non-Dense layer
    """
    layers = []
    for layer in network.layers:
        if not isinstance(layer, Dense):
            raise UnsupportedConfigurationError(
                f"Only dense layers can be saved, got '{layer.kind}'"
            )
        params = layer.get_parameters()
        layers.append({
            'type': layer.kind,
            'params': {
                'weights': params['weights'].copy(),
                'bias': params['bias'].copy() if params['bias'] is not None else None,
            },
            'config': {
                'input_size': layer.input_size,
                'output_size': layer.output_size,
                'activation': layer.activation,
            },
        })
    return {'layers': layers}


def load_network(data: Dict[str, Any]) -> Sequential:
    """
    Rebuild a network produced by :func:`save_network`.

    Raises:
        UnsupportedConfigurationError: if an entry's type is not 'dense'
    """
    layers = []
    for index, entry in enumerate(data['layers']):
        layer_type = entry.get('type')
        if layer_type != Dense.kind:
            raise UnsupportedConfigurationError(
                f"Layer {index}: cannot load layer type '{layer_type}', only 'dense' is supported"
            )
        config = entry['config']
        params = entry.get('params', {})
        layer = Dense(
            config['input_size'],
            config['output_size'],
            activation=config.get('activation', 'relu'),
            use_bias=params.get('bias') is not None,
        )
        layer.update(params.get('weights'), params.get('bias'))
        layers.append(layer)
    return Sequential(layers)


def save_network_to_file(network, file_path: str) -> None:
    """Write the serialized network to ``file_path`` as JSON."""
    data = save_network(network)
    directory = os.path.dirname(file_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(file_path, 'w', encoding='utf-8') as f:
        json.dump(data, f, cls=NetworkEncoder)
    logger.info("Saved network with %d layers to %s", len(data['layers']), file_path)


def load_network_from_file(file_path: str) -> Sequential:
    """Read a JSON file written by :func:`save_network_to_file`."""
    with open(file_path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    network = load_network(data)
    logger.info("Loaded network with %d layers from %s", len(network), file_path)
    return network
