import numpy as np
import pytest

from neuralcore.conv import Conv2D, Flatten
from neuralcore.dense import Dense
from neuralcore.errors import ShapeError
from neuralcore.sequential import Sequential, feed_forward, simple_cnn


def test_feed_forward_chains_sizes():
    net = feed_forward([4, 8, 6, 2], activation='tanh', output_activation='softmax')
    assert len(net) == 3
    for layer, (n_in, n_out) in zip(net, [(4, 8), (8, 6), (6, 2)]):
        assert (layer.input_size, layer.output_size) == (n_in, n_out)
    assert [layer.activation for layer in net] == ['tanh', 'tanh', 'softmax']


def test_feed_forward_output():
    net = feed_forward([4, 8, 2], output_activation='softmax')
    out = net.forward(np.random.randn(5, 4))
    assert out.shape == (5, 2)
    assert np.allclose(out.sum(axis=1), 1.0)


def test_feed_forward_needs_two_sizes():
    with pytest.raises(ValueError):
        feed_forward([3])


def test_forward_threads_layers_in_order():
    first = Dense(2, 2, activation='linear')
    second = Dense(2, 1, activation='linear')
    first.update([[1, 0], [0, 2]], [0, 0])
    second.update([[1], [1]], [1])
    net = Sequential([first, second])
    assert np.array_equal(net.forward([[1, 1]]), [[4.0]])
    assert np.array_equal(net([[1, 1]]), second.forward(first.forward([[1, 1]])))


def test_forward_propagates_shape_error():
    net = feed_forward([3, 2])
    with pytest.raises(ShapeError):
        net.forward(np.ones((1, 4)))


def test_get_parameters_per_layer():
    net = feed_forward([3, 4, 2])
    params = net.get_parameters()
    assert len(params) == 2
    assert params[0]['weights'] is net.layers[0].weights
    assert params[1]['bias'].shape == (2,)
    assert len(net.parameters) == 4


def test_state_dict_round_trip():
    src = feed_forward([3, 4, 2])
    dst = feed_forward([3, 4, 2])
    dst.load_state_dict(src.state_dict())
    x = np.random.randn(2, 3)
    assert np.array_equal(src.forward(x), dst.forward(x))


def test_simple_cnn_structure():
    net = simple_cnn((1, 8, 8), 10)
    kinds = [layer.kind for layer in net]
    assert kinds == ['conv2d', 'conv2d', 'flatten', 'dense', 'dense']
    assert isinstance(net.layers[0], Conv2D) and net.layers[0].out_channels == 32
    assert net.layers[1].out_channels == 64
    assert isinstance(net.layers[2], Flatten)
    assert net.layers[3].input_size == 64 * 4 * 4
    assert net.layers[4].activation == 'softmax'


def test_simple_cnn_forward():
    net = simple_cnn((2, 6, 7), 3)
    out = net.forward(np.random.rand(2, 2, 6, 7))
    assert out.shape == (2, 3)
    assert np.allclose(out.sum(axis=1), 1.0)
    assert (out >= 0).all()


def test_simple_cnn_rejects_tiny_images():
    with pytest.raises(ValueError):
        simple_cnn((1, 4, 8), 2)
