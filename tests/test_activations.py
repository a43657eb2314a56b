import logging
import warnings

import numpy as np
import pytest

from neuralcore.activations import (
    ACTIVATIONS,
    Linear,
    Softmax,
    get_activation,
    lookup_activation,
)
from neuralcore.errors import UnsupportedConfigurationError


def test_relu():
    r = lookup_activation('relu')(np.array([-2.0, 0.0, 3.0]))
    assert np.allclose(r, [0, 0, 3]), "ReLU forward failed"


def test_sigmoid():
    s = lookup_activation('sigmoid')(np.array([-1.0, 0.0, 1.0]))
    expected = 1 / (1 + np.exp([1.0, 0.0, -1.0]))
    assert np.allclose(s, expected), "Sigmoid forward failed"


def test_tanh_and_linear():
    x = np.array([[-1.0, 0.5], [2.0, 0.0]])
    assert np.allclose(lookup_activation('tanh')(x), np.tanh(x))
    assert np.array_equal(lookup_activation('linear')(x), x)


@pytest.mark.parametrize("name", sorted(ACTIVATIONS))
@pytest.mark.parametrize("shape", [(5,), (3, 4), (2, 3, 4)])
def test_shape_preserved_for_any_rank(name, shape):
    x = np.random.randn(*shape)
    assert get_activation(name)(x).shape == shape


def test_elementwise_is_rank_independent():
    x = np.random.randn(2, 3, 4)
    relu = lookup_activation('relu')
    assert np.array_equal(relu(x)[1], relu(x[1]))


def test_softmax_rows_sum_to_one():
    x = np.array([[1.0, 2.0, 3.0], [-5.0, 0.0, 5.0], [0.0, 0.0, 0.0]])
    out = Softmax()(x)
    assert np.allclose(out.sum(axis=-1), 1.0)
    assert (out >= 0).all()
    assert np.allclose(out[2], [1 / 3] * 3)


def test_softmax_is_numerically_stable():
    out = Softmax()(np.array([[1000.0, 1000.0], [-1000.0, 0.0]]))
    assert np.isfinite(out).all()
    assert np.allclose(out[0], [0.5, 0.5])
    assert np.allclose(out[1], [0.0, 1.0])


def test_softmax_vector():
    out = Softmax()(np.array([1.0, 1.0, 1.0, 1.0]))
    assert np.allclose(out, 0.25)


def test_unknown_name_lookup_is_absent():
    assert lookup_activation('swish') is None


def test_unknown_name_resolves_to_identity(caplog):
    with caplog.at_level(logging.WARNING, logger='neuralcore.activations'):
        act = get_activation('swish')
    assert isinstance(act, Linear)
    assert "swish" in caplog.text


def test_unknown_name_strict_raises():
    with pytest.raises(UnsupportedConfigurationError):
        get_activation('swish', strict=True)


def test_none_means_identity():
    x = np.array([-1.0, 2.0])
    assert np.array_equal(get_activation(None)(x), x)


def test_state_dict_reports_name():
    assert get_activation('tanh').state_dict() == {'activation': 'tanh'}


def test_sigmoid_keeps_float32():
    x = np.array([-1.0, 0.0, 2.0], dtype=np.float32)
    assert lookup_activation('sigmoid')(x).dtype == np.float32
    assert lookup_activation('softmax')(x).dtype == np.float32


def test_sigmoid_large_inputs_without_overflow():
    x = np.array([-1000.0, -50.0, 0.0, 50.0, 1000.0])
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        out = lookup_activation('sigmoid')(x)
    assert np.isfinite(out).all()
    assert np.allclose(out, [0.0, 1 / (1 + np.exp(50.0)), 0.5, 1 / (1 + np.exp(-50.0)), 1.0])


def test_sigmoid_int_input_promoted():
    assert np.allclose(lookup_activation('sigmoid')(np.array([0, 0])), [0.5, 0.5])
