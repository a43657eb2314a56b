import logging

from .conv import Conv2D, Flatten
from .dense import Dense

logger = logging.getLogger(__name__)


class Sequential:
    def __init__(self, layers):
        """
        Compose layers into a linear pipeline; insertion order is evaluation order.
        """
        self.layers = list(layers)
        logger.debug("Assembled network of %d layers: %s",
                     len(self.layers), [layer.kind for layer in self.layers])

    def forward(self, x):
        for layer in self.layers:
            x = layer(x)
        return x

    def __call__(self, x):
        return self.forward(x)

    def get_parameters(self):
        """One live parameter dict per layer, in layer order"""
        return [layer.get_parameters() for layer in self.layers]

    @property
    def parameters(self):
        """Flat list of all parameter arrays"""
        params = []
        for layer in self.layers:
            params.extend(layer.parameters)
        return params

    def state_dict(self):
        return {f'layer_{i}': layer.state_dict() for i, layer in enumerate(self.layers)}

    def load_state_dict(self, state_dict):
        for i, layer in enumerate(self.layers):
            layer.load_state_dict(state_dict.get(f'layer_{i}', {}))

    def __len__(self):
        return len(self.layers)

    def __iter__(self):
        return iter(self.layers)

    def __repr__(self):
        return f"{self.__class__.__name__}(\n" + \
               "\n".join(f"  ({i}): {layer}" for i, layer in enumerate(self.layers)) + "\n)"


def feed_forward(layer_sizes, activation='relu', output_activation='linear', weight_init='xavier'):
    """
    Build a stack of Dense layers where layer i maps layer_sizes[i] -> layer_sizes[i+1].

    Hidden layers use ``activation``; the last layer uses ``output_activation``.
    """
    if len(layer_sizes) < 2:
        raise ValueError(f"feed_forward needs at least an input and output size, got {layer_sizes}")
    layers = []
    last = len(layer_sizes) - 2
    for i, (n_in, n_out) in enumerate(zip(layer_sizes[:-1], layer_sizes[1:])):
        layers.append(Dense(n_in, n_out,
                            activation=output_activation if i == last else activation,
                            weight_init=weight_init))
    return Sequential(layers)


def simple_cnn(input_shape, num_classes):
    """
    Fixed image classifier: two 3x3 convolutions (32 then 64 channels, no
    padding), flatten, Dense(128, relu), Dense(num_classes, softmax).

    Args:
        input_shape: (channels, height, width) of a single image
        num_classes: Number of output classes
    """
    channels, height, width = input_shape
    if height < 5 or width < 5:
        raise ValueError(f"simple_cnn needs images of at least 5x5, got {height}x{width}")

    conv1 = Conv2D(channels, 32, kernel_size=3, activation='relu')
    conv2 = Conv2D(32, 64, kernel_size=3, activation='relu')
    h_out, w_out = conv2.output_shape(*conv1.output_shape(height, width))

    return Sequential([
        conv1,
        conv2,
        Flatten(),
        Dense(64 * h_out * w_out, 128, activation='relu'),
        Dense(128, num_classes, activation='softmax'),
    ])
