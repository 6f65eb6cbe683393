import numpy as np

from .layers import Dense


class Sequential:
    """
    Ordered stack of layers; each layer's input width is the previous layer's units.
    """
    def __init__(self, seed: int = 0):
        self.layers = []
        self.rng = np.random.RandomState(seed)

    def add(self, layer):
        if self.layers:
            layer.build(self.layers[-1].units, self.rng)
        else:
            if layer.input_dim is None:
                raise ValueError("the first layer needs an input_dim")
            layer.build(layer.input_dim, self.rng)
        if layer.name is None:
            layer.name = f"dense_{len(self.layers) + 1}"
        self.layers.append(layer)
        return self

    @property
    def input_dim(self):
        return self.layers[0].input_dim

    def forward(self, x):
        out = x
        for layer in self.layers:
            out = layer.forward(out)
        return out

    def backward(self, grad):
        for layer in reversed(self.layers):
            grad = layer.backward(grad)
        return grad

    def predict(self, X):
        X = np.asarray(X, dtype=np.float64)
        if X.ndim == 1:
            X = X.reshape(-1, self.input_dim)
        return self.forward(X)

    def params(self):
        return [p for layer in self.layers for p in layer.params()]

    def grads(self):
        return [g for layer in self.layers for g in layer.grads()]

    def count_params(self):
        return sum(layer.count_params() for layer in self.layers)

    def summary(self):
        rows = [("Layer (type)", "Output shape", "Param #")]
        for layer in self.layers:
            rows.append((f"{layer.name} ({type(layer).__name__})",
                         f"[batch,{layer.units}]",
                         str(layer.count_params())))
        widths = [max(len(r[i]) for r in rows) + 4 for i in range(3)]
        rule = "_" * sum(widths)

        lines = [rule]
        for i, row in enumerate(rows):
            lines.append("".join(cell.ljust(w) for cell, w in zip(row, widths)).rstrip())
            lines.append("=" * sum(widths) if i == 0 else rule)
        total = self.count_params()
        lines.append(f"Total params: {total}")
        lines.append(f"Trainable params: {total}")
        lines.append("Non-trainable params: 0")
        lines.append(rule)
        return "\n".join(lines)


def create_model(seed: int = 0) -> Sequential:
    """
    Two stacked affine layers, 1 -> 1 -> 1, both with bias.

    There is no activation between them, so the network is one affine map.
    """
    model = Sequential(seed=seed)
    # hidden layer
    model.add(Dense(1, input_dim=1, use_bias=True))
    # output layer
    model.add(Dense(1, use_bias=True))
    return model
