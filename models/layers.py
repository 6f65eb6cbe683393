import numpy as np


class Dense:
    """
    Affine layer y = x @ kernel + bias, no activation.
    """
    def __init__(self, units: int, input_dim: int = None, use_bias: bool = True, name: str = None):
        self.units = int(units)
        self.input_dim = input_dim
        self.use_bias = use_bias
        self.name = name

        self.kernel = None
        self.bias = None
        self.d_kernel = None
        self.d_bias = None
        self._last_input = None

    @property
    def built(self):
        return self.kernel is not None

    def build(self, input_dim: int, rng):
        # glorot uniform kernel, zero bias
        self.input_dim = int(input_dim)
        limit = np.sqrt(6.0 / (self.input_dim + self.units))
        self.kernel = rng.uniform(-limit, limit, size=(self.input_dim, self.units))
        self.bias = np.zeros(self.units) if self.use_bias else None

    def forward(self, x):
        self._last_input = x
        out = x @ self.kernel
        if self.use_bias:
            out = out + self.bias
        return out

    def backward(self, grad):
        """
        Store parameter gradients for the last forward pass and return dL/dx.
        """
        x = self._last_input
        self.d_kernel = x.T @ grad
        if self.use_bias:
            self.d_bias = np.sum(grad, axis=0)
        return grad @ self.kernel.T

    def params(self):
        return [self.kernel, self.bias] if self.use_bias else [self.kernel]

    def grads(self):
        return [self.d_kernel, self.d_bias] if self.use_bias else [self.d_kernel]

    def count_params(self):
        return sum(p.size for p in self.params())
