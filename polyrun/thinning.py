"""
Thinning functions q = f(n, m): the number of walk steps made per emitted
sample, given the dimension n of the sampling space and the number of
constraints m.
"""
import math


class ConstantThinning:
    def __init__(self, constant):
        if constant <= 0:
            raise ValueError("Value of 'constant' cannot be equal or less than 0.")
        self.constant = int(constant)

    def __call__(self, dimension, n_constraints=0):
        return self.constant

    def __repr__(self):
        return f'ConstantThinning({self.constant})'


class NoThinning(ConstantThinning):
    def __init__(self):
        super().__init__(1)

    def __repr__(self):
        return 'NoThinning()'


class ScaledThinning:
    def __init__(self, scaling_factor):
        if scaling_factor <= 0.0:
            raise ValueError("Value of 'scaling_factor' cannot be equal or less than 0.")
        self.scaling_factor = scaling_factor

    def get_value(self, dimension, n_constraints):
        raise NotImplementedError

    def __call__(self, dimension, n_constraints=0):
        return max(int(math.ceil(self.get_value(dimension, n_constraints))), 1)

    def __repr__(self):
        return f'{type(self).__name__}({self.scaling_factor})'


class NCubedThinning(ScaledThinning):
    # ceil(a * n^3)
    def get_value(self, dimension, n_constraints):
        return self.scaling_factor*dimension**3


class LogNNCubedThinning(ScaledThinning):
    # ceil(a * log(n + 1) * n^3)
    def get_value(self, dimension, n_constraints):
        return self.scaling_factor*math.log(dimension + 1)*dimension**3


class MNThinning(ScaledThinning):
    # ceil(a * m * n)
    def get_value(self, dimension, n_constraints):
        return self.scaling_factor*n_constraints*dimension


_thinning_symbols = {
    'tfc': lambda parameter: ConstantThinning(int(parameter)),
    'tfl': lambda parameter: NCubedThinning(float(parameter)),
    'tfg': lambda parameter: LogNNCubedThinning(float(parameter)),
    'tfmn': lambda parameter: MNThinning(float(parameter)),
}


def thinning_from_string(value):
    """Parses '<symbol>:<parameter>', e.g. 'tfl:1' for ceil(1 * n^3)."""
    fields = value.split(':')
    if len(fields) != 2:
        raise ValueError(f"Wrong format of thinning function '{value}'. Expected <symbol>:<parameter>.")
    symbol, parameter = fields
    if symbol not in _thinning_symbols:
        raise ValueError(f"Wrong thinning function symbol '{symbol}'. Expected one of {', '.join(_thinning_symbols)}.")
    return _thinning_symbols[symbol](parameter)
