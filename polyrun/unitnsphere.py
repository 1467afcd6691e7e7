import numpy as np


class UnitNSphere:
    """
    Sphere of unit radius centred at the origin. Points are drawn by
    normalising a vector of standard normal values (Marsaglia's method).
    """
    def __init__(self, rng=None):
        self.rng = np.random.default_rng(rng)

    def fill(self, vector, homogeneous=False):
        n = vector.size - 1 if homogeneous else vector.size
        if homogeneous and vector.size > 0:
            vector[-1] = 0.0
        if n <= 0:
            return vector
        point = vector[:n]
        self.rng.standard_normal(out=point)
        point /= np.sqrt(np.dot(point, point))
        return vector

    def draw(self, n, homogeneous=False):
        return self.fill(np.zeros(n + 1 if homogeneous else n), homogeneous=homogeneous)
