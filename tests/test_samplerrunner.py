import numpy as np
import pytest

from polyrun.constraints import ConstraintsSystem
from polyrun.exceptions import InfeasibleSystemError, UnboundedSystemError
from polyrun.samplerrunner import SamplerRunner
from polyrun.thinning import ConstantThinning


def test_only_full_equalities():
    constraints = ConstraintsSystem.from_rows([[1, 0], [0, 1]], ['=', '='], [1, 2])
    samples = SamplerRunner().sample(constraints, 1000)
    assert samples.shape == (1000, 2)
    assert np.allclose(samples, [1, 2], atol=1e-10)


def test_only_full_equalities_with_consumer():
    constraints = ConstraintsSystem.from_rows([[1, 0], [0, 1]], ['=', '='], [1, 2])
    samples = []
    assert SamplerRunner().sample(constraints, 5, consumer=samples.append) is None
    assert len(samples) == 5
    assert np.allclose(samples, [1, 2], atol=1e-10)


def test_pinned_point_outside_inequalities():
    constraints = ConstraintsSystem([[1, 0]], [0], [[1, 0], [0, 1]], [1, 2])
    with pytest.raises(InfeasibleSystemError):
        SamplerRunner().sample(constraints, 3)


def test_pinned_point_inside_inequalities():
    constraints = ConstraintsSystem([[1, 0]], [5], [[1, 0], [0, 1]], [1, 2])
    samples = SamplerRunner().sample(constraints, 3)
    assert np.allclose(samples, [1, 2], atol=1e-10)
    assert np.all(samples @ constraints.A.T <= constraints.b + 1e-10)


def test_unbounded_region():
    constraints = ConstraintsSystem.from_rows([[1, 0], [0, 1]], ['>=', '>='], [0, 0])
    with pytest.raises(UnboundedSystemError):
        SamplerRunner().sample(constraints, 1)


def test_infeasible_region():
    constraints = ConstraintsSystem.from_rows([[1, 0], [0, 1], [1, 0]], ['>=', '>=', '<='], [0, 0, -1])
    with pytest.raises(InfeasibleSystemError):
        SamplerRunner().sample(constraints, 1)


def test_one_independent_variable():
    constraints = ConstraintsSystem.from_rows([[1, 0, 0], [0, 0, 1], [1, 0, 1], [0, 1, 0]], ['>=', '>=', '<=', '='], [0, 0, 1, 1])
    samples = SamplerRunner().sample(constraints, 100)
    assert samples.shape == (100, 3)
    assert np.allclose(samples[:, 1], 1.0, atol=1e-10)
    assert np.all(samples[:, 0] + samples[:, 2] <= 1.0 + 1e-9)


def test_samples_inside_triangle():
    constraints = ConstraintsSystem.from_rows([[1, 0], [0, 1], [1, 1]], ['>=', '>=', '<='], [0, 0, 1])
    samples = SamplerRunner(thinning=ConstantThinning(3), rng=0, burn_in=10).sample(constraints, 500, randomized_start=True)
    assert samples.shape == (500, 2)
    for sample in samples:
        assert constraints.is_satisfied(sample, eps=1e-9)


def test_reproducible_with_seed():
    constraints = ConstraintsSystem.from_rows([[1, 0], [0, 1], [1, 1]], ['>=', '>=', '<='], [0, 0, 1])
    first = SamplerRunner(rng=4).sample(constraints, 50)
    second = SamplerRunner(rng=4).sample(constraints, 50)
    assert np.array_equal(first, second)


def test_consumer_receives_every_sample():
    constraints = ConstraintsSystem.from_rows([[1, 0], [0, 1], [1, 1]], ['>=', '>=', '<='], [0, 0, 1])
    samples = []
    SamplerRunner(rng=0).sample(constraints, 20, consumer=samples.append)
    assert len(samples) == 20
    for sample in samples:
        assert sample.shape == (2,)
        assert constraints.is_satisfied(sample, eps=1e-9)


def test_non_positive_number_of_samples():
    constraints = ConstraintsSystem.from_rows([[1, 0], [0, 1], [1, 1]], ['>=', '>=', '<='], [0, 0, 1])
    with pytest.raises(ValueError):
        SamplerRunner().sample(constraints, 0)
