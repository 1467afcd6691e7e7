import numpy as np
import pytest

from polyrun.exceptions import AccuracyError, NotFullDimensionalError, UnboundedSystemError
from polyrun.randomwalk import BallWalk, GridWalk, HitAndRun, OutOfBoundsBehaviour, SphereWalk, get_segment, take_step

square_A = np.array([[1, 0], [0, 1], [-1, 0], [0, -1]], dtype=float)
square_b = np.array([1, 1, 0, 0], dtype=float)


def run_walk(walk, x, n_steps, A=square_A, b=square_b):
    buffer = np.zeros(x.size)
    points = []
    for _ in range(n_steps):
        walk.next(A, b, buffer, x, x)
        points.append(x.copy())
    return np.array(points)


def test_hit_and_run_stays_inside():
    points = run_walk(HitAndRun(rng=0), np.array([0.5, 0.5]), 500)
    assert np.all(points @ square_A.T <= square_b + 1e-10)


def test_take_step_to_other_buffer():
    x_from = np.array([0.5, 0.5])
    x_to = np.zeros(2)
    take_step(HitAndRun(rng=0), square_A, square_b, np.zeros(2), x_from, x_to)
    assert np.array_equal(x_from, [0.5, 0.5])
    assert not np.array_equal(x_to, x_from)


def test_ball_walk_stays_when_out_of_bounds():
    points = run_walk(BallWalk(1e6, rng=0), np.array([0.5, 0.5]), 50)
    assert np.all(points == 0.5)


def test_ball_walk_crops_to_boundary():
    points = run_walk(BallWalk(1e6, out_of_bounds=OutOfBoundsBehaviour.CROP, rng=0), np.array([0.5, 0.5]), 20)
    slack = square_b - points @ square_A.T
    assert np.all(slack >= -1e-10)
    assert np.all(np.min(slack, axis=1) < 1e-9)


def test_ball_walk_accepts_behaviour_name():
    assert BallWalk(1.0, out_of_bounds='crop').out_of_bounds == OutOfBoundsBehaviour.CROP


def test_sphere_walk_step_length():
    x = np.array([0.5, 0.5])
    walk = SphereWalk(0.1, rng=1)
    buffer = np.zeros(2)
    for _ in range(20):
        x_to = np.zeros(2)
        walk.next(square_A, square_b, buffer, np.array([0.5, 0.5]), x_to)
        assert np.isclose(np.linalg.norm(x_to - x), 0.1)


def test_grid_walk_stays_on_grid():
    points = run_walk(GridWalk(0.25, rng=2), np.array([0.5, 0.5]), 300)
    assert np.all(points >= -1e-12)
    assert np.all(points <= 1.0 + 1e-12)
    assert np.allclose(points*4, np.round(points*4))
    steps = np.abs(np.diff(points, axis=0))
    assert np.all(np.count_nonzero(steps > 1e-12, axis=1) <= 1)


def test_grid_walk_direction():
    buffer = np.full(3, 5.0)
    GridWalk(1.0, rng=0).sample_direction(buffer)
    assert np.count_nonzero(buffer) == 1
    assert np.abs(buffer).sum() == 1.0


@pytest.mark.parametrize('make_walk', [lambda: BallWalk(0.0), lambda: SphereWalk(-1.0), lambda: GridWalk(0.0)])
def test_non_positive_parameter(make_walk):
    with pytest.raises(ValueError):
        make_walk()


def test_unbounded_region():
    A = np.array([[1.0, 0.0]])
    b = np.array([1.0])
    with pytest.raises(UnboundedSystemError):
        run_walk(HitAndRun(rng=0), np.array([0.0, 0.0]), 1, A, b)


def test_not_full_dimensional():
    A = np.array([[1.0], [-1.0]])
    b = np.array([0.0, 0.0])
    with pytest.raises(NotFullDimensionalError):
        run_walk(HitAndRun(rng=0), np.array([0.0]), 1, A, b)


def test_point_out_of_bounds():
    with pytest.raises(AccuracyError):
        run_walk(HitAndRun(rng=0), np.array([2.0, 0.5]), 1)


def test_get_segment():
    bg, ed = get_segment(square_A, square_b, np.array([1.0, 0.0]), np.array([0.25, 0.5]))
    assert np.isclose(bg, -0.25)
    assert np.isclose(ed, 0.75)
