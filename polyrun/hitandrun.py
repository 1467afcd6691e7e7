import numpy as np
from numba import njit

from polyrun.boundary import EPS, segment_extents
from polyrun.exceptions import ErrorKind, raise_for_status
from polyrun.thinning import NoThinning

ACCURACY_THRESHOLD = 1e-10

#kernel statuses, see ErrorKind
STATUS_OK = int(ErrorKind.OK)
STATUS_UNBOUNDED = int(ErrorKind.UNBOUNDED)
STATUS_NOT_FULL_DIMENSIONAL = int(ErrorKind.NOT_FULL_DIMENSIONAL)
STATUS_ACCURACY = int(ErrorKind.ACCURACY)

def get_random_directions(rng, n_steps, dimension, homogeneous=False):
    #one direction per row, homogeneous directions keep a zero last coordinate
    n_free = dimension - 1 if homogeneous else dimension
    directions = np.zeros((n_steps, dimension))
    x = rng.standard_normal(size=(n_steps, n_free))
    directions[:, :n_free] = x/np.linalg.norm(x, axis=1).reshape(-1, 1)
    return directions

@njit
def get_direction_range(A, b, direction, current_position, eps):
    ed, bg, violated = segment_extents(A, b, direction, current_position, eps)
    if violated >= 0:
        return bg, ed, STATUS_ACCURACY
    if ed == np.inf or bg == -np.inf:
        return bg, ed, STATUS_UNBOUNDED
    if bg >= ed:
        return bg, ed, STATUS_NOT_FULL_DIMENSIONAL
    if bg > 0.0:
        if bg > ACCURACY_THRESHOLD:
            return bg, ed, STATUS_ACCURACY
        bg = 0.0
    if ed < 0.0:
        if ed < -ACCURACY_THRESHOLD:
            return bg, ed, STATUS_ACCURACY
        ed = 0.0
    return bg, ed, STATUS_OK

@njit
def run_chain(A, b, current_position, directions, uniforms, burn_in, skips, n_samples, eps):
    hit_and_run_store = np.zeros((n_samples, current_position.size))
    current_position = current_position.copy()

    n_steps = burn_in + skips*n_samples
    for i in range(n_steps):
        direction = directions[i]
        bg, ed, status = get_direction_range(A, b, direction, current_position, eps)
        if status != STATUS_OK:
            return hit_and_run_store, i, status
        step_length = bg + (ed - bg)*uniforms[i]
        current_position = current_position + direction*step_length

        if i >= burn_in and (i - burn_in + 1) % skips == 0:
            hit_and_run_store[(i - burn_in)//skips, :] = current_position
    return hit_and_run_store, n_steps, STATUS_OK


def check_inputs(A, b, start_point, n_samples, homogeneous, eps=EPS):
    if n_samples <= 0:
        raise ValueError(f"Argument 'n_samples' has to be greater than 0. Currently, its value equals {n_samples}.")
    if A.ndim != 2 or A.shape[0] == 0 or A.shape[1] == 0:
        raise ValueError("Matrix 'A' cannot be empty.")
    if A.shape[0] != b.size:
        raise ValueError("Length of vector 'b' has to be equal to the number of rows of matrix 'A' (number of constraints).")
    if A.shape[1] != start_point.size:
        raise ValueError("Length of vector 'start_point' has to be equal to the number of columns of matrix 'A' (number of variables).")
    if homogeneous and start_point.size < 2:
        raise ValueError('There is no space to sample.')
    if homogeneous and abs(start_point[-1] - 1.0) > EPS:
        raise ValueError("The last element of 'start_point' has to be 1.0 in case of providing data in homogeneous coordinates.")
    if np.any(A @ start_point > b + eps):
        raise ValueError("Provided 'start_point' is not an interior point of sampling convex polytope.")


def hit_and_run(A, b, start_point, n_samples, thinning=None, homogeneous=False, burn_in=0, rng=None, eps=EPS):
    """
    Samples uniformly from the convex polytope Ax <= b with a hit-and-run
    chain started at start_point.

    In homogeneous coordinates the last coordinate of every point is pinned
    to 1 and directions never move it. thinning(dimension, n_constraints)
    gives the number of steps per returned sample, burn_in steps are made
    before the first one.
    """
    A = np.ascontiguousarray(A, dtype=float)
    b = np.ascontiguousarray(b, dtype=float).reshape(-1)
    start_point = np.ascontiguousarray(start_point, dtype=float).reshape(-1)
    check_inputs(A, b, start_point, n_samples, homogeneous, eps)

    if thinning is None:
        thinning = NoThinning()
    dimension = A.shape[1] - 1 if homogeneous else A.shape[1]
    skips = max(thinning(dimension, A.shape[0]), 1)

    rng = np.random.default_rng(rng)
    n_steps = burn_in + skips*n_samples
    directions = get_random_directions(rng, n_steps, A.shape[1], homogeneous=homogeneous)
    uniforms = rng.random(n_steps)

    hit_and_run_store, step, status = run_chain(A, b, start_point, directions, uniforms, burn_in, skips, n_samples, eps)
    if status != ErrorKind.OK:
        raise_for_status(status, detail=f'step {step}')
    return hit_and_run_store
