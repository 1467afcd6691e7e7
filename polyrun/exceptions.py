from enum import IntEnum


class ErrorKind(IntEnum):
    #numba kernels report these as plain integers, 0 means success
    OK = 0
    INFEASIBLE = 1
    UNBOUNDED = 2
    NOT_FULL_DIMENSIONAL = 3
    ACCURACY = 4
    SINGLE_SOLUTION = 5
    START_POINT = 6


class PolyrunError(Exception):
    kind = None


class InfeasibleSystemError(PolyrunError):
    kind = ErrorKind.INFEASIBLE

    def __init__(self, message, slack=None):
        super().__init__(message)
        self.slack = slack


class UnboundedSystemError(PolyrunError):
    kind = ErrorKind.UNBOUNDED


class NotFullDimensionalError(PolyrunError):
    kind = ErrorKind.NOT_FULL_DIMENSIONAL


class AccuracyError(PolyrunError):
    kind = ErrorKind.ACCURACY


class SingleSolutionError(PolyrunError, ValueError):
    kind = ErrorKind.SINGLE_SOLUTION


class StartPointNotSetError(PolyrunError):
    kind = ErrorKind.START_POINT


_status_messages = {
    ErrorKind.UNBOUNDED: (UnboundedSystemError, 'Cannot find begin or end of a segment for given direction. The sampling region is unbounded.'),
    ErrorKind.NOT_FULL_DIMENSIONAL: (NotFullDimensionalError, 'Polytope defined by provided set of inequalities is not full-dimensional or method error.'),
    ErrorKind.ACCURACY: (AccuracyError, 'Accuracy or method error, the current point does not satisfy Ax <= b.'),
}


def raise_for_status(status, detail=None):
    status = ErrorKind(status)
    if status == ErrorKind.OK:
        return
    if status not in _status_messages:
        raise PolyrunError(f'Unexpected sampler status {status.name}')
    error_class, message = _status_messages[status]
    if detail is not None:
        message = f'{message} ({detail})'
    raise error_class(message)
