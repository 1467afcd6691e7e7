import numpy as np
import pandas as pd

from polyrun.constraints import ALLOWED_DIRECTIONS, ConstraintsSystem


def load_constraints_table(path_or_buffer):
    try:
        constraints_table = pd.read_csv(path_or_buffer, sep=r'\s+', header=None, comment='#', dtype=str, skip_blank_lines=True)
    except pd.errors.EmptyDataError:
        raise ValueError('No constraints found in the input.')
    except pd.errors.ParserError as e:
        raise ValueError(f'All constraints are expected to have the same number of fields. {e}')
    return constraints_table


def load_constraints_file(path_or_buffer):
    """
    Reads one constraint per line in the format <a_1> ... <a_n> <type> <rhs>,
    where <type> is one of '<=', '>=' or '='. Fields are whitespace separated,
    blank lines are skipped and # starts a comment.
    """
    constraints_table = load_constraints_table(path_or_buffer)
    if len(constraints_table.index) == 0:
        raise ValueError('No constraints found in the input.')
    if len(constraints_table.columns) < 3:
        raise ValueError('Each constraint needs at least one coefficient, a type and a right hand side.')
    if constraints_table.isnull().values.any():
        bad_rows = constraints_table.index[constraints_table.isnull().any(axis=1)].tolist()
        raise ValueError(f'All constraints are expected to have the same number of fields, rows {bad_rows} are too short.')

    directions = constraints_table.iloc[:, -2]
    bad_directions = directions[~directions.isin(ALLOWED_DIRECTIONS)]
    if len(bad_directions.index) > 0:
        raise ValueError(f"Wrong constraint type '{bad_directions.iloc[0]}'. Only '<=', '>=' and '=' are acceptable.")

    try:
        lhs = constraints_table.iloc[:, :-2].astype(float).to_numpy()
        rhs = constraints_table.iloc[:, -1].astype(float).to_numpy()
    except ValueError as e:
        raise ValueError(f'Wrong number format. {e}')
    return ConstraintsSystem.from_rows(lhs, directions.tolist(), rhs)


def write_samples(samples, path_or_buffer):
    sample_table = pd.DataFrame(np.atleast_2d(np.asarray(samples, dtype=float)))
    sample_table.to_csv(path_or_buffer, sep='\t', header=False, index=False)
