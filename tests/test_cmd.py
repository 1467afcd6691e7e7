import pathlib
import subprocess
import sys

import numpy as np

import polyrun

script_path = pathlib.Path(__file__).resolve().parents[1]/'runpolyrun_cmd.py'


def run_cmd(*args, stdin=None):
    return subprocess.run([sys.executable, str(script_path), *args], input=stdin, capture_output=True, text=True)


def test_samples_to_stdout(tmp_path):
    path = tmp_path/'constraints.txt'
    path.write_text('1 0 >= 0\n0 1 >= 0\n1 1 <= 1\n')
    result = run_cmd('--input', str(path), '--samples', '5', '--seed', '1', '--thinning', 'tfc:2')
    assert result.returncode == 0, result.stderr

    samples = np.array([[float(value) for value in line.split('\t')] for line in result.stdout.splitlines()])
    assert samples.shape == (5, 2)
    assert np.all(samples >= -1e-9)
    assert np.all(samples.sum(axis=1) <= 1.0 + 1e-9)


def test_samples_from_stdin_to_file(tmp_path):
    output_path = tmp_path/'samples.tsv'
    result = run_cmd('--samples', '3', '--walk', 'ball', '--radius', '0.1', '--output', str(output_path), stdin='1 >= 0\n1 <= 1\n')
    assert result.returncode == 0, result.stderr
    assert len(output_path.read_text().splitlines()) == 3


def test_error_prints_message():
    result = run_cmd('--samples', '3', stdin='1 0 >= 0\n0 1 >= 0\n1 0 <= -1\n')
    assert result.returncode == 1
    assert 'Traceback' not in result.stderr
    assert result.stderr.strip() != ''


def test_invalid_number_of_samples():
    result = run_cmd('--samples', '0', stdin='1 >= 0\n1 <= 1\n')
    assert result.returncode != 0


def test_version():
    result = run_cmd('--version')
    assert result.returncode == 0
    assert result.stdout.strip() == polyrun.__version__
