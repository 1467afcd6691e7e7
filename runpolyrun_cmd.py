import sys
import argparse
import traceback
import polyrun
from polyrun import dataloader,randomwalk,thinning
from polyrun.log import debug_mode
from polyrun.polytoperunner import PolytopeRunner

DEFAULT_NUMBER_OF_SAMPLES = 1000
DEFAULT_THINNING = 'tfl:1'

INPUT_HELP = '''Constraints file, one constraint per line in the format <a_1> <a_2> ... <a_n> <type> <rhs>,
where <type> is one of '<=', '>=' or '=' and all fields are separated by whitespace.
Blank lines are skipped and comment lines start with #. Standard input is read if not given.'''

THINNING_HELP = '''Thinning function in the format <symbol>:<parameter>, where <symbol> is one of
tfc (f(n) = a), tfl (f(n) = ceil(a * n^3)), tfg (f(n) = ceil(a * log(n + 1) * n^3)) or tfmn (f(n, m) = ceil(a * m * n))
and a is <parameter>. Default is tfl:1.'''

def positive_int(v):
    value = int(v)
    if value <= 0:
        raise argparse.ArgumentTypeError('Number of samples cannot be less or equal to 0.')
    return value

def thinning_function(v):
    try:
        return thinning.thinning_from_string(v)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))

def get_walk(walk_name,radius,out_of_bounds,rng):
    if walk_name == 'hitandrun':
        return randomwalk.HitAndRun(rng=rng)
    if walk_name == 'ball':
        return randomwalk.BallWalk(radius,out_of_bounds=out_of_bounds,rng=rng)
    if walk_name == 'sphere':
        return randomwalk.SphereWalk(radius,out_of_bounds=out_of_bounds,rng=rng)
    if walk_name == 'grid':
        return randomwalk.GridWalk(radius,rng=rng)
    raise ValueError(f'invalid walk {walk_name}')

def get_parser():
    my_parser = argparse.ArgumentParser(allow_abbrev=False,description='Uniform sampling of the convex polytope Ax <= b, Cx = d.')

    my_parser.add_argument('--version', action='version', version=polyrun.__version__)
    my_parser.add_argument('--input', action='store', type=str, required=False, default=None, help=INPUT_HELP)
    my_parser.add_argument('--output', action='store', type=str, required=False, default=None, help='Tab separated output file with one sample per line. Standard output is used if not given.')
    my_parser.add_argument('--seed', action='store', type=int, required=False, default=None, help='Seed of the random number generator. Default is a random seed.')
    my_parser.add_argument('--samples', action='store', type=positive_int, required=False, default=DEFAULT_NUMBER_OF_SAMPLES, help=f'Number of samples. Default is {DEFAULT_NUMBER_OF_SAMPLES}.')
    my_parser.add_argument('--thinning', action='store', type=thinning_function, required=False, default=DEFAULT_THINNING, help=THINNING_HELP)

    my_parser.add_argument('--walk', action='store', type=str, required=False, default='hitandrun', choices=['hitandrun','ball','sphere','grid'], help='Random walk used for sampling. Default is hitandrun.')
    my_parser.add_argument('--radius', action='store', type=float, required=False, default=None, help='Radius of the ball and sphere walks, grid spacing of the grid walk.')
    my_parser.add_argument('--out_of_bounds', action='store', type=str, required=False, default='stay', choices=['stay','crop'], help='What the ball and sphere walks do when a step leaves the polytope. Default is stay.')

    my_parser.add_argument('--verbose', action='store_true', help='Log debug messages.')
    my_parser.add_argument('--stacktrace', action='store_true', help='Print the stack trace on error rather than just the message.')
    return my_parser

def run(args):
    constraints = dataloader.load_constraints_file(sys.stdin if args.input is None else args.input)

    walk = get_walk(args.walk,args.radius,args.out_of_bounds,args.seed)
    polytope_runner = PolytopeRunner(constraints)
    polytope_runner.set_any_start_point()
    samples = polytope_runner.chain(walk,args.thinning,args.samples)

    dataloader.write_samples(samples,sys.stdout if args.output is None else args.output)

if __name__ == '__main__':
    my_parser = get_parser()
    args = my_parser.parse_args()
    if args.walk != 'hitandrun' and args.radius is None:
        my_parser.error(f'--radius is required for the {args.walk} walk')
    if args.verbose:
        debug_mode()

    try:
        run(args)
    except Exception as e:
        if args.stacktrace:
            traceback.print_exc()
        else:
            print(e,file=sys.stderr)
        sys.exit(1)
