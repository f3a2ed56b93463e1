"""
Three small computations showing the policies of the resumable package.

    python -m resumable.demo [--variant=counter|message|generic|all]
                             [--count=N] [--log]
"""

import sys

from resumable import computation, produce
from resumable.config.config import (Config, OptionDescription, ChoiceOption,
    IntOption, BoolOption, to_optparse)
from resumable.tool.ansi_print import enable_logging

VARIANTS = ['counter', 'message', 'generic']

demo_optiondescription = OptionDescription("demo", "Demo options", [
    ChoiceOption("variant", "which computation to run",
                 VARIANTS + ['all'], 'all', cmdline="--variant -v"),
    IntOption("count", "how many values to pull", default=3,
              cmdline="--count -n"),
    BoolOption("log", "print the lifecycle events of the computations",
               default=False, cmdline="--log"),
    ])


# 1. resumed a fixed number of times, never finishes, produces nothing
# useful.  Errors are dropped, which must be asked for explicitly.
@computation(initial='lazy', final='lazy', errors='silent')
def counter(out):
    i = 0
    while True:
        print("coroutine: %d" % (i,), file=out)
        produce(None)
        i += 1

def run_counter(count, out):
    gen = counter(out)
    try:
        for i in range(count):
            print("main: %d" % (i,), file=out)
            gen.has_more()
            gen.take_next()
    finally:
        gen.close()


# 2. starts eagerly, so that the first value is ready right away, and
# returns a message when it reaches its limit
@computation(initial='eager', final='lazy', returns='value')
def limited_counter(limit, out):
    for i in range(limit):
        print("coroutine: generated: %d" % (i,), file=out)
        produce(i)
    print("coroutine: ending", file=out)
    return "maximum value reached"

def run_message(count, out):
    with limited_counter(count, out) as gen:
        while gen.has_more():
            print("main: got from coroutine: %d" % (gen.take_next(),),
                  file=out)
        print("main: coroutine ended: %s" % (gen.take_result(),), file=out)


# 3. the generic form: a generator function; exceptions are captured
# and re-raised at the next pull
@computation
def generic_counter(limit, out):
    for i in range(limit):
        print("coroutine: generated: %d" % (i,), file=out)
        yield i

def run_generic(count, out):
    with generic_counter(count, out) as gen:
        for value in gen:
            print("main: got from coroutine: %d" % (value,), file=out)


RUNNERS = {
    'counter': run_counter,
    'message': run_message,
    'generic': run_generic,
}


def main(argv=None, out=None):
    if argv is None:
        argv = sys.argv[1:]
    if out is None:
        out = sys.stdout
    config = Config(demo_optiondescription)
    parser = to_optparse(config)
    options, args = parser.parse_args(argv)
    if args:
        parser.error("unexpected arguments: %s" % (' '.join(args),))
    if config.log:
        enable_logging()
    if config.variant == 'all':
        variants = VARIANTS
    else:
        variants = [config.variant]
    for name in variants:
        print("<--- %s --->" % (name,), file=out)
        RUNNERS[name](config.count, out)
    return 0


if __name__ == '__main__':
    sys.exit(main())
