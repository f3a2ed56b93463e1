import io

from pytest import raises

from resumable import demo
from resumable.tool.ansi_print import disable_logging


def run(*argv):
    out = io.StringIO()
    assert demo.main(list(argv), out=out) == 0
    return out.getvalue().splitlines()


def test_counter():
    assert run('--variant=counter') == [
        "<--- counter --->",
        "main: 0",
        "coroutine: 0",
        "main: 1",
        "coroutine: 1",
        "main: 2",
        "coroutine: 2",
    ]

def test_message():
    assert run('--variant', 'message') == [
        "<--- message --->",
        "coroutine: generated: 0",
        "main: got from coroutine: 0",
        "coroutine: generated: 1",
        "main: got from coroutine: 1",
        "coroutine: generated: 2",
        "main: got from coroutine: 2",
        "coroutine: ending",
        "main: coroutine ended: maximum value reached",
    ]

def test_generic_count():
    assert run('-v', 'generic', '-n', '2') == [
        "<--- generic --->",
        "coroutine: generated: 0",
        "main: got from coroutine: 0",
        "coroutine: generated: 1",
        "main: got from coroutine: 1",
    ]

def test_all():
    lines = run()
    assert [line for line in lines if line.startswith('<---')] == [
        "<--- counter --->", "<--- message --->", "<--- generic --->"]

def test_zero_count():
    assert run('--variant=message', '--count=0') == [
        "<--- message --->",
        "coroutine: ending",
        "main: coroutine ended: maximum value reached",
    ]

def test_log(capsys):
    try:
        run('--variant=generic', '--count=1', '--log')
    finally:
        disable_logging()
    err = capsys.readouterr().err
    assert "[resumable] generic_counter created (initial=lazy, final=lazy)" in err
    assert "[resumable:release] generic_counter" in err

def test_bad_arguments(capsys):
    raises(SystemExit, demo.main, ['--variant=nonsense'])
    raises(SystemExit, demo.main, ['extra'])
