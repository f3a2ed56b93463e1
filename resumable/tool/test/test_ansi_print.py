import io

import py

from resumable.tool.ansi_print import (AnsiLog, LOG_NAME, enable_logging,
    disable_logging)


def log_into(consumer, name='resumabletest'):
    py.log.setconsumer(name, consumer)
    return py.log.Producer(name)


def test_keywords():
    f = io.StringIO()
    log = log_into(AnsiLog(file=f))
    log.info("hello")
    log.event("something happened")
    log.WARNING("careful")
    log("plain")
    assert f.getvalue().splitlines() == [
        "[resumabletest:info] hello",
        "[resumabletest] something happened",
        "[resumabletest:WARNING] careful",
        "[resumabletest] plain",
    ]

def test_multiline():
    f = io.StringIO()
    log = log_into(AnsiLog(file=f))
    log.info("one\ntwo")
    assert f.getvalue() == "[resumabletest:info] one\n[resumabletest:info] two\n"

def test_custom_colors():
    f = io.StringIO()
    log = log_into(AnsiLog({'quiet': ((32,), True)}, file=f))
    log.quiet("shh")
    assert f.getvalue() == "[resumabletest] shh\n"

def test_enable_disable():
    messages = []
    enable_logging(messages.append)
    try:
        py.log.Producer(LOG_NAME).info("x")
    finally:
        disable_logging()
    py.log.Producer(LOG_NAME).info("y")
    assert [msg.content() for msg in messages] == ["x"]
    assert messages[0].keywords == (LOG_NAME, 'info')
