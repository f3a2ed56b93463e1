"""
A color print for the lifecycle logs of the resumable package.
"""

import sys

import py
from py.io import ansi_print


class AnsiLog:
    KW_TO_COLOR = {
        # color supress
        'red': ((31,), True),
        'bold': ((1,), True),
        'WARNING': ((31,), False),
        'event': ((1,), True),
        'ERROR': ((1, 31), False),
        'info': ((35,), False),
        'release': ((34,), False),
    }

    def __init__(self, kw_to_color={}, file=None):
        self.kw_to_color = self.KW_TO_COLOR.copy()
        self.kw_to_color.update(kw_to_color)
        self.file = file
        self.isatty = getattr(sys.stderr, 'isatty', lambda: False)

    def __call__(self, msg):
        keywords = []
        esc = []
        for kw in msg.keywords:
            color, supress = self.kw_to_color.get(kw, (None, False))
            if color:
                esc.extend(color)
            if not supress:
                keywords.append(kw)
        if not self.isatty():
            esc = []
        esc = tuple(esc)
        for line in msg.content().splitlines():
            ansi_print("[%s] %s" % (":".join(keywords), line), esc,
                       file=self.file)

ansi_log = AnsiLog()

LOG_NAME = "resumable"


def enable_logging(consumer=ansi_log):
    "Send the lifecycle messages of all computations to 'consumer'."
    py.log.setconsumer(LOG_NAME, consumer)


def disable_logging():
    py.log.setconsumer(LOG_NAME, None)

# silent unless somebody asks for the messages
disable_logging()
