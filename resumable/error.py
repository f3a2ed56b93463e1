"""
Usage errors of the resumable package.

Errors raised by a computation body are never wrapped: they travel through
the pull interface unchanged.  The classes here signal that the *caller*
(or the body, for the completion contract) broke the lifecycle rules.
"""


class error(Exception):
    "Usage error of the resumable package."


class LifecycleViolation(error):
    """A computation was resumed, read or released at a point of its
    lifecycle where this is not allowed (e.g. resumed after completion or
    released twice).  This is a programming error and is never captured
    by the error policy of a computation."""


class MissingCompletionValue(LifecycleViolation):
    "A computation declared to return a value fell through without one."


class UnexpectedCompletionValue(LifecycleViolation):
    "A computation declared as returning nothing returned a value."
