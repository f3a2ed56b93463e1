"""
The pull interface of a computation.

    @computation(returns='value')
    def counter(limit):
        for i in range(limit):
            produce(i)
        return "maximum value reached"

    gen = counter(3)
    while gen.has_more():
        print(gen.take_next())
    print(gen.take_result())
    gen.close()

Generator functions work too, with 'yield' in place of produce().
"""

import functools

from resumable import policy
from resumable.config.resumableoption import get_resumable_config
from resumable.error import LifecycleViolation
from resumable.handle import ResumableHandle


class Generator(object):
    """Owner of the ResumableHandle of one computation.

    The handle is advanced at most one step ahead of what the caller
    has consumed: 'pending' is true while a produced value is waiting
    to be taken.  Thanks to it, calling has_more() several times in a
    row does not skip any value.
    """
    _handle = None

    def __init__(self, body, args, kwds, config):
        self._handle = ResumableHandle(body, args, kwds, config)
        # with an eager start the body already ran up to its first
        # suspension point
        self._pending = not policy.suspends(config.initial)
        self._exhausted = False
        self.__name__ = getattr(body, '__name__', '<computation>')

    def __repr__(self):
        return '<Generator %s %r>' % (self.__name__, self._handle)

    def _gethandle(self):
        handle = self._handle
        if handle is None:
            raise LifecycleViolation("operation on a closed generator")
        return handle

    def _fill(self):
        handle = self._gethandle()
        if not self._pending:
            handle.advance()
            self._pending = True
        error = handle.take_error()
        if error is not None:
            raise error
        return handle

    def has_more(self):
        """Tell if there is a value to take, running the computation up
        to its next suspension point if needed.  Re-raises an exception
        captured from the body, once."""
        handle = self._fill()
        if handle.is_complete():
            self._exhausted = True
            return False
        return True

    def take_next(self):
        handle = self._fill()
        if handle.is_complete():
            raise LifecycleViolation("no value to take: the computation "
                                     "has completed")
        value = handle.produced_value
        self._pending = False
        return value

    def take_result(self):
        """Return the completion value.  Only allowed once has_more()
        has reported False, and only once."""
        if not self._exhausted:
            raise LifecycleViolation("the completion value can only be read "
                                     "after has_more() reported False")
        return self._gethandle().take_completion_value()

    def __iter__(self):
        return self

    def __next__(self):
        if not self.has_more():
            raise StopIteration
        return self.take_next()

    @property
    def closed(self):
        return self._handle is None

    def close(self):
        """Release the state of the computation.  A suspended body is
        unwound without running further code; closing twice is allowed."""
        handle = self._handle
        if handle is None:
            return
        if handle.is_valid():
            handle.release()
        self._handle = None

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def __del__(self):
        self.close()


class Computation(object):
    """A body together with its frozen configuration.  Calling it
    starts a new computation and returns its Generator."""

    def __init__(self, body, config):
        self.__func__ = body
        self.config = config
        functools.update_wrapper(self, body)

    def __get__(self, obj, type=None):
        if obj is None:
            return self
        return Computation(self.__func__.__get__(obj, type), self.config)

    def __call__(self, *args, **kwds):
        return Generator(self.__func__, args, kwds, self.config)

    def __repr__(self):
        return '<Computation %s %s>' % (self.__func__.__name__,
                                        dict(self.config))


def computation(func=None, config=None, **options):
    """Decorator turning a function into a resumable computation.

    The options are those of resumable.config.resumableoption:
    initial, final ('eager' or 'lazy'), returns ('void' or 'value')
    and errors ('captured' or 'silent').  Alternatively, pass a
    ready-made 'config'; it gets frozen.
    """
    if config is None:
        config = get_resumable_config(options)
    elif options:
        raise TypeError("give either 'config' or options, not both")
    config.freeze()

    def decorate(func):
        return Computation(func, config)
    if func is None:
        return decorate
    return decorate(func)
