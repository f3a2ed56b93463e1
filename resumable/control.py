"""
The control block of a computation.

A ControlBlock is the record paired one-to-one with a running
computation.  It holds the last produced value, the completion value,
the captured error, the status, and the saved resumption point of the
body.  The resumption point is a "frame" object of one of two kinds:

  * GreenletFrame runs a plain function in its own greenlet.  The body
    hands out values by calling produce(value) from any depth of nested
    calls; each call switches back to the greenlet that resumed it.

  * GeneratorFrame drives a native generator function.  Here the
    'yield' statement plays the role of produce().

Nothing outside this module ever sees a frame.
"""

import inspect

import py
from greenlet import greenlet, getcurrent

from resumable import policy
from resumable.error import (LifecycleViolation, MissingCompletionValue,
    UnexpectedCompletionValue)
from resumable.tool import leakfinder
from resumable.tool.ansi_print import LOG_NAME

log = py.log.Producer(LOG_NAME)

# status of a ControlBlock
CREATED = 'created'
SUSPENDED = 'suspended'
RUNNING = 'running'
COMPLETED = 'completed'

NOVALUE = object()


class ControlBlock(object):

    def __init__(self, body, args, kwds, config):
        self.config = config
        self.name = getattr(body, '__name__', '<computation>')
        self.status = CREATED
        self._produced_value = NOVALUE
        self._completion_value = NOVALUE
        self.captured_error = None
        self.releasing = False
        if inspect.isgeneratorfunction(body):
            self.frame = GeneratorFrame(self, body, args, kwds)
        else:
            self.frame = GreenletFrame(self, body, args, kwds)
        leakfinder.remember_allocation(self, framedepth=5)

    def __repr__(self):
        return '<ControlBlock %s %s>' % (self.name, self.status)

    # ____________________________________________________________
    # the caller side

    def resume(self):
        """Run the body until its next suspension point or its end.
        Any exception that gets out of here has finished the body."""
        assert self.status in (CREATED, SUSPENDED), self.status
        self._produced_value = NOVALUE
        self.status = RUNNING
        try:
            self.frame.switch()
        except BaseException:
            self.status = COMPLETED
            raise
        assert self.status != RUNNING, "body left without suspending"

    @property
    def produced_value(self):
        if self.status != SUSPENDED or self._produced_value is NOVALUE:
            raise LifecycleViolation("%s has no produced value to read "
                                     "(status: %s)" % (self.name, self.status))
        return self._produced_value

    def take_completion_value(self):
        if self.status != COMPLETED:
            raise LifecycleViolation("%s has not completed yet" % (self.name,))
        if self.config.returns != policy.VALUE:
            raise LifecycleViolation("%s does not return a value" %
                                     (self.name,))
        value = self._completion_value
        if value is NOVALUE:
            raise LifecycleViolation("the completion value of %s is not "
                                     "available (already taken, or the body "
                                     "raised)" % (self.name,))
        self._completion_value = NOVALUE
        return value

    def take_error(self):
        error, self.captured_error = self.captured_error, None
        return error

    def release(self):
        if self.status == RUNNING:
            raise LifecycleViolation("cannot release %s while it is "
                                     "executing" % (self.name,))
        self.releasing = True
        try:
            if self.status == SUSPENDED:
                self.status = RUNNING
                self.frame.unwind()
        finally:
            self.frame = None
            self.status = COMPLETED
            self._produced_value = NOVALUE
            leakfinder.remember_free(self)
        log.release(self.name)

    # ____________________________________________________________
    # the body side

    def produce(self, value):
        if self.status != RUNNING:
            raise LifecycleViolation("%s cannot produce a value while %s" %
                                     (self.name, self.status))
        self._produced_value = value
        self.status = SUSPENDED
        self.frame.pause()

    def complete(self, result):
        self.status = COMPLETED
        self._produced_value = NOVALUE
        returns = self.config.returns
        if returns == policy.VALUE:
            if result is None:
                raise MissingCompletionValue(
                    "%s is declared to return a value but finished "
                    "without one" % (self.name,))
            self._completion_value = result
        elif result is not None:
            raise UnexpectedCompletionValue(
                "%s is declared to return nothing but returned %r" %
                (self.name, result))
        log.event('%s completed' % (self.name,))

    def capture_unhandled_error(self, e):
        self.status = COMPLETED
        self._produced_value = NOVALUE
        if self.releasing:
            # release() never raises what the body does while unwinding
            log.WARNING('%s: dropped %s raised while being released: %s'
                        % (self.name, e.__class__.__name__, e))
        elif self.config.errors == policy.SILENT:
            log.WARNING('%s: dropped %s: %s' % (self.name,
                                                e.__class__.__name__, e))
        else:
            self.captured_error = e
            log.info('%s: captured %s' % (self.name, e.__class__.__name__))


def produce(value):
    """Hand 'value' to the caller of the running computation and pause
    until the caller asks for the next one."""
    control = getattr(getcurrent(), 'control', None)
    if control is None:
        raise LifecycleViolation("produce() called outside of a "
                                 "computation body")
    if isinstance(control.frame, GeneratorFrame):
        raise LifecycleViolation("%s is a generator function: it hands out "
                                 "values with 'yield', not produce()" %
                                 (control.name,))
    control.produce(value)


# ____________________________________________________________
# Resumption points


class bodylet(greenlet):
    "The greenlet running a plain function body."
    control = None


class GreenletFrame(object):

    def __init__(self, control, body, args, kwds):
        self.control = control
        self.body = body
        self.args = args
        self.kwds = kwds
        self.greenlet = bodylet(self._run)
        self.greenlet.control = control

    def _run(self):
        control = self.control
        body, args, kwds = self.body, self.args, self.kwds
        self.body = self.args = self.kwds = None
        try:
            result = body(*args, **kwds)
        except LifecycleViolation:
            raise
        except StopIteration as e:
            # re-raised as is, it would end the caller's iteration
            error = RuntimeError("%s raised StopIteration" % (control.name,))
            error.__cause__ = e
            control.capture_unhandled_error(error)
        except Exception as e:
            control.capture_unhandled_error(e)
        else:
            control.complete(result)

    def switch(self):
        self.greenlet.parent = getcurrent()
        self.greenlet.switch()

    def pause(self):
        self.greenlet.parent.switch()

    def unwind(self):
        g = self.greenlet
        if not g:
            return     # never started, or already dead
        g.parent = getcurrent()
        g.throw()      # GreenletExit at the suspension point
        if not g.dead:
            raise LifecycleViolation("%s kept running after being released"
                                     % (self.control.name,))


class GeneratorFrame(object):

    def __init__(self, control, body, args, kwds):
        self.control = control
        self.generator = body(*args, **kwds)

    def _within(self, method, *args):
        # while the generator runs, produce() in the current greenlet
        # finds this block, not the plain-function body around it
        current = getcurrent()
        outer = getattr(current, 'control', None)
        current.control = self.control
        try:
            return method(*args)
        finally:
            current.control = outer

    def switch(self):
        control = self.control
        try:
            value = self._within(self.generator.send, None)
        except StopIteration as e:
            control.complete(e.value)
        except LifecycleViolation:
            raise
        except Exception as e:
            control.capture_unhandled_error(e)
        else:
            control.produce(value)

    def pause(self):
        pass      # the generator is already suspended at its 'yield'

    def unwind(self):
        try:
            self._within(self.generator.close)
        except LifecycleViolation:
            raise
        except Exception as e:
            state = inspect.getgeneratorstate(self.generator)
            if state == inspect.GEN_SUSPENDED:
                # it reached a 'yield' again instead of finishing
                raise LifecycleViolation("%s kept running after being "
                                         "released" % (self.control.name,))
            self.control.capture_unhandled_error(e)
