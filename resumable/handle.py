import py

from resumable import policy
from resumable.control import ControlBlock, COMPLETED, RUNNING
from resumable.error import LifecycleViolation
from resumable.tool.ansi_print import LOG_NAME

log = py.log.Producer(LOG_NAME)


class ResumableHandle(object):
    """Opaque reference to the ControlBlock of one computation.

    The handle can advance the computation by one step, tell whether it
    has completed, and release its ControlBlock.  Two questions are kept
    apart on purpose:

      is_valid()     -- is there still a ControlBlock behind this handle?
      is_complete()  -- has the computation run past its end?

    With an eager final suspension the ControlBlock is torn down as soon
    as the body finishes, so a handle can be complete and invalid at the
    same time.

    Releasing twice is an error; making sure it happens exactly once is
    the job of the owner (see resumable.generator.Generator).
    """

    def __init__(self, body, args, kwds, config):
        self._control = ControlBlock(body, args, kwds, config)
        self._config = config
        self._completed = False
        self._orphan_error = None    # captured error of a torn-down block
        log.event('%s created (initial=%s, final=%s)' % (
            self._control.name, config.initial, config.final))
        if not policy.suspends(config.initial):
            try:
                self.advance()
            except BaseException:
                if self._control is not None:
                    self.release()
                raise

    def __repr__(self):
        if self._control is not None:
            state = self._control.status
        elif self._completed:
            state = 'completed, released'
        else:
            state = 'released'
        return '<ResumableHandle %s>' % (state,)

    def _getcontrol(self):
        control = self._control
        if control is None:
            if self._completed:
                raise LifecycleViolation("the state of this computation was "
                                         "torn down after it completed")
            raise LifecycleViolation("the state of this computation has "
                                     "been released")
        return control

    def advance(self):
        """Resume the computation until it reaches its next suspension
        point or completes."""
        if self._completed:
            raise LifecycleViolation("cannot resume a completed computation")
        control = self._getcontrol()
        if control.status == RUNNING:
            raise LifecycleViolation("%s is already executing" %
                                     (control.name,))
        try:
            control.resume()
        finally:
            if control.status == COMPLETED:
                self._completed = True
                if not policy.suspends(self._config.final):
                    self._teardown()

    def _teardown(self):
        control, self._control = self._control, None
        self._orphan_error = control.take_error()
        control.release()

    def is_complete(self):
        return self._completed

    def is_valid(self):
        return self._control is not None

    @property
    def produced_value(self):
        return self._getcontrol().produced_value

    def take_completion_value(self):
        if not self._completed:
            raise LifecycleViolation("the computation has not completed yet")
        return self._getcontrol().take_completion_value()

    def take_error(self):
        "Return the captured error, if any; a second call returns None."
        if self._control is None:
            error, self._orphan_error = self._orphan_error, None
            return error
        return self._control.take_error()

    def release(self):
        if self._control is None:
            raise LifecycleViolation("the state of this computation was "
                                     "already released")
        control = self._control
        if control.status == RUNNING:
            raise LifecycleViolation("cannot release %s while it is "
                                     "executing" % (control.name,))
        self._control = None
        control.release()
