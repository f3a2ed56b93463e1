import gc

import pytest

from resumable.tool import leakfinder


def pytest_report_header():
    return "pytest-%s from %s" % (pytest.__version__, pytest.__file__)


def pytest_configure(config):
    config.pluginmanager.register(LeakFinder())


class LeakFinder:
    """Check that the control blocks allocated during a test are all
    released by the end of it.

    A test function can opt out by setting 'dont_track_allocations'.
    """
    @pytest.hookimpl(trylast=True)
    def pytest_runtest_setup(self, item):
        if not isinstance(item, pytest.Function):
            return
        if not getattr(item.obj, 'dont_track_allocations', False):
            leakfinder.start_tracking_allocations()

    @pytest.hookimpl(hookwrapper=True)
    def pytest_runtest_call(self, item):
        outcome = yield
        if not isinstance(item, pytest.Function):
            return
        item._success = outcome.excinfo is None

    @pytest.hookimpl(trylast=True)
    def pytest_runtest_teardown(self, item):
        if not isinstance(item, pytest.Function):
            return
        if (not getattr(item.obj, 'dont_track_allocations', False)
            and leakfinder.TRACK_ALLOCATIONS):
            gc.collect()     # generators dropped in reference cycles
            item._resumable_leaks = leakfinder.stop_tracking_allocations(False)
        else:            # stop_tracking_allocations() already called
            item._resumable_leaks = None

        # check for leaks, but only if the test passed so far
        if getattr(item, '_success', False) and item._resumable_leaks:
            raise leakfinder.BlockMismatch(item._resumable_leaks)
