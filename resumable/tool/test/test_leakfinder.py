from pytest import raises

from resumable.tool import leakfinder


class Block(object):
    pass


def test_start_stop():
    leakfinder.start_tracking_allocations()
    assert leakfinder.TRACK_ALLOCATIONS
    leakfinder.stop_tracking_allocations(True)
    assert not leakfinder.TRACK_ALLOCATIONS

def test_leak():
    leakfinder.start_tracking_allocations()
    b1 = Block()
    leakfinder.remember_allocation(b1)
    b2 = Block()
    leakfinder.remember_allocation(b2)
    leakfinder.remember_free(b1)
    excinfo = raises(leakfinder.BlockMismatch,
                     leakfinder.stop_tracking_allocations, True)
    assert list(excinfo.value.args[0]) == [b2]
    assert '1 control block(s) allocated at' in str(excinfo.value)
    assert not leakfinder.TRACK_ALLOCATIONS

def test_no_leak():
    leakfinder.start_tracking_allocations()
    b1 = Block()
    leakfinder.remember_allocation(b1)
    leakfinder.remember_free(b1)
    assert leakfinder.stop_tracking_allocations(True) == {}

def test_free_of_untracked_block():
    b1 = Block()
    leakfinder.remember_allocation(b1)     # not tracking: ignored
    leakfinder.start_tracking_allocations()
    leakfinder.remember_free(b1)
    assert leakfinder.stop_tracking_allocations(True) == {}

def test_nested():
    leakfinder.start_tracking_allocations()
    b1 = Block()
    leakfinder.remember_allocation(b1)
    prev = leakfinder.start_tracking_allocations()
    assert list(prev) == [b1]
    b2 = Block()
    leakfinder.remember_allocation(b2)
    leaks = leakfinder.stop_tracking_allocations(False, prev)
    assert list(leaks) == [b2]
    assert leakfinder.TRACK_ALLOCATIONS
    assert list(leakfinder.ALLOCATED) == [b1]
    leakfinder.remember_free(b1)
    leakfinder.stop_tracking_allocations(True)

for _test in [test_start_stop, test_leak, test_no_leak,
              test_free_of_untracked_block, test_nested]:
    _test.dont_track_allocations = True
del _test
