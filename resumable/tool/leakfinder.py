"""
Bookkeeping of control block allocations, used by the test suite to check
that every computation state is released exactly once.
"""

import sys


class BlockMismatch(Exception):
    def __str__(self):
        dict = self.args[0]
        dict2 = {}
        for block, where in dict.items():
            dict2[where] = dict2.get(where, 0) + 1
        lines = ['{']
        for where, count in sorted(dict2.items()):
            lines.append('\t%d control block(s) allocated at %s' % (count,
                                                                    where))
        lines.append('}')
        return '\n'.join(lines)


TRACK_ALLOCATIONS = False
ALLOCATED = {}


def start_tracking_allocations():
    global TRACK_ALLOCATIONS
    if TRACK_ALLOCATIONS:
        result = ALLOCATED.copy()   # nested start
    else:
        result = None
    TRACK_ALLOCATIONS = True
    ALLOCATED.clear()
    return result


def stop_tracking_allocations(check, prev=None):
    global TRACK_ALLOCATIONS
    assert TRACK_ALLOCATIONS
    result = ALLOCATED.copy()
    ALLOCATED.clear()
    if prev is None:
        TRACK_ALLOCATIONS = False
    else:
        ALLOCATED.update(prev)
    if check and result:
        raise BlockMismatch(result)
    return result


def remember_allocation(block, framedepth=2):
    if TRACK_ALLOCATIONS:
        try:
            frame = sys._getframe(framedepth)
        except ValueError:      # call stack is not that deep
            where = '?'
        else:
            where = '%s:%d' % (frame.f_code.co_filename, frame.f_lineno)
        ALLOCATED[block] = where


def remember_free(block):
    if TRACK_ALLOCATIONS:
        # blocks allocated before tracking started are not reported
        ALLOCATED.pop(block, None)
