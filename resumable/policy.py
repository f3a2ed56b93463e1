"""
Policy names used to configure a computation.

A suspension policy is consulted at exactly two fixed points of each
computation: right after it has been created (the initial suspension)
and right after its body finished (the final suspension).
"""

# suspension policies
EAGER = 'eager'     # do not pause, continue immediately
LAZY = 'lazy'       # pause

SUSPENSION_POLICIES = [EAGER, LAZY]

# what happens to an exception escaping the body
CAPTURED = 'captured'
SILENT = 'silent'

ERROR_POLICIES = [CAPTURED, SILENT]

# completion contract
VOID = 'void'
VALUE = 'value'

COMPLETION_CONTRACTS = [VOID, VALUE]


def suspends(policy):
    "Tell if a suspension point configured with 'policy' actually pauses."
    if policy == LAZY:
        return True
    if policy == EAGER:
        return False
    raise ValueError('unknown suspension policy %r' % (policy,))
