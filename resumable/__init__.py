"""
Suspendable value-producing computations.

A computation is a function that can pause itself in the middle of its
execution, keep all of its local state, and be resumed later by a caller
that pulls the values it produces one by one.
"""

from resumable.control import produce
from resumable.error import (error, LifecycleViolation,
    MissingCompletionValue, UnexpectedCompletionValue)
from resumable.generator import Generator, computation
from resumable.policy import EAGER, LAZY, CAPTURED, SILENT, VOID, VALUE

__version__ = '0.3.0'
