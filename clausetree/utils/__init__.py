# Utils module for the clause-tree engine
from .timing import Timer, PhaseTimer

__all__ = [
    'Timer',
    'PhaseTimer'
]
