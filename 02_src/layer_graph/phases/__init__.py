"""Generation phases, in the order they run."""

from .forward import ForwardSkip1Phase, ForwardSkip2Phase
from .lateral import LateralPhase
from .loop import LoopPhase
from .tree import LayerTreePhase
from .validation import ValidationPhase

__all__ = [
    "LayerTreePhase",
    "LoopPhase",
    "LateralPhase",
    "ForwardSkip1Phase",
    "ForwardSkip2Phase",
    "ValidationPhase",
]
