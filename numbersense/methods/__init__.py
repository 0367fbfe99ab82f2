"""
Solving methods for addition and subtraction.

Each method decides whether it fits a problem, scores how well it fits, and
produces a worked solution. MethodSuitabilityScorer ranks them.
"""

from numbersense.methods.base import (
    ArithmeticProblem,
    Operator,
    Solution,
    SolutionStep,
    SolvingMethod,
    UnknownMethodError,
)
from numbersense.methods.column import ColumnMethod
from numbersense.methods.compensation import Compensation
from numbersense.methods.counting_on import CountingOn
from numbersense.methods.partitioning import Partitioning
from numbersense.methods.registry import MethodRegistry, build_default_registry
from numbersense.methods.rounding import RoundingTarget, near_round, rounding_target
from numbersense.methods.same_difference import SameDifference
from numbersense.methods.selector import (
    ComfortLevel,
    MethodCandidate,
    MethodComfort,
    MethodSuitabilityScorer,
)
from numbersense.methods.sequencing import Sequencing

__all__ = [
    "ArithmeticProblem",
    "ColumnMethod",
    "ComfortLevel",
    "Compensation",
    "CountingOn",
    "MethodCandidate",
    "MethodComfort",
    "MethodRegistry",
    "MethodSuitabilityScorer",
    "Operator",
    "Partitioning",
    "RoundingTarget",
    "SameDifference",
    "Sequencing",
    "Solution",
    "SolutionStep",
    "SolvingMethod",
    "UnknownMethodError",
    "build_default_registry",
    "near_round",
    "rounding_target",
]
