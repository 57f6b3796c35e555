"""Problems reported by the compiler stages."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CompilerStage(Enum):
    """The stage that found a compiler problem."""

    SPECIALIZE_TYPES = "specialize_types"
    LIFT_FUNCTIONS = "lift_functions"
    SOLVE_FUNCTIONS = "solve_functions"
    SPECIALIZE_FUNCTIONS = "specialize_functions"
    LOWER_IR = "lower_ir"
    REFERENCE_COUNT = "reference_count"


@dataclass(frozen=True)
class CompilerProblem:
    """An internal compiler problem from one stage."""

    stage: CompilerStage
    message: str = ""

    def __str__(self) -> str:
        if self.message:
            return f"{self.stage.value}: {self.message}"
        return self.stage.value


@dataclass(frozen=True)
class Problem:
    """A problem to report."""

    compiler_problem: CompilerProblem

    def __str__(self) -> str:
        return f"compiler problem in {self.compiler_problem}"