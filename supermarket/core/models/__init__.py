from .outcome import ErrorKind, Outcome, Problem, problem

__all__ = ["ErrorKind", "Outcome", "Problem", "problem"]
