"""Execution of resolved activation orders."""

from .evaluator import Evaluator

__all__ = ["Evaluator"]
