"""Dependency graph model."""

from .model import DependencyGraph, CyclicDependencyError

__all__ = ["DependencyGraph", "CyclicDependencyError"]
