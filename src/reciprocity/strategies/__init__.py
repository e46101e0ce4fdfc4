"""Strategy registry and built-in strategies.

Usage:
    from reciprocity.strategies import build_default_registry

    registry = build_default_registry(random.Random(42))
    move = registry.get("tit-for-tat").decide(history)
"""

from reciprocity.strategies.builtin import (
    always_cooperate,
    always_defect,
    build_default_registry,
    detective,
    grudger,
    make_random_strategy,
    pavlov,
    register_builtin_strategies,
    tit_for_tat,
)
from reciprocity.strategies.registry import DecisionFunction, Strategy, StrategyRegistry

__all__ = [
    # Registry
    "Strategy",
    "StrategyRegistry",
    "DecisionFunction",
    "build_default_registry",
    "register_builtin_strategies",
    # Built-in decision functions
    "always_cooperate",
    "always_defect",
    "tit_for_tat",
    "grudger",
    "detective",
    "pavlov",
    "make_random_strategy",
]
