# src/bound_config/core/engine/__init__.py
"""
Mapping Engine e Bound Config Instances.
"""

from .binding import Binding, BoundConfig, binding_of, to_plain
from .engine import bind, bound_class, flush

__all__ = ["Binding", "BoundConfig", "bind", "binding_of", "bound_class", "flush", "to_plain"]
