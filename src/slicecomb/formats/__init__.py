"""Concrete formats implemented with the engine.

Each format module is a grammar written purely against the leaf-parser
contract; none of them adds anything to the engine itself.
"""

from . import msgpack

__all__ = ["msgpack"]
