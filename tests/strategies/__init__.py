"""Hypothesis strategies for slicecomb property-based testing.

Strategies are organized by domain:

- cursors: byte inputs and cursors positioned inside them
- msgpack: values the MessagePack grammar can round-trip

Usage:
    from tests.strategies import byte_inputs, cursors_in
    from tests.strategies.msgpack import msgpack_values

Event-Emitting Strategies:
    These strategies emit hypothesis.event() calls for coverage feedback:
    - cursors_in: cursor position class (start|middle|end)
    - msgpack_values: top-level value kind
"""

from .cursors import byte_inputs, cursors_in, offsets_sequences
from .msgpack import msgpack_scalars, msgpack_values

__all__ = [
    "byte_inputs",
    "cursors_in",
    "msgpack_scalars",
    "msgpack_values",
    "offsets_sequences",
]
