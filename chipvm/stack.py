"""CHIP-8 stack operations."""

import jax.numpy as jnp
from chipvm.constants import INDEX_MASK
from chipvm.errors import StackUnderflow
from chipvm.state import StackState


def push(stack: StackState, address: jnp.ndarray) -> StackState:
    """Push address onto stack."""
    masked_address = jnp.asarray(address, dtype=jnp.uint16) & INDEX_MASK
    new_data = jnp.append(stack.data, masked_address[None])
    return stack.replace(data=new_data)


def pop(stack: StackState) -> tuple[StackState, jnp.ndarray]:
    """Pop address from stack."""
    if stack.depth == 0:
        raise StackUnderflow()
    popped_address = stack.data[-1]
    return stack.replace(data=stack.data[:-1]), popped_address
