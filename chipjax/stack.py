"""CHIP-8 call stack.

``push`` and ``pop`` run inside jitted handlers and never check bounds;
``check_push`` and ``check_pop`` run on the concrete stack first and raise.
"""

import jax.numpy as jnp
from chipjax.constants import ADDRESS_MASK, STACK_SIZE
from chipjax.errors import StackOverflowError, StackUnderflowError
from chipjax.state import StackState


def push(stack: StackState, address: jnp.ndarray) -> StackState:
    """Store a return address in the next free slot."""
    return stack.replace(
        data=stack.data.at[stack.pointer].set(address & ADDRESS_MASK),
        pointer=stack.pointer + 1,
    )


def pop(stack: StackState) -> tuple[StackState, jnp.ndarray]:
    """Release the top slot and return the address it held."""
    top = stack.pointer - 1
    return stack.replace(data=stack.data.at[top].set(0), pointer=top), stack.data[top]


def check_push(stack: StackState, address: int) -> None:
    if int(stack.pointer) >= STACK_SIZE:
        raise StackOverflowError(address)


def check_pop(stack: StackState, address: int) -> None:
    if int(stack.pointer) == 0:
        raise StackUnderflowError(address)
