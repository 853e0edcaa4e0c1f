"""Test configuration and fixtures for CHIP-8 emulator tests."""

import pytest
import jax.numpy as jnp
from chipvm import create_state, decode, execute, Chip8, Quirks


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state()


@pytest.fixture
def modern_quirks():
    """Quirks of modern interpreters."""
    return Quirks.modern()


@pytest.fixture
def legacy_quirks():
    """Quirks of the original COSMAC VIP interpreter."""
    return Quirks.legacy()


@pytest.fixture
def machine():
    """Provide a fresh machine controller with default quirks."""
    return Chip8()


def run(state, word, quirks=Quirks()):
    """Decode and execute a raw instruction word."""
    return execute(state, decode(word), quirks)


def set_registers(state, **registers):
    """Helper to set registers by name, e.g. ``set_registers(state, V1=0x10)``."""
    V = state.V
    for name, value in registers.items():
        V = V.at[int(name[1:], 16)].set(value)
    return state.replace(V=V)


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )
