"""Loot generator core. Pure Python, no I/O."""
