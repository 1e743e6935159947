"""Ephemeral FrodoKEM: learning-with-errors key encapsulation."""

__version__ = "0.1.0"
__all__ = ["params", "packing", "noise", "generation", "arith", "kem"]