"""VendFA - a vending machine modelled as a deterministic finite automaton."""

__version__ = "0.1.0"
