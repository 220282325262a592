"""A simulated automated external defibrillator driven by a virtual clock."""

__version__ = "0.1.0"