"""Relief mission candidate ranking engine."""

__version__ = "0.1.0"
