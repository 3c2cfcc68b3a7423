"""featureflow: simulate how a context flows through a graph of features."""

__version__ = "0.1.0"
