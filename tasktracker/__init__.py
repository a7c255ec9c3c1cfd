"""Keep track of daily tasks and the time spent working on them."""

__version__ = "0.1.0"