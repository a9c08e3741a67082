"""Hockey Timer — countdown interval timer for hockey shifts."""

__version__ = "0.1.0"
