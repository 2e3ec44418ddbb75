"""umpctl: run Update/Model/Perform programs on a generic effect loop."""

__version__ = "0.1.0"
