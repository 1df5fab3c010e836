"""C-style string, formatting and sorting routines, a simulated serial terminal and a device table."""

__version__ = "0.1.0"
__all__ = ["cstring", "ctype", "rand", "qsort", "printf", "scanf", "tty", "devices"]