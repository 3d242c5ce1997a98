"""
rcc Command-Line Interface
==========================

Provides the `rcc` command, a Click-based front end to the Tiny-C
compiler.
"""

__all__ = ["rcc"]
