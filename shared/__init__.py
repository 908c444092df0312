"""
Elfscope Shared Module
======================

Configuration, logging, and console utilities shared by the Elfscope
inspection engine and its command-line interface.
"""

from shared.config import ElfscopeConfig

__all__ = ["ElfscopeConfig"]
