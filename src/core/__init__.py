"""
Core domain models, mathematical primitives, and contracts.

This module contains the foundational building blocks of the quote graph that
are independent of the command loop and display layer.
"""
