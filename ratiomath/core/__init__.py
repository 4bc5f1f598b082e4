"""
Core exact arithmetic, precision context, and serialization contracts.

This module contains the foundational building blocks of ratiomath:
Fraction, DecimalValue, elementary functions, and the digit budget.
"""
