"""
numbersense: adaptive mental arithmetic practice engine.

Tracks per-skill mastery, schedules reviews with SM-2, plans practice
sessions and ranks solving methods for addition and subtraction problems.
"""

__version__ = "1.0.0"
