"""
DevOps Entropy

Architecture graph simulation: technical debt contagion, health decay and
operating cost over discrete ticks.
"""

__version__ = "0.1.0"
