# planforge/__init__.py
"""
planforge: planning intelligence pipeline.

Turns a normalized project summary into a build specification: researched
features and stack, agent team, tool recommendations, ADRs, diagrams, cost
estimate, dependency risks and a quality report.
"""

__version__ = "0.3.0"
