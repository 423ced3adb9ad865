"""
agendaslots - publish appointment slots and resolve what is bookable per date.
"""

__version__ = "0.1.0"
