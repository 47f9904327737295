"""
histree.demos - Small applications built on the history engine
"""

__all__ = ["counter"]
