"""
py-terrain: procedural heightmap synthesis and shaping.
"""

__version__ = "0.1.0"
