"""Reading-time statistics dashboard"""

__version__ = "0.1.0"
