"""
ImageBot — Discord bot that answers ``!image <query>`` with an image URL.
"""

__version__ = "0.1.0"
