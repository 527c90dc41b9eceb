"""
titan: an interactive Gemini client for the terminal.
"""

__version__ = "0.1.0"
