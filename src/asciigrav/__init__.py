"""
Real-time N-body gravity simulation rendered as ASCII art in a terminal.
"""

__version__ = "0.1.0"
