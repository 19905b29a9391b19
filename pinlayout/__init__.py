"""
pinlayout - Persistent editor layouts driven by note tags
"""

__version__ = "0.3.0"
