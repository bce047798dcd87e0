"""
Build PhpStorm autocomplete plugins from Phalcon IDE stub releases.
"""

__version__ = "0.1.0"
