"""
User interaction: consent prompts.
"""

from .consent import ConsoleConsentUI

__all__ = ["ConsoleConsentUI"]
