"""
Utility modules organized by domain.

Submodules:
- platform: Platform detection, permission checks, settings navigation
- interaction: Consent prompts
- logging: Logging configuration
- ui: Shared console and theme
"""
