"""
UX-Kit - slash-command toolkit for UX research workflows

Parses `/command --flag=value` strings from an IDE or terminal, validates them
against the research and study command catalog, and returns uniform response
records.
"""

__version__ = "1.0.0"
__author__ = "UX-Kit Contributors"
__description__ = "Slash-command toolkit for UX research workflows"

from .slash import SlashCommandHandler, create_handler

__all__ = ["SlashCommandHandler", "create_handler"]
