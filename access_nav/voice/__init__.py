"""Voice commands and spoken navigation."""

from .assistant import VoiceAssistant, VoiceOptions, register_navigation_commands
from .navigation import NavigationSession

__all__ = ["VoiceAssistant", "VoiceOptions", "register_navigation_commands", "NavigationSession"]
