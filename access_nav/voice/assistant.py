"""Voice command handling for accessibility features.

Speech synthesis and recognition are platform concerns; the assistant only
receives recognized transcripts and hands text to an injected `speak`
callable.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

logger = logging.getLogger(__name__)

CommandCallback = Callable[[Optional[str]], None]
SpeakFn = Callable[[str, "VoiceOptions"], None]

WILDCARD = "*"
NOT_UNDERSTOOD = "I didn't understand that command. Please try again."


@dataclass
class VoiceOptions:
    rate: float = 1.0
    pitch: float = 1.0
    volume: float = 1.0
    voice: str = ""


class VoiceAssistant:
    """
    Matches spoken transcripts against a table of registered commands.

    Matching order: exact command, command followed by arguments, then a
    wildcard handler or a command contained anywhere in the transcript.
    """

    def __init__(self, speak: SpeakFn, options: VoiceOptions | None = None):
        self._speak = speak
        self.options = options or VoiceOptions()
        self.commands: dict[str, CommandCallback] = {}
        self.spoken: list[str] = []

    def set_options(self, **changes) -> None:
        for name, value in changes.items():
            if not hasattr(self.options, name):
                raise AttributeError(f"Unknown voice option: {name}")
            setattr(self.options, name, value)

    def speak(self, text: str) -> None:
        self.spoken.append(text)
        self._speak(text, self.options)

    def register_command(self, command: str, callback: CommandCallback) -> None:
        self.commands[command.lower()] = callback

    def unregister_command(self, command: str) -> None:
        self.commands.pop(command.lower(), None)

    def process_command(self, transcript: str) -> bool:
        """Dispatch a transcript; returns False when nothing matched."""
        transcript = transcript.lower().strip()
        logger.debug("Processing voice command: %s", transcript)

        callback = self.commands.get(transcript)
        if callback is not None:
            callback(None)
            return True

        for command, callback in self.commands.items():
            if transcript.startswith(command + " "):
                callback(transcript[len(command):].strip())
                return True

        for command, callback in self.commands.items():
            if command == WILDCARD:
                callback(transcript)
                return True
            if command in transcript:
                callback(None)
                return True

        self.speak(NOT_UNDERSTOOD)
        return False


def register_navigation_commands(
    assistant: VoiceAssistant,
    navigate: Callable[[str], None],
    search: Callable[[str], None],
    nearby: Callable[[], None] | None = None,
) -> None:
    """
    Install the standard planner commands.

    navigate receives a destination, search a place query; nearby lists
    accessible places around the user. Missing arguments are asked for by voice.
    """

    def with_argument(action: Callable[[str], None], prompt: str, announce: str | None = None) -> CommandCallback:
        def handler(argument: Optional[str]) -> None:
            if not argument:
                assistant.speak(prompt)
                return
            if announce:
                assistant.speak(announce.format(argument))
            action(argument)
        return handler

    assistant.register_command("search", with_argument(search, "What would you like to search for?", "Searching for {}"))
    assistant.register_command("find", with_argument(search, "What would you like to find?", "Searching for {}"))
    assistant.register_command(
        "navigate to",
        with_argument(navigate, "Where would you like to navigate to?", "Planning a route to {}"),
    )

    names = ["search", "find", "navigate to"]
    if nearby is not None:
        assistant.register_command("nearby places", lambda _args: nearby())
        assistant.register_command("what's nearby", lambda _args: nearby())
        names.append("nearby places")

    names.append("help")
    assistant.register_command("help", lambda _args: assistant.speak(
        "Available commands: " + ", ".join(names)
    ))
