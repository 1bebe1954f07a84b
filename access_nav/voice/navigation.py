"""Step-by-step spoken guidance along a generated route."""

from access_nav.models import RouteResult, RouteStep
from access_nav.voice.assistant import VoiceAssistant


class NavigationSession:
    """Walks a user through the steps of a RouteResult."""

    def __init__(self, result: RouteResult, destination_name: str, assistant: VoiceAssistant):
        self.result = result
        self.destination_name = destination_name
        self.assistant = assistant
        self.index = 0
        self.active = False
        self.arrived = False

    @property
    def current_step(self) -> RouteStep | None:
        if not self.result.steps:
            return None
        return self.result.steps[self.index]

    def start(self) -> None:
        self.index = 0
        self.active = True
        self.arrived = False
        first = self.current_step
        instruction = f" {first.instruction}" if first else ""
        self.assistant.speak(f"Starting navigation to {self.destination_name}.{instruction}")

    def advance(self) -> RouteStep | None:
        """Move to the next step and announce it. No-op while paused or after arrival."""
        if not self.active or self.arrived:
            return self.current_step

        if self.index >= len(self.result.steps) - 1:
            self.arrived = True
            self.active = False
            self.assistant.speak(f"You have arrived at your destination: {self.destination_name}")
            return self.current_step

        self.index += 1
        step = self.current_step
        self.assistant.speak(f"{step.instruction}. {step.distance}.")
        return step

    def toggle(self) -> bool:
        """Pause or resume; returns whether navigation is now active."""
        if self.arrived:
            return False
        self.active = not self.active
        self.assistant.speak("Navigation resumed" if self.active else "Navigation paused")
        return self.active

    def pause(self) -> None:
        if self.active:
            self.toggle()

    def resume(self) -> None:
        if not self.active:
            self.toggle()

    def register_commands(self) -> None:
        """Voice control for the session: next, pause, resume, repeat."""
        self.assistant.register_command("next", lambda _args: self.advance())
        self.assistant.register_command("pause navigation", lambda _args: self.pause())
        self.assistant.register_command("resume navigation", lambda _args: self.resume())
        self.assistant.register_command("repeat", lambda _args: self._repeat())

    def _repeat(self) -> None:
        step = self.current_step
        if step is not None:
            self.assistant.speak(step.instruction)
