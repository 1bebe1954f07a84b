"""Command line entry point for the accessible route planner.

Usage:
    python main.py                                        # Interactive mode
    python main.py "from 13.04,80.23 to 13.05,80.22"      # Single query mode
    python main.py --seed 7 --gpx route.gpx "Home to Library by wheelchair"
    python main.py --voice --near 13.04,80.23             # Voice commands
    python main.py --near "Marina Beach" --search cafe    # Place search
    python main.py --near 13.04,80.23 --nearby --feature Ramp
"""

import argparse
import asyncio
import sys
from functools import partial

from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.prompt import Prompt

from access_nav.config import settings
from access_nav.models import RouteRequest, UserPreferences
from access_nav.pipeline import (
    PlaceSearchResult,
    RoutePlanningPipeline,
    RoutePlanResult,
    find_nearby,
    find_places,
    parse_route_request,
)
from access_nav.pipeline.place_search import NEARBY_MAX_DISTANCE_KM
from access_nav.tools.export import (
    create_gpx_track,
    default_gpx_path,
    openstreetmap_directions_url,
    save_gpx_file,
)
from access_nav.utils.log import configure_logging
from access_nav.voice import NavigationSession, VoiceAssistant, VoiceOptions, register_navigation_commands


console = Console()

EXAMPLES = (
    "  • 'from 13.04,80.23 to 13.05,80.22'\n"
    "  • 'Chennai Central to Marina Beach by wheelchair'\n"
    "  • 'from Home to Library, fewest steps, seed 7'"
)

ROUTE_TYPES = {
    "most-accessible": "mostAccessible",
    "fewest-steps": "fewestSteps",
}


def console_speak(text: str, options: VoiceOptions) -> None:
    console.print(f"[magenta]🔊 {text}[/magenta]")


def preferences_from_args(args: argparse.Namespace) -> UserPreferences | None:
    """Preferences given on the command line, or None if there are none."""
    if not (args.mobility_aid or args.visual_needs or args.route_type):
        return None
    return UserPreferences(
        mobility_aid=args.mobility_aid,
        visual_needs=args.visual_needs,
        preferred_route_type=ROUTE_TYPES.get(args.route_type),
    )


def apply_options(request: RouteRequest, args: argparse.Namespace) -> RouteRequest:
    """Command line options win over what the request text says."""
    updates = {}
    if args.seed is not None:
        updates["seed"] = args.seed
    preferences = preferences_from_args(args)
    if preferences is not None:
        updates["profile"] = preferences.to_profile()
    return request.model_copy(update=updates)


def build_request(user_input: str, args: argparse.Namespace) -> RouteRequest | None:
    request = parse_route_request(user_input)
    if request is None:
        return None
    return apply_options(request, args)


async def run_route(request: RouteRequest, args: argparse.Namespace) -> RoutePlanResult:
    """Plan a route, print it and optionally start voice guidance."""
    console.print(f"[green]✓[/green] Route: {request.origin} → {request.destination}")
    console.print(f"[green]✓[/green] Profile: {request.profile.value}\n")

    pipeline = RoutePlanningPipeline(show_progress=not args.no_progress)
    result = await pipeline.execute(request)

    show_result(result, args.gpx)
    if args.voice and result.success:
        guide(result)
    return result


async def plan_route(user_input: str, args: argparse.Namespace) -> RoutePlanResult | None:
    """Parse a request and run the pipeline; None if the request is not understood."""
    request = build_request(user_input, args)
    if request is None:
        console.print(
            "❌ I couldn't understand your route request. Please try something like:\n" + EXAMPLES
        )
        return None
    return await run_route(request, args)


async def run_search(query: str, args: argparse.Namespace) -> PlaceSearchResult | None:
    if not args.near:
        console.print("[red]Searching needs your location: pass --near LAT,LNG or a place name[/red]")
        return None
    result = await find_places(query, args.near, place_type=args.type, features=args.feature)
    console.print(Markdown(result.format_summary()))
    return result


async def run_nearby(args: argparse.Namespace) -> PlaceSearchResult | None:
    if not args.near:
        console.print("[red]Listing nearby places needs your location: pass --near LAT,LNG or a place name[/red]")
        return None
    result = await find_nearby(args.near, max_distance_km=args.max_km, place_type=args.type, features=args.feature)
    console.print(Markdown(result.format_summary()))
    return result


def show_result(result: RoutePlanResult, gpx_path: str | None = None) -> None:
    console.print()
    console.print(Markdown(result.format_summary()))

    if not result.success:
        return

    console.print(f"\n[dim]Map: {openstreetmap_directions_url(result.route)}[/dim]")

    if gpx_path is not None:
        path = gpx_path or default_gpx_path(settings.output_dir)
        gpx = create_gpx_track(
            result.route,
            name=f"{result.origin_name} to {result.destination_name}",
            places=result.places,
        )
        saved = save_gpx_file(gpx, path)
        console.print(f"[green]✓[/green] GPX saved to {saved}")


def guide(result: RoutePlanResult) -> None:
    """Spoken, step-by-step guidance driven by typed commands."""
    assistant = VoiceAssistant(console_speak)
    session = NavigationSession(result.route, result.destination_name, assistant)
    session.register_commands()
    assistant.register_command("help", lambda _args: assistant.speak(
        "Say next, repeat, pause navigation, resume navigation or stop"
    ))

    session.start()
    while not session.arrived:
        command = Prompt.ask("[bold green]Command[/bold green]", default="next")
        if command.lower().strip() in ["stop", "quit", "exit", "q"]:
            assistant.speak("Exiting navigation")
            break
        assistant.process_command(command)


def voice_commands(args: argparse.Namespace, pending: list) -> VoiceAssistant:
    """
    Assistant for the interactive prompt.

    Commands queue their work in `pending` as zero-argument coroutine
    functions; the prompt loop awaits them after each transcript.
    """
    assistant = VoiceAssistant(console_speak)

    def navigate(destination: str) -> None:
        if not args.near:
            assistant.speak("I need your starting location. Restart with --near to navigate.")
            return
        request = apply_options(RouteRequest(origin=args.near, destination=destination), args)
        pending.append(partial(run_route, request, args))

    register_navigation_commands(
        assistant,
        navigate=navigate,
        search=lambda query: pending.append(partial(run_search, query, args)),
        nearby=lambda: pending.append(partial(run_nearby, args)),
    )
    return assistant


async def interactive_mode(args: argparse.Namespace):
    """Run interactive mode."""

    console.print("\n[bold blue]♿ Accessible Route Planner[/bold blue]\n")

    voice_help = ""
    pending = []
    assistant = None
    if args.voice:
        assistant = voice_commands(args, pending)
        voice_help = "\n[bold]Voice commands:[/bold] navigate to <place>, search <query>, nearby places, help\n"

    console.print(Panel(
        "I plan walking routes past places with accessibility features.\n\n"
        "[bold]How to use:[/bold]\n" + EXAMPLES + "\n" + voice_help + "\n"
        "[dim]Type 'quit' to exit.[/dim]",
        title="Welcome",
        border_style="blue",
    ))

    while True:
        try:
            console.print()
            user_input = Prompt.ask("[bold green]You[/bold green]")

            if user_input.lower() in ["quit", "exit", "q"]:
                console.print("\n[dim]Goodbye![/dim]\n")
                break

            if not user_input.strip():
                continue

            request = build_request(user_input, args)
            if request is not None:
                await run_route(request, args)
                continue

            if assistant is None:
                await plan_route(user_input, args)
                continue

            assistant.process_command(user_input)
            while pending:
                await pending.pop(0)()

        except KeyboardInterrupt:
            console.print("\n\n[dim]Session interrupted. Goodbye![/dim]\n")
            break


async def single_query(query: str, args: argparse.Namespace) -> int:
    """Run a single query."""
    result = await plan_route(query, args)
    if result is None:
        return 2
    return 0 if result.success else 1


async def place_mode(args: argparse.Namespace) -> int:
    """Run a place search or nearby listing."""
    if args.search:
        result = await run_search(args.search, args)
    else:
        result = await run_nearby(args)
    if result is None:
        return 2
    return 0 if result.success else 1


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Plan accessible walking routes.")
    parser.add_argument("query", nargs="*", help="Route request, e.g. 'from A to B by wheelchair'")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for the route smoothing; overrides 'seed N' in the request")
    parser.add_argument("--gpx", nargs="?", const="", default=None,
                        help="Save the route as GPX (optionally to the given path)")
    parser.add_argument("--voice", action="store_true", help="Voice commands and spoken step-by-step guidance")
    parser.add_argument("--no-progress", action="store_true", help="Disable the progress spinner")

    prefs = parser.add_argument_group("accessibility preferences")
    prefs.add_argument("--mobility-aid", default=None, help="Mobility aid in use, e.g. wheelchair or walker")
    prefs.add_argument("--visual-needs", action="store_true", help="Prefer places with tactile paving")
    prefs.add_argument("--route-type", choices=sorted(ROUTE_TYPES), default=None,
                       help="Preferred kind of route")

    places = parser.add_argument_group("places")
    places.add_argument("--near", default=None, help="Your location: 'lat,lng' or a place name")
    mode = places.add_mutually_exclusive_group()
    mode.add_argument("--search", default=None, metavar="QUERY", help="Search places by name near --near")
    mode.add_argument("--nearby", action="store_true", help="List accessible places near --near")
    places.add_argument("--max-km", type=float, default=NEARBY_MAX_DISTANCE_KM, help="Nearby listing radius in km")
    places.add_argument("--type", default=None, help="Only places of this type, e.g. restaurant")
    places.add_argument("--feature", action="append", default=[],
                        help="Only places with this feature, e.g. Ramp (repeatable)")
    return parser.parse_args(argv)


def main():
    """Main entry point."""
    args = parse_args(sys.argv[1:])
    configure_logging(settings.log_level, console)

    problems = settings.validate_required()
    if problems:
        console.print(Panel(
            "[red]Invalid configuration:[/red]\n" +
            "\n".join(f"  • {p}" for p in problems),
            title="Configuration Error",
            border_style="red",
        ))
        sys.exit(1)

    if args.search or args.nearby:
        sys.exit(asyncio.run(place_mode(args)))
    elif args.query:
        sys.exit(asyncio.run(single_query(" ".join(args.query), args)))
    else:
        asyncio.run(interactive_mode(args))


if __name__ == "__main__":
    main()
