"""Tests for command line option handling."""

import pytest

import main
from access_nav.models import RouteProfile
from access_nav.pipeline import RoutePlanResult


class RecordingPipeline:
    """Stands in for RoutePlanningPipeline and records executed requests."""

    requests = []

    def __init__(self, show_progress=True, client=None):
        self.show_progress = show_progress

    async def execute(self, request):
        self.requests.append(request)
        return RoutePlanResult(success=False, error="offline")


@pytest.fixture
def recorded(monkeypatch):
    RecordingPipeline.requests = []
    monkeypatch.setattr(main, "RoutePlanningPipeline", RecordingPipeline)
    return RecordingPipeline.requests


class TestParseArgs:

    def test_seed_option(self):
        args = main.parse_args(["--seed", "7", "from 13.04,80.23 to 13.05,80.22"])

        assert args.seed == 7
        assert args.query == ["from 13.04,80.23 to 13.05,80.22"]

    def test_defaults(self):
        args = main.parse_args([])

        assert args.seed is None
        assert args.gpx is None
        assert args.feature == []
        assert args.max_km == 5

    def test_search_and_nearby_are_exclusive(self):
        with pytest.raises(SystemExit):
            main.parse_args(["--near", "13.04,80.23", "--search", "cafe", "--nearby"])


class TestBuildRequest:
    """Test that command line options override the request text."""

    def test_seed_flag_wins_over_text(self):
        args = main.parse_args(["--seed", "7"])

        request = main.build_request("from Home to Library, seed 3", args)

        assert request.seed == 7

    def test_text_seed_kept_without_flag(self):
        request = main.build_request("from Home to Library, seed 3", main.parse_args([]))

        assert request.seed == 3

    def test_preferences_choose_profile(self):
        visual = main.build_request("from Home to Library by wheelchair", main.parse_args(["--visual-needs"]))
        fewest = main.build_request("from Home to Library", main.parse_args(["--route-type", "fewest-steps"]))
        aid = main.build_request("from Home to Library, low vision", main.parse_args(["--mobility-aid", "walker"]))

        assert visual.profile is RouteProfile.VISUAL_AIDS
        assert fewest.profile is RouteProfile.NO_STEPS
        assert aid.profile is RouteProfile.WHEELCHAIR

    def test_not_understood(self):
        assert main.build_request("hello there", main.parse_args([])) is None


@pytest.mark.asyncio
class TestCommands:
    """Test the command line modes with a recording pipeline."""

    async def test_single_query_passes_seed(self, recorded):
        args = main.parse_args(["--seed", "7", "--no-progress", "from 13.04,80.23 to 13.05,80.22"])

        code = await main.single_query(" ".join(args.query), args)

        assert code == 1
        assert recorded[0].seed == 7
        assert recorded[0].origin == (13.04, 80.23)

    async def test_single_query_not_understood(self, recorded):
        code = await main.single_query("hello there", main.parse_args([]))

        assert code == 2
        assert recorded == []

    async def test_place_mode_needs_location(self):
        assert await main.place_mode(main.parse_args(["--nearby"])) == 2

    async def test_voice_navigate_runs_route(self, recorded):
        args = main.parse_args(["--voice", "--no-progress", "--near", "13.04,80.23", "--seed", "5"])
        pending = []
        assistant = main.voice_commands(args, pending)

        assistant.process_command("navigate to 13.05,80.22")
        # Guidance prompts only after a successful route
        for job in pending:
            await job()

        assert len(recorded) == 1
        assert recorded[0].origin == "13.04,80.23"
        assert recorded[0].destination == "13.05,80.22"
        assert recorded[0].seed == 5

    async def test_voice_navigate_needs_location(self, recorded):
        pending = []
        assistant = main.voice_commands(main.parse_args(["--voice"]), pending)

        assistant.process_command("navigate to marina beach")

        assert pending == []
        assert assistant.spoken[-1].startswith("I need your starting location")

    async def test_voice_search_queued(self):
        pending = []
        assistant = main.voice_commands(main.parse_args(["--voice", "--near", "13.04,80.23"]), pending)

        assistant.process_command("search pharmacy")
        assistant.process_command("nearby places")

        assert [job.func for job in pending] == [main.run_search, main.run_nearby]
        assert pending[0].args[0] == "pharmacy"
