"""Test fixtures and configuration."""

from typing import Any

import pytest
from contentbridge.models.content import (
    ContentFile,
    ContentFolder,
    InstructionItem,
    Instructions,
    Plan,
    PlanPresentation,
    PlanSection,
)
from contentbridge.models.enums import ActionType, MediaType
from contentbridge.models.provider import AuthData, ProviderCapabilities
from contentbridge.provider import ContentProvider


@pytest.fixture
def sample_folder() -> ContentFolder:
    """Create a sample folder handle."""
    return ContentFolder(id="lesson-1", title="Week 1", path="/lessons/lesson-1")


@pytest.fixture
def sample_auth() -> AuthData:
    """Create sample auth data."""
    return AuthData(access_token="token123")


@pytest.fixture
def sample_video() -> ContentFile:
    """Create a sample video file."""
    return ContentFile(
        id="f1",
        title="Intro",
        media_type=MediaType.VIDEO,
        url="https://cdn.example.com/intro.mp4",
        seconds=30,
    )


@pytest.fixture
def sample_image() -> ContentFile:
    """Create a sample image file."""
    return ContentFile(
        id="f2",
        title="Slide",
        media_type=MediaType.IMAGE,
        url="https://cdn.example.com/slide.jpg",
    )


@pytest.fixture
def sample_closing_video() -> ContentFile:
    """Create a second video file with an embed URL."""
    return ContentFile(
        id="f3",
        title="Closing",
        media_type=MediaType.VIDEO,
        url="https://cdn.example.com/closing.mp4",
        embed_url="https://player.example.com/closing",
        seconds=45,
    )


@pytest.fixture
def sample_playlist(
    sample_video: ContentFile,
    sample_image: ContentFile,
    sample_closing_video: ContentFile,
) -> list[ContentFile]:
    """Create a sample playlist of three files."""
    return [sample_video, sample_image, sample_closing_video]


@pytest.fixture
def sample_plan(
    sample_video: ContentFile,
    sample_image: ContentFile,
    sample_closing_video: ContentFile,
) -> Plan:
    """Create a two-section plan with a file-less presentation."""
    return Plan(
        id="plan-1",
        name="Sunday",
        sections=[
            PlanSection(
                id="s1",
                name="Welcome",
                presentations=[
                    PlanPresentation(
                        id="p1",
                        name="Opening",
                        action_type=ActionType.PLAY,
                        files=[sample_video, sample_image],
                    ),
                    PlanPresentation(
                        id="p2", name="Announcements", action_type=ActionType.OTHER
                    ),
                ],
            ),
            PlanSection(
                id="s2",
                name="Close",
                presentations=[
                    PlanPresentation(
                        id="p3",
                        name="Send off",
                        action_type=ActionType.ADD_ON,
                        files=[sample_closing_video],
                    ),
                ],
            ),
        ],
        all_files=[sample_video, sample_image, sample_closing_video],
    )


@pytest.fixture
def sample_expanded_instructions() -> Instructions:
    """Create expanded instructions: section -> action -> file leaves."""
    return Instructions.model_validate(
        {
            "name": "Lesson 1",
            "items": [
                {
                    "id": "sec-1",
                    "itemType": "lessonSection",
                    "label": "Opening",
                    "children": [
                        {
                            "id": "act-1",
                            "itemType": "lessonAction",
                            "label": "Countdown",
                            "children": [
                                {
                                    "id": "file-1",
                                    "itemType": "file",
                                    "label": "Countdown video",
                                    "seconds": 60,
                                    "embedUrl": "https://cdn.example.com/countdown.mp4",
                                },
                                {
                                    "id": "file-2",
                                    "itemType": "file",
                                    "label": "Title slide",
                                    "embedUrl": "https://cdn.example.com/title.png",
                                },
                            ],
                        },
                        {
                            "id": "act-2",
                            "itemType": "lessonAddOn",
                            "label": "Craft",
                            "children": [
                                {
                                    "id": "file-3",
                                    "itemType": "file",
                                    "label": "Craft steps",
                                    "embedUrl": "https://cdn.example.com/craft.jpg",
                                },
                            ],
                        },
                    ],
                },
                {
                    "id": "sec-2",
                    "itemType": "lessonSection",
                    "label": "Teaching",
                    "children": [
                        {
                            "id": "act-3",
                            "itemType": "lessonAction",
                            "label": "Story",
                            "children": [
                                {
                                    "id": "file-4",
                                    "itemType": "file",
                                    "label": "Story video",
                                    "seconds": 300,
                                    "embedUrl": "https://stream.mux.com/story.m3u8",
                                },
                            ],
                        },
                    ],
                },
            ],
        }
    )


@pytest.fixture
def sample_instructions() -> Instructions:
    """Create plain instructions: section -> action, actions carry URLs."""
    return Instructions(
        name="Lesson 1",
        items=[
            InstructionItem(
                id="sec-1",
                item_type="section",
                label="Opening",
                children=[
                    InstructionItem(
                        id="act-1",
                        item_type="action",
                        label="Countdown",
                        embed_url="https://cdn.example.com/countdown.mp4",
                    ),
                    InstructionItem(
                        related_id="rel-2",
                        item_type="item",
                        label="Discussion",
                    ),
                ],
            ),
        ],
    )


class MockProvider:
    """Mock content client that records fetch calls.

    Results are keyed by fetch method name. A value that is an exception
    instance is raised instead of returned.
    """

    def __init__(
        self,
        capabilities: ProviderCapabilities,
        results: dict[str, Any] | None = None,
        provider_id: str = "mock",
    ) -> None:
        self._capabilities = capabilities
        self._results = results or {}
        self._id = provider_id
        self.calls: list[tuple[str, str, AuthData | None]] = []

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return "Mock Provider"

    @property
    def capabilities(self) -> ProviderCapabilities:
        return self._capabilities

    @property
    def called_methods(self) -> list[str]:
        """Names of fetch methods called, in call order."""
        return [method for method, _, _ in self.calls]

    async def _fetch(
        self, method: str, folder: ContentFolder, auth: AuthData | None
    ) -> Any:
        self.calls.append((method, folder.id, auth))
        result = self._results.get(method)
        if isinstance(result, Exception):
            raise result
        return result

    async def fetch_playlist(
        self, folder: ContentFolder, auth: AuthData | None = None
    ) -> list[ContentFile] | None:
        return await self._fetch("fetch_playlist", folder, auth)

    async def fetch_presentations(
        self, folder: ContentFolder, auth: AuthData | None = None
    ) -> Plan | None:
        return await self._fetch("fetch_presentations", folder, auth)

    async def fetch_instructions(
        self, folder: ContentFolder, auth: AuthData | None = None
    ) -> Instructions | None:
        return await self._fetch("fetch_instructions", folder, auth)

    async def fetch_expanded_instructions(
        self, folder: ContentFolder, auth: AuthData | None = None
    ) -> Instructions | None:
        return await self._fetch("fetch_expanded_instructions", folder, auth)


def make_provider(
    results: dict[str, Any] | None = None, **capabilities: bool
) -> tuple[ContentProvider, MockProvider]:
    """Build a mock client and its bound provider record."""
    client = MockProvider(ProviderCapabilities(**capabilities), results)
    return ContentProvider.from_client(client), client
