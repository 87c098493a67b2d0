"""Tests for FormatResolver."""

import pytest
from conftest import make_provider
from contentbridge.config import ResolverConfig
from contentbridge.exceptions import ProviderDataError
from contentbridge.models.content import ContentFile, ContentFolder, Instructions, Plan
from contentbridge.models.enums import ContentFormat
from contentbridge.models.provider import AuthData
from contentbridge.models.resolved import FormatMeta
from contentbridge.services.resolver import (
    FALLBACK_ORDER,
    LOSSY_GATED,
    FormatResolver,
)
from contentbridge.utils.ids import SequentialIdFactory


class TestFallbackOrder:
    """Tests for FALLBACK_ORDER."""

    def test_covers_every_format(self) -> None:
        """Each format lists the other three exactly once."""
        for target, candidates in FALLBACK_ORDER.items():
            assert set(candidates) == set(ContentFormat) - {target}
            assert len(candidates) == 3

    def test_playlist_prefers_presentations(self) -> None:
        """Playlists prefer plans, then expanded, then plain instructions."""
        assert FALLBACK_ORDER[ContentFormat.PLAYLIST] == (
            ContentFormat.PRESENTATIONS,
            ContentFormat.EXPANDED_INSTRUCTIONS,
            ContentFormat.INSTRUCTIONS,
        )


class TestNativeResolution:
    """Tests for formats the provider serves directly."""

    @pytest.mark.asyncio
    async def test_native_playlist(
        self, sample_folder: ContentFolder, sample_playlist: list[ContentFile]
    ) -> None:
        """Native data is returned as-is with native meta."""
        provider, client = make_provider(
            {"fetch_playlist": sample_playlist}, playlist=True, presentations=True
        )
        resolver = FormatResolver(provider)

        result = await resolver.get_playlist_with_meta(sample_folder)

        assert result.data is sample_playlist
        assert result.meta == FormatMeta(is_native=True, is_lossy=False)
        assert result.meta.source_format is None
        assert client.called_methods == ["fetch_playlist"]

    @pytest.mark.asyncio
    async def test_native_plan(
        self, sample_folder: ContentFolder, sample_plan: Plan
    ) -> None:
        """Native plans are returned unchanged."""
        provider, _ = make_provider(
            {"fetch_presentations": sample_plan}, presentations=True
        )

        result = await FormatResolver(provider).get_presentations(sample_folder)

        assert result is sample_plan

    @pytest.mark.asyncio
    async def test_empty_native_playlist_falls_back(
        self, sample_folder: ContentFolder, sample_plan: Plan
    ) -> None:
        """An empty native playlist counts as unavailable."""
        provider, client = make_provider(
            {"fetch_playlist": [], "fetch_presentations": sample_plan},
            playlist=True,
            presentations=True,
        )

        result = await FormatResolver(provider).get_playlist_with_meta(sample_folder)

        assert [f.id for f in result.data or []] == ["f1", "f2", "f3"]
        assert result.meta.source_format == ContentFormat.PRESENTATIONS
        assert client.called_methods == ["fetch_playlist", "fetch_presentations"]

    @pytest.mark.asyncio
    async def test_none_native_falls_back(
        self,
        sample_folder: ContentFolder,
        sample_expanded_instructions: Instructions,
    ) -> None:
        """A native fetch returning None moves on to the fallbacks."""
        provider, client = make_provider(
            {"fetch_expanded_instructions": sample_expanded_instructions},
            presentations=True,
            expanded_instructions=True,
        )

        result = await FormatResolver(provider).get_presentations_with_meta(
            sample_folder
        )

        assert result.found
        assert result.meta.source_format == ContentFormat.EXPANDED_INSTRUCTIONS
        assert client.called_methods == [
            "fetch_presentations",
            "fetch_expanded_instructions",
        ]


class TestConvertedResolution:
    """Tests for formats derived from another format."""

    @pytest.mark.asyncio
    async def test_playlist_from_presentations(
        self, sample_folder: ContentFolder, sample_plan: Plan
    ) -> None:
        """A plan-only provider yields a lossless playlist."""
        provider, client = make_provider(
            {"fetch_presentations": sample_plan}, presentations=True
        )

        result = await FormatResolver(provider).get_playlist_with_meta(sample_folder)

        assert [f.id for f in result.data or []] == ["f1", "f2", "f3"]
        assert result.meta == FormatMeta(
            is_native=False,
            source_format=ContentFormat.PRESENTATIONS,
            is_lossy=False,
        )
        assert client.called_methods == ["fetch_presentations"]

    @pytest.mark.asyncio
    async def test_presentations_from_expanded_instructions(
        self,
        sample_folder: ContentFolder,
        sample_expanded_instructions: Instructions,
    ) -> None:
        """Expanded instructions yield a lossless plan named after the folder."""
        provider, _ = make_provider(
            {"fetch_expanded_instructions": sample_expanded_instructions},
            expanded_instructions=True,
        )

        result = await FormatResolver(provider).get_presentations_with_meta(
            sample_folder
        )

        plan = result.data
        assert plan is not None
        assert plan.id == "lesson-1"
        assert [s.id for s in plan.sections] == ["sec-1", "sec-2"]
        assert result.meta.is_lossy is False
        assert result.meta.source_format == ContentFormat.EXPANDED_INSTRUCTIONS

    @pytest.mark.asyncio
    async def test_playlist_from_plain_instructions_is_lossy(
        self, sample_folder: ContentFolder, sample_instructions: Instructions
    ) -> None:
        """Plain instructions yield a playlist marked lossy."""
        provider, _ = make_provider(
            {"fetch_instructions": sample_instructions}, instructions=True
        )

        result = await FormatResolver(provider).get_playlist_with_meta(sample_folder)

        assert [f.id for f in result.data or []] == ["act-1"]
        assert result.meta.is_lossy is True
        assert result.meta.source_format == ContentFormat.INSTRUCTIONS

    @pytest.mark.asyncio
    async def test_instructions_prefer_expanded(
        self,
        sample_folder: ContentFolder,
        sample_plan: Plan,
        sample_expanded_instructions: Instructions,
    ) -> None:
        """Instructions come from expanded instructions before plans."""
        provider, client = make_provider(
            {
                "fetch_presentations": sample_plan,
                "fetch_expanded_instructions": sample_expanded_instructions,
            },
            presentations=True,
            expanded_instructions=True,
        )

        result = await FormatResolver(provider).get_instructions_with_meta(
            sample_folder
        )

        assert result.meta.source_format == ContentFormat.EXPANDED_INSTRUCTIONS
        assert result.meta.is_lossy is True
        assert client.called_methods == ["fetch_expanded_instructions"]

    @pytest.mark.asyncio
    async def test_expanded_from_plain_instructions(
        self, sample_folder: ContentFolder, sample_instructions: Instructions
    ) -> None:
        """Plain instructions stand in for expanded ones, marked lossy."""
        provider, _ = make_provider(
            {"fetch_instructions": sample_instructions}, instructions=True
        )

        result = await FormatResolver(provider).get_expanded_instructions_with_meta(
            sample_folder
        )

        assert result.data == sample_instructions
        assert result.meta.is_lossy is True

    @pytest.mark.asyncio
    async def test_playlist_wrapped_into_plan(
        self, sample_folder: ContentFolder, sample_playlist: list[ContentFile]
    ) -> None:
        """A playlist-only provider yields a single-section plan."""
        provider, _ = make_provider({"fetch_playlist": sample_playlist}, playlist=True)
        resolver = FormatResolver(provider, id_factory=SequentialIdFactory())

        result = await resolver.get_presentations_with_meta(sample_folder)

        plan = result.data
        assert plan is not None
        assert plan.id == "gen-1"
        assert plan.name == "Week 1"
        assert plan.all_files == sample_playlist
        assert result.meta.is_lossy is True

    @pytest.mark.asyncio
    async def test_skips_empty_candidates(
        self,
        sample_folder: ContentFolder,
        sample_expanded_instructions: Instructions,
    ) -> None:
        """Candidates that return nothing are passed over in order."""
        provider, client = make_provider(
            {
                "fetch_presentations": None,
                "fetch_expanded_instructions": sample_expanded_instructions,
            },
            presentations=True,
            expanded_instructions=True,
            instructions=True,
        )

        result = await FormatResolver(provider).get_playlist_with_meta(sample_folder)

        assert result.meta.source_format == ContentFormat.EXPANDED_INSTRUCTIONS
        assert len(result.data or []) == 4
        assert client.called_methods == [
            "fetch_presentations",
            "fetch_expanded_instructions",
        ]


class TestStrictResolution:
    """Tests for allow_lossy=False."""

    @pytest.mark.asyncio
    async def test_lossless_allowed(
        self, sample_folder: ContentFolder, sample_plan: Plan
    ) -> None:
        """Lossless conversions still happen in strict mode."""
        provider, _ = make_provider(
            {"fetch_presentations": sample_plan}, presentations=True
        )
        resolver = FormatResolver(provider, ResolverConfig(allow_lossy=False))

        result = await resolver.get_playlist_with_meta(sample_folder)

        assert result.found
        assert result.meta.is_lossy is False

    @pytest.mark.asyncio
    async def test_lossy_refused(
        self, sample_folder: ContentFolder, sample_instructions: Instructions
    ) -> None:
        """Playlists are not built from plain instructions, which are not fetched."""
        provider, client = make_provider(
            {"fetch_instructions": sample_instructions}, instructions=True
        )
        resolver = FormatResolver(provider, ResolverConfig(allow_lossy=False))

        result = await resolver.get_playlist_with_meta(sample_folder)

        assert result.data is None
        assert result.meta == FormatMeta()
        assert client.calls == []

    @pytest.mark.asyncio
    async def test_instructions_from_plan_allowed(
        self, sample_folder: ContentFolder, sample_plan: Plan
    ) -> None:
        """Plans still reshape into instructions, reported as lossy."""
        provider, _ = make_provider(
            {"fetch_presentations": sample_plan}, presentations=True
        )
        resolver = FormatResolver(provider, ResolverConfig(allow_lossy=False))

        result = await resolver.get_instructions_with_meta(sample_folder)

        instructions = result.data
        assert instructions is not None
        assert [i.id for i in instructions.items] == ["s1", "s2"]
        assert result.meta == FormatMeta(
            is_native=False,
            source_format=ContentFormat.PRESENTATIONS,
            is_lossy=True,
        )

    @pytest.mark.asyncio
    async def test_presentations_from_instructions_allowed(
        self, sample_folder: ContentFolder, sample_instructions: Instructions
    ) -> None:
        """Plain instructions still reshape into a plan, reported as lossy."""
        provider, _ = make_provider(
            {"fetch_instructions": sample_instructions}, instructions=True
        )
        resolver = FormatResolver(provider, ResolverConfig(allow_lossy=False))

        result = await resolver.get_presentations_with_meta(sample_folder)

        assert result.found
        assert result.meta.source_format == ContentFormat.INSTRUCTIONS
        assert result.meta.is_lossy is True

    @pytest.mark.asyncio
    async def test_instructions_from_expanded_allowed(
        self,
        sample_folder: ContentFolder,
        sample_expanded_instructions: Instructions,
    ) -> None:
        """Expanded instructions still collapse, reported as lossy."""
        provider, _ = make_provider(
            {"fetch_expanded_instructions": sample_expanded_instructions},
            expanded_instructions=True,
        )
        resolver = FormatResolver(provider, ResolverConfig(allow_lossy=False))

        result = await resolver.get_instructions_with_meta(sample_folder)

        assert result.found
        assert result.meta.source_format == ContentFormat.EXPANDED_INSTRUCTIONS
        assert result.meta.is_lossy is True

    @pytest.mark.asyncio
    async def test_expanded_from_instructions_allowed(
        self, sample_folder: ContentFolder, sample_instructions: Instructions
    ) -> None:
        """Plain instructions still stand in for expanded ones."""
        provider, _ = make_provider(
            {"fetch_instructions": sample_instructions}, instructions=True
        )
        resolver = FormatResolver(provider, ResolverConfig(allow_lossy=False))

        result = await resolver.get_expanded_instructions_with_meta(sample_folder)

        assert result.data == sample_instructions
        assert result.meta.source_format == ContentFormat.INSTRUCTIONS
        assert result.meta.is_lossy is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "target",
        [
            ContentFormat.PRESENTATIONS,
            ContentFormat.INSTRUCTIONS,
            ContentFormat.EXPANDED_INSTRUCTIONS,
        ],
    )
    async def test_playlist_source_refused(
        self,
        sample_folder: ContentFolder,
        sample_playlist: list[ContentFile],
        target: ContentFormat,
    ) -> None:
        """Nothing is built from a playlist, and it is not fetched."""
        provider, client = make_provider(
            {"fetch_playlist": sample_playlist}, playlist=True
        )
        resolver = FormatResolver(provider, ResolverConfig(allow_lossy=False))

        result = await resolver.resolve(target, sample_folder)

        assert result.data is None
        assert client.calls == []

    def test_gated_fallbacks_are_last_resort(self) -> None:
        """Each target gates only the final fallback in its order."""
        for target, candidates in FALLBACK_ORDER.items():
            gated = [s for s in candidates if (s, target) in LOSSY_GATED]
            assert gated == [candidates[-1]]

    @pytest.mark.asyncio
    async def test_native_unaffected(
        self, sample_folder: ContentFolder, sample_instructions: Instructions
    ) -> None:
        """Native results are returned in strict mode."""
        provider, _ = make_provider(
            {"fetch_instructions": sample_instructions}, instructions=True
        )
        resolver = FormatResolver(provider, ResolverConfig(allow_lossy=False))

        result = await resolver.get_instructions_with_meta(sample_folder)

        assert result.meta.is_native is True


class TestExhaustion:
    """Tests for resolution with nothing available."""

    @pytest.mark.asyncio
    async def test_no_capabilities(self, sample_folder: ContentFolder) -> None:
        """A provider with no formats yields nothing and makes no calls."""
        provider, client = make_provider(browse=True)

        result = await FormatResolver(provider).get_playlist_with_meta(sample_folder)

        assert result.data is None
        assert not result.found
        assert result.meta == FormatMeta(is_native=False, is_lossy=False)
        assert client.calls == []

    @pytest.mark.asyncio
    async def test_all_candidates_empty(self, sample_folder: ContentFolder) -> None:
        """Every declared fetch is tried once, then nothing is returned."""
        provider, client = make_provider(
            {"fetch_playlist": []},
            playlist=True,
            presentations=True,
            instructions=True,
            expanded_instructions=True,
        )

        result = await FormatResolver(provider).get_presentations(sample_folder)

        assert result is None
        assert client.called_methods == [
            "fetch_presentations",
            "fetch_expanded_instructions",
            "fetch_instructions",
            "fetch_playlist",
        ]

    @pytest.mark.asyncio
    async def test_undeclared_fetchers_ignored(
        self, sample_folder: ContentFolder, sample_plan: Plan
    ) -> None:
        """Fetch methods are only used when declared in capabilities."""
        provider, client = make_provider(
            {"fetch_presentations": sample_plan}, playlist=True
        )

        result = await FormatResolver(provider).get_playlist(sample_folder)

        assert result is None
        assert client.called_methods == ["fetch_playlist"]


class TestPassThrough:
    """Tests for folder, auth and error pass-through."""

    @pytest.mark.asyncio
    async def test_folder_and_auth_passed(
        self,
        sample_folder: ContentFolder,
        sample_auth: AuthData,
        sample_plan: Plan,
    ) -> None:
        """Every provider call receives the folder and auth unchanged."""
        provider, client = make_provider(
            {"fetch_presentations": sample_plan}, playlist=True, presentations=True
        )

        await FormatResolver(provider).get_playlist(sample_folder, sample_auth)

        assert client.calls == [
            ("fetch_playlist", "lesson-1", sample_auth),
            ("fetch_presentations", "lesson-1", sample_auth),
        ]

    @pytest.mark.asyncio
    async def test_provider_errors_propagate(
        self, sample_folder: ContentFolder, sample_plan: Plan
    ) -> None:
        """Provider exceptions reach the caller and stop resolution."""
        provider, client = make_provider(
            {
                "fetch_playlist": ProviderDataError("upstream failed"),
                "fetch_presentations": sample_plan,
            },
            playlist=True,
            presentations=True,
        )

        with pytest.raises(ProviderDataError, match="upstream failed"):
            await FormatResolver(provider).get_playlist(sample_folder)

        assert client.called_methods == ["fetch_playlist"]

    @pytest.mark.asyncio
    async def test_generic_resolve(
        self, sample_folder: ContentFolder, sample_plan: Plan
    ) -> None:
        """resolve() takes the target format as an argument."""
        provider, _ = make_provider(
            {"fetch_presentations": sample_plan}, presentations=True
        )

        result = await FormatResolver(provider).resolve(
            ContentFormat.EXPANDED_INSTRUCTIONS, sample_folder
        )

        assert result.meta.source_format == ContentFormat.PRESENTATIONS
        assert result.meta.is_lossy is False

    def test_properties(self) -> None:
        """Resolver exposes its provider and config."""
        provider, _ = make_provider(playlist=True)
        config = ResolverConfig(allow_lossy=False)

        resolver = FormatResolver(provider, config)

        assert resolver.provider is provider
        assert resolver.config is config
        assert FormatResolver(provider).config.allow_lossy is True
