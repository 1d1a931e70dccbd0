"""Tests for the generation graph and pipeline entry points."""

import asyncio
import json
from typing import Any

import pytest
from fakes import (
    FakeAdapter,
    FakeReferenceServer,
    build_pdf,
    medline_document,
    medline_xml,
    wikipedia_summary,
)

from medmap_core import MindMapPipeline, PipelineConfig
from medmap_core.errors import (
    EmptyExtraction,
    ExtractionError,
    InvalidRequest,
    MissingConfiguration,
    ParseError,
    UnknownFailure,
)
from medmap_core.graph.nodes.verify_nodes import verify_all
from medmap_core.model_adapters.base import BaseModelAdapter
from medmap_core.schemas.citations import Citation
from medmap_core.schemas.mindmap import GraphNode, RefineResult


def _answer(nodes: list[dict[str, Any]], edges: list[dict[str, Any]] | None = None) -> str:
    return json.dumps({"sourceSummary": "s", "nodes": nodes, "edges": edges or []})


class ExplodingAdapter(BaseModelAdapter):
    """Adapter whose transport fails unexpectedly."""

    async def create_response(self, prompt: str, **kwargs: Any):
        raise RuntimeError("connection reset")


class TestGenerate:
    """Tests for PDF to verified mind map."""

    @pytest.mark.asyncio
    async def test_end_to_end(self) -> None:
        """Test extraction, synthesis and verification of a single node."""
        adapter = FakeAdapter(_answer([{"id": "t", "title": "T", "parentIds": []}]))
        server = FakeReferenceServer(
            medline={"T": medline_xml(medline_document(name="T", link="https://x", snippet="sn"))}
        )
        pipeline = MindMapPipeline(adapter, transport=server.transport)

        payload = await pipeline.generate(build_pdf("Some notes"))

        [node] = payload.nodes
        assert node.verified is True
        assert node.citations == [
            Citation(title="T", url="https://x", snippet="sn", source="MedlinePlus")
        ]
        assert payload.source_summary == "s"
        assert "Some notes" in adapter.calls[0]["prompt"]
        assert server.hosts() == ["wsearch.nlm.nih.gov"]

    @pytest.mark.asyncio
    async def test_verified_matches_citations(self) -> None:
        """Test that every node is verified exactly when it has citations."""
        adapter = FakeAdapter(
            _answer(
                [
                    {"id": "a", "title": "Asthma"},
                    {"id": "b", "title": "Bronchiectasis", "parentIds": ["a"]},
                    {"id": "c", "title": "Obscure thing", "parentIds": ["a"]},
                ]
            )
        )
        server = FakeReferenceServer(
            medline={"Asthma": medline_xml(medline_document(name="Asthma", link="https://m"))},
            wikipedia={"Bronchiectasis": wikipedia_summary("Bronchiectasis", "https://w")},
        )
        pipeline = MindMapPipeline(adapter, transport=server.transport)

        payload = await pipeline.generate(build_pdf("Respiratory notes"))

        assert [node.verified for node in payload.nodes] == [True, True, False]
        for node in payload.nodes:
            assert node.verified == bool(node.citations)
        assert payload.nodes[1].citations[0].source == "Wikipedia"

    @pytest.mark.asyncio
    async def test_requests_carry_user_agent(self) -> None:
        """Test that reference lookups identify the application."""
        adapter = FakeAdapter(_answer([{"id": "a", "title": "Asthma"}]))
        server = FakeReferenceServer()
        config = PipelineConfig(user_agent="medmap-tests/1.0")
        pipeline = MindMapPipeline(adapter, config, transport=server.transport)

        await pipeline.generate(build_pdf("notes"))

        assert all(r.headers["User-Agent"] == "medmap-tests/1.0" for r in server.requests)

    @pytest.mark.asyncio
    async def test_wire_format_is_camel_case(self) -> None:
        """Test that the serialized payload uses camelCase field names."""
        adapter = FakeAdapter(_answer([{"id": "a", "title": "A", "parentIds": []}]))
        pipeline = MindMapPipeline(adapter, transport=FakeReferenceServer().transport)

        payload = await pipeline.generate(build_pdf("notes"))
        wire = payload.model_dump(mode="json", by_alias=True)

        assert {"nodes", "edges", "generatedAt", "sourceSummary"} <= wire.keys()
        assert {"parentIds", "autoCorrected"} <= wire["nodes"][0].keys()

    @pytest.mark.asyncio
    async def test_empty_extraction_stops_early(self) -> None:
        """Test that a text-free PDF fails before any model or reference call."""
        adapter = FakeAdapter(_answer([{"id": "a", "title": "A"}]))
        server = FakeReferenceServer()
        pipeline = MindMapPipeline(adapter, transport=server.transport)

        with pytest.raises(EmptyExtraction, match="Unable to extract text from PDF."):
            await pipeline.generate(build_pdf(None))

        assert adapter.calls == []
        assert server.requests == []

    @pytest.mark.asyncio
    async def test_missing_pdf(self) -> None:
        """Test that missing bytes are rejected before the credential check."""
        with pytest.raises(InvalidRequest):
            await MindMapPipeline(None).generate(b"")

    @pytest.mark.asyncio
    async def test_missing_credential(self) -> None:
        """Test that a pipeline without an adapter reports missing configuration."""
        with pytest.raises(MissingConfiguration, match="OPENAI_API_KEY"):
            await MindMapPipeline(None).generate(build_pdf("notes"))

    @pytest.mark.asyncio
    async def test_unparsable_pdf(self) -> None:
        """Test that non-PDF bytes surface as an extraction failure."""
        adapter = FakeAdapter()
        with pytest.raises(ExtractionError):
            await MindMapPipeline(adapter).generate(b"NOT A PDF FILE")
        assert adapter.calls == []

    @pytest.mark.asyncio
    async def test_parse_error_yields_no_partial_payload(self) -> None:
        """Test that a malformed model answer fails the whole request."""
        server = FakeReferenceServer()
        pipeline = MindMapPipeline(FakeAdapter("not json"), transport=server.transport)

        with pytest.raises(ParseError):
            await pipeline.generate(build_pdf("notes"))
        assert server.requests == []

    @pytest.mark.asyncio
    async def test_unexpected_errors_are_wrapped(self) -> None:
        """Test that unexpected exceptions become UnknownFailure."""
        pipeline = MindMapPipeline(ExplodingAdapter())
        with pytest.raises(UnknownFailure, match="connection reset"):
            await pipeline.generate(build_pdf("notes"))

    @pytest.mark.asyncio
    async def test_dangling_edges_kept_by_default(self) -> None:
        """Test that edges are passed through as the model produced them."""
        adapter = FakeAdapter(
            _answer([{"id": "a", "title": "A"}], [{"source": "a", "target": "ghost"}])
        )
        pipeline = MindMapPipeline(adapter, transport=FakeReferenceServer().transport)

        payload = await pipeline.generate(build_pdf("notes"))
        assert [edge.target for edge in payload.edges] == ["ghost"]

    @pytest.mark.asyncio
    async def test_dangling_edges_dropped_when_enabled(self) -> None:
        """Test the optional consistency pass."""
        adapter = FakeAdapter(
            _answer(
                [{"id": "a", "title": "A"}, {"id": "b", "title": "B"}],
                [
                    {"source": "a", "target": "b", "label": "causes"},
                    {"source": "a", "target": "ghost"},
                ],
            )
        )
        config = PipelineConfig(drop_dangling_edges=True)
        pipeline = MindMapPipeline(adapter, config, transport=FakeReferenceServer().transport)

        payload = await pipeline.generate(build_pdf("notes"))
        assert [edge.id for edge in payload.edges] == ["a-b-causes"]


class SlowVerifier:
    """Verifier whose lookups finish in reverse order."""

    def __init__(self, delays: dict[str, float]):
        self.delays = delays
        self.active = 0
        self.peak = 0

    async def verify(self, query: str) -> list[Citation]:
        self.active += 1
        self.peak = max(self.peak, self.active)
        await asyncio.sleep(self.delays[query])
        self.active -= 1
        return [Citation(title=query, url=f"https://{query}", source="MedlinePlus")]


class TestVerifyAll:
    """Tests for sequential and bounded-concurrency verification."""

    @pytest.mark.asyncio
    async def test_sequential_by_default(self) -> None:
        """Test that one node is verified at a time."""
        verifier = SlowVerifier({"a": 0.0, "b": 0.0})
        nodes = [GraphNode(id=q, title=q) for q in ("a", "b")]

        await verify_all(verifier, nodes)
        assert verifier.peak == 1

    @pytest.mark.asyncio
    async def test_concurrent_preserves_order(self) -> None:
        """Test that concurrent results stay in input order."""
        verifier = SlowVerifier({"a": 0.03, "b": 0.02, "c": 0.01})
        nodes = [GraphNode(id=q, title=q) for q in ("a", "b", "c")]

        verified = await verify_all(verifier, nodes, concurrency=2)

        assert [node.id for node in verified] == ["a", "b", "c"]
        assert [node.citations[0].url for node in verified] == [
            "https://a",
            "https://b",
            "https://c",
        ]
        assert verifier.peak == 2


class TestRefine:
    """Tests for the refine entry point."""

    @pytest.mark.asyncio
    async def test_refine(self) -> None:
        """Test a wire-format node is refined."""
        pipeline = MindMapPipeline(FakeAdapter('{"summary": "New", "tags": ["x"]}'))
        result = await pipeline.refine(
            {"node": {"id": "a", "title": "A", "summary": "Old", "parentIds": []}}
        )
        assert result == RefineResult(summary="New", tags=["x"])

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [None, {}, {"node": None}, {"node": {}}])
    async def test_missing_node(self, body: Any) -> None:
        """Test that a body without a node is an invalid request."""
        with pytest.raises(InvalidRequest, match="Node payload missing."):
            await MindMapPipeline(FakeAdapter()).refine(body)

    @pytest.mark.asyncio
    async def test_malformed_node(self) -> None:
        """Test that a node without required fields is an invalid request."""
        with pytest.raises(InvalidRequest, match="malformed"):
            await MindMapPipeline(FakeAdapter()).refine({"node": {"id": "a"}})

    @pytest.mark.asyncio
    async def test_missing_credential(self) -> None:
        """Test that refine without an adapter reports missing configuration."""
        with pytest.raises(MissingConfiguration):
            await MindMapPipeline(None).refine({"node": {"id": "a", "title": "A"}})
