"""Pipeline construction from application settings."""

from medmap_core import MindMapPipeline, OpenAIAdapter, PipelineConfig

from app.settings import Settings, settings


def build_pipeline(app_settings: Settings) -> MindMapPipeline:
    """Build a pipeline; without an API key the adapter is left unset."""
    adapter = (
        OpenAIAdapter(
            api_key=app_settings.openai_api_key,
            base_url=app_settings.openai_base_url,
        )
        if app_settings.openai_api_key
        else None
    )
    config = PipelineConfig(
        synthesis_model=app_settings.synthesis_model,
        synthesis_reasoning_effort=app_settings.synthesis_reasoning_effort,
        refine_model=app_settings.refine_model,
        verify_concurrency=app_settings.verify_concurrency,
        drop_dangling_edges=app_settings.drop_dangling_edges,
    )
    return MindMapPipeline(adapter, config)


def get_pipeline() -> MindMapPipeline:
    """FastAPI dependency returning a pipeline scoped to one request."""
    return build_pipeline(settings)
