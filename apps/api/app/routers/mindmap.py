"""Mind map generation and node auto-correction routes."""

from fastapi import APIRouter, Depends, File, Request, UploadFile
from medmap_core import InvalidRequest, MindMapPayload, MindMapPipeline, RefineResult

from app.services.pipeline import get_pipeline

router = APIRouter()


@router.post("/generate", response_model=MindMapPayload)
async def generate_mind_map(
    file: UploadFile | None = File(None),
    pipeline: MindMapPipeline = Depends(get_pipeline),
) -> MindMapPayload:
    """Generate a verified mind map from an uploaded PDF."""
    if file is None:
        raise InvalidRequest("A PDF file is required.")

    content = await file.read()
    return await pipeline.generate(content)


@router.post("/autocorrect", response_model=RefineResult)
async def autocorrect_node(
    request: Request,
    pipeline: MindMapPipeline = Depends(get_pipeline),
) -> RefineResult:
    """Revise a node's summary and tags so they match its citations."""
    try:
        body = await request.json()
    except ValueError as e:
        raise InvalidRequest("Request body must be JSON.") from e

    return await pipeline.refine(body)
