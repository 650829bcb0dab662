"""POST /api/annotate — resolve tutor annotation targets to canvas boxes."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from annotator.dependencies import get_oracle
from annotator.engine import AnnotationResolver, SemanticRegistry
from annotator.engine.errors import InvalidBoundsError
from annotator.engine.resolver.oracle import OracleFallback
from annotator.models.annotation import BoundsModel, ProblemBoundsModel
from annotator.models.requests import AnnotateRequest
from annotator.models.responses import AnnotateResponse, ResolvedAnnotation

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/annotate", response_model=AnnotateResponse)
async def annotate(
    req: AnnotateRequest,
    oracle: OracleFallback = Depends(get_oracle),
) -> AnnotateResponse:
    # Fresh registry per request: each request is its own session
    registry = SemanticRegistry()
    try:
        registry.register_many((el.id, el.bounds.model_dump()) for el in req.elements)
    except InvalidBoundsError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    resolver = AnnotationResolver(
        registry=registry,
        canvas_width=req.canvas.width,
        canvas_height=req.canvas.height,
        oracle=oracle,
    )
    resolver.set_canvas_snapshot(req.canvas_snapshot)

    annotations: list[ResolvedAnnotation] = []
    unresolved: list[str] = []
    for t in req.targets:
        result = await resolver.resolve_detailed(t.target, preferred_type=t.preferred_type)
        if result is None:
            unresolved.append(t.target)
            continue
        annotations.append(
            ResolvedAnnotation(
                target=t.target,
                type=t.type,
                bounds=BoundsModel.from_bounds(result.bounds),
                tier=int(result.tier),
                strategy=result.strategy,
            )
        )

    if unresolved:
        logger.info("Unresolved targets: %s", unresolved)

    pb = registry.problem_bounds
    return AnnotateResponse(
        annotations=annotations,
        unresolved=unresolved,
        problem_bounds=ProblemBoundsModel.from_problem_bounds(pb) if pb is not None else None,
    )
