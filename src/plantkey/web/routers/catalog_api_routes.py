"""Trait question catalog endpoints."""

from typing import Annotated

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends

from plantkey.identification.catalog import Organ, questions_for
from plantkey.taxonomy.store import TaxonomyStore
from plantkey.web.core.container import Container
from plantkey.web.models.identification import CatalogQuestion, CatalogResponse, TraitOption

router = APIRouter(prefix="/catalog")


@router.get("/{organ}", response_model=CatalogResponse)
@inject
async def get_catalog(
    organ: Organ,
    store: Annotated[TaxonomyStore, Depends(Provide[Container.taxonomy_store])],
) -> CatalogResponse:
    """Get the ordered trait questions for an organ with their selectable terms."""
    questions = [
        CatalogQuestion(
            title=question.title,
            category=question.category,
            options=[
                TraitOption.from_term(term) for term in store.terms_for(question.category.value)
            ],
        )
        for question in questions_for(organ)
    ]
    return CatalogResponse(organ=organ, questions=questions)
