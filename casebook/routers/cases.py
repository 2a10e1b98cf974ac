from __future__ import annotations

from typing import Annotated, List

from fastapi import APIRouter, File, HTTPException, Request, Response, UploadFile
from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from casebook.domain.cases import ALL, DEFAULT_CATEGORY, SUGGESTED_CATEGORIES, CaseDraft, case_to_dict
from casebook.domain.errors import InvalidFormatError, NotFoundError
from casebook.services.case_store import CaseStore
from casebook.services.transfer import export_blob, export_filename, import_blob

router = APIRouter(prefix="/cases", tags=["cases"])


class DraftIn(BaseModel):
    """Form payload for creating or editing a case."""

    model_config = ConfigDict(populate_by_name=True)

    title: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    category: str = DEFAULT_CATEGORY
    tags: List[str] = Field(default_factory=list)
    description: str = ""
    image_url: str = Field("", alias="imageUrl")
    source_url: str = Field("", alias="sourceUrl")
    notes: str = ""
    rating: int = Field(0, ge=0, le=5)
    learning_points: List[str] = Field(default_factory=list, alias="learningPoints")

    def to_draft(self) -> CaseDraft:
        # the tag input is comma separated on the form; blanks are dropped there too
        tags = [t.strip() for t in self.tags if t.strip()]
        return CaseDraft(
            title=self.title,
            category=self.category,
            tags=tags,
            description=self.description,
            image_url=self.image_url,
            source_url=self.source_url,
            notes=self.notes,
            rating=self.rating,
            learning_points=self.learning_points,
        )


def _get_store(request: Request) -> CaseStore:
    store = getattr(getattr(request.app, "state", None), "case_store", None)
    if store is None:
        raise RuntimeError("CaseStore not configured")
    return store


@router.get("")
def list_cases(request: Request, category: str = ALL, tag: str = ALL):
    store = _get_store(request)
    return [case_to_dict(c) for c in store.filter(category=category, tag=tag)]


@router.get("/facets")
def facets(request: Request):
    store = _get_store(request)
    stats = store.stats()
    return {
        "categories": store.distinct_categories(),
        "tags": store.distinct_tags(),
        "suggested_categories": list(SUGGESTED_CATEGORIES),
        "stats": {"total": stats.total, "categories": stats.categories, "tags": stats.tags},
    }


@router.get("/export")
def export_cases(request: Request):
    store = _get_store(request)
    filename = export_filename()
    return Response(
        content=export_blob(store.list()),
        media_type="application/json; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/import")
def import_cases(request: Request, file: UploadFile = File(...)):
    store = _get_store(request)
    payload = file.file.read()
    try:
        records = import_blob(payload)
    except InvalidFormatError as exc:
        raise HTTPException(400, f"Import failed: {exc.message}")
    store.replace_all(records)
    return {"imported": len(records)}


@router.get("/{case_id}")
def get_case(case_id: str, request: Request):
    store = _get_store(request)
    try:
        return case_to_dict(store.get(case_id))
    except NotFoundError:
        raise HTTPException(404, "Case not found")


@router.post("", status_code=201)
def create_case(body: DraftIn, request: Request):
    store = _get_store(request)
    return case_to_dict(store.create(body.to_draft()))


@router.put("/{case_id}")
def update_case(case_id: str, body: DraftIn, request: Request):
    store = _get_store(request)
    try:
        return case_to_dict(store.update(case_id, body.to_draft()))
    except NotFoundError:
        raise HTTPException(404, "Case not found")


@router.delete("/{case_id}", status_code=204)
def delete_case(case_id: str, request: Request):
    store = _get_store(request)
    store.delete(case_id)
    return Response(status_code=204)
