from functools import lru_cache
import logging
from pathlib import Path
import sys

from fastapi import FastAPI, File, Form, HTTPException, Query, Response, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

# Ensure local src package is importable in serverless runtime.
ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from namaste_bridge.config import BridgeConfig  # noqa: E402
from namaste_bridge.core import ConversionPipeline, ConversionResult  # noqa: E402
from namaste_bridge.exceptions import NoValidDataError, PersistenceError, ReferenceDataError  # noqa: E402
from namaste_bridge.mapping.engine import MappingConfig, MappingEngine  # noqa: E402
from namaste_bridge.mapping.repository import ReferenceIndex  # noqa: E402
from namaste_bridge.schema import MappingResult, NormalizedRow, Submitter  # noqa: E402
from namaste_bridge.storage import build_store  # noqa: E402

CONFIG = BridgeConfig.from_env()
ALLOWED_UPLOAD_TYPES = {
    "text/csv",
    "text/plain",
    "text/tab-separated-values",
    "application/csv",
    "application/vnd.ms-excel",
    "application/octet-stream",
}

app = FastAPI(title="namaste-bridge API", version="1.0.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(CONFIG.frontend_origins),
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache(maxsize=1)
def get_engine() -> MappingEngine:
    return MappingEngine(
        config=MappingConfig(
            reference_version=CONFIG.reference_version,
            search_limit=CONFIG.search_result_limit,
        )
    )


@lru_cache(maxsize=1)
def get_pipeline() -> ConversionPipeline:
    return ConversionPipeline(engine=get_engine(), store=build_store(CONFIG), config=CONFIG)


@app.get("/health")
def health() -> dict[str, bool]:
    return {"ok": True}


class ConvertSingleRequest(BaseModel):
    namaste_code: str = Field(min_length=1)
    description: str | None = None


class ConvertSingleResponse(BaseModel):
    success: bool = True
    data: MappingResult


class ConvertBatchRequest(BaseModel):
    codes: list[ConvertSingleRequest] = Field(min_length=1)


class ConvertBatchResponse(BaseModel):
    success: bool = True
    total: int
    data: list[MappingResult]


class SearchResponse(BaseModel):
    query: str
    total: int
    results: list[MappingResult]


class ReferenceCode(BaseModel):
    code: str
    term: str
    system: str
    native_term: str | None = None
    definition: str | None = None


class ReferenceCodesResponse(BaseModel):
    version: str
    system: str | None = None
    total: int
    codes: list[ReferenceCode]


class ReferenceLatestResponse(BaseModel):
    latest: str
    codes_url: str


class UploadResponse(BaseModel):
    fileId: str | None = None
    total: int
    statusCounts: dict[str, int]
    results: list[MappingResult]
    bundle: dict
    warnings: list[str] = Field(default_factory=list)


@lru_cache(maxsize=8)
def _load_reference_codes(version: str) -> list[ReferenceCode]:
    index = ReferenceIndex.from_version(version)
    return [
        ReferenceCode(
            code=entry.code,
            term=entry.term,
            system=entry.system,
            native_term=entry.native_term,
            definition=entry.definition,
        )
        for entry in index.entries
    ]


def _to_row(item: ConvertSingleRequest) -> NormalizedRow:
    code = item.namaste_code.strip() or item.namaste_code
    term = (item.description or "").strip() or code
    return NormalizedRow(source_code=code, source_term=term)


def _validate_upload_content_type(content_type: str | None) -> None:
    if not content_type:
        return
    normalized = content_type.split(";")[0].strip().lower()
    if normalized not in ALLOWED_UPLOAD_TYPES:
        raise HTTPException(status_code=400, detail="unsupported file content type")


@app.get("/reference/latest", response_model=ReferenceLatestResponse)
def reference_latest(response: Response) -> ReferenceLatestResponse:
    response.headers["Cache-Control"] = "public, max-age=60"
    return ReferenceLatestResponse(
        latest=CONFIG.reference_version,
        codes_url=f"/reference/{CONFIG.reference_version}/codes",
    )


@app.get("/reference/{version}/codes", response_model=ReferenceCodesResponse)
def reference_codes(
    version: str,
    response: Response,
    system: str | None = Query(default=None),
) -> ReferenceCodesResponse:
    try:
        codes = _load_reference_codes(version)
    except ReferenceDataError as exc:
        raise HTTPException(status_code=404, detail=f"reference version not found: {version}") from exc

    if system:
        codes = [item for item in codes if item.system == system.lower()]

    response.headers["Cache-Control"] = "public, max-age=86400"
    return ReferenceCodesResponse(version=version, system=system, total=len(codes), codes=codes)


@app.get("/search", response_model=SearchResponse)
def search(
    q: str = Query(min_length=1),
    limit: int | None = Query(default=None, ge=1, le=100),
) -> SearchResponse:
    results = get_engine().search(q, limit=limit)
    return SearchResponse(query=q, total=len(results), results=results)


@app.get("/mapping/{code}", response_model=ConvertSingleResponse)
def mapping_for_code(code: str) -> ConvertSingleResponse:
    result = get_engine().lookup(code)
    if result is None:
        raise HTTPException(status_code=404, detail=f"NAMASTE code not found: {code}")
    return ConvertSingleResponse(data=result)


@app.post("/convert/single", response_model=ConvertSingleResponse)
def convert_single(body: ConvertSingleRequest) -> ConvertSingleResponse:
    return ConvertSingleResponse(data=get_engine().map(_to_row(body)))


@app.post("/convert/batch", response_model=ConvertBatchResponse)
def convert_batch(body: ConvertBatchRequest) -> ConvertBatchResponse:
    results = get_engine().map_many(_to_row(item) for item in body.codes)
    return ConvertBatchResponse(total=len(results), data=results)


@app.post("/upload", response_model=UploadResponse)
async def upload(
    file: UploadFile = File(...),
    email: str = Form(..., min_length=1),
    user_id: str | None = Form(default=None),
) -> UploadResponse:
    _validate_upload_content_type(file.content_type)
    payload = await file.read()
    if not payload:
        raise HTTPException(status_code=400, detail="empty file")
    if len(payload) > CONFIG.max_upload_bytes:
        raise HTTPException(status_code=413, detail="file too large")

    submitter = Submitter(user_id=user_id or email, email=email)
    filename = file.filename or "upload.csv"

    try:
        outcome = get_pipeline().run(payload, filename, submitter)
    except NoValidDataError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except PersistenceError as exc:
        if CONFIG.strict_persistence or exc.bundle is None:
            raise HTTPException(status_code=503, detail="storage_unavailable") from exc
        logger.warning("returning unsaved results for %s: %s", filename, exc)
        return UploadResponse(
            fileId=exc.file_id,
            total=len(exc.results),
            statusCounts=ConversionResult(results=exc.results, bundle=exc.bundle).status_counts,
            results=exc.results,
            bundle=exc.bundle.to_dict(),
            warnings=["persistence_failed"],
        )
    except Exception as exc:
        logger.exception("upload failed")
        raise HTTPException(status_code=500, detail="internal_error") from exc

    return UploadResponse(
        fileId=outcome.file_id,
        total=len(outcome.results),
        statusCounts=outcome.status_counts,
        results=outcome.results,
        bundle=outcome.bundle.to_dict(),
        warnings=outcome.warnings,
    )

