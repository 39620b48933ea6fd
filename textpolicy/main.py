from typing import Optional

from fastapi import FastAPI, UploadFile, File, HTTPException, Query
from .audit import audit_bytes
from .config import Settings
from .context import RuntimeContext, get_context, set_context
from .errors import NoEncodingError
from .logs import setup_logging
from .models import AuditResponse, HealthResponse, ResolveRequest, ResolveResponse, classify
from .resolver import record_diagnostics, text_encoding

settings = Settings()
setup_logging(settings)
set_context(RuntimeContext.from_settings(settings))

app = FastAPI(
    title="text-encoding-policy",
    description="Default text-encoding resolution and audit",
    version="0.1.0",
)

@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}

@app.post("/resolve", response_model=ResolveResponse)
async def resolve(req: ResolveRequest):
    ctx = get_context()
    with record_diagnostics(req.stacklevel) as diagnostics:
        encoding = text_encoding(req.encoding, req.stacklevel, context=ctx)

    return {
        "encoding": encoding,
        "requested": classify(req.encoding),
        "dev_mode": ctx.dev_mode,
        "diagnostics": diagnostics,
    }

@app.post("/audit", response_model=AuditResponse)
async def audit(file: UploadFile = File(...), encoding: Optional[str] = Query(default=None)):
    raw = await file.read()
    if not raw:
        raise HTTPException(status_code=422, detail="Empty upload")

    try:
        return audit_bytes(raw, encoding, context=get_context())
    except LookupError:
        raise HTTPException(status_code=422, detail=f"Unknown text encoding: {encoding}")
    except NoEncodingError as e:
        raise HTTPException(status_code=500, detail=str(e))
