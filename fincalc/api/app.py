"""FastAPI application entry point."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fincalc.api.routes import amortization, analysis, bond, cashflow, depreciation, tvm
from fincalc.api.schemas import ErrorResponse
from fincalc.engine.errors import FinancialError

logger = logging.getLogger(__name__)

app = FastAPI(
    title="fincalc",
    description="Financial calculator engine: TVM, cash flows, amortization, bonds, depreciation",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(tvm.router)
app.include_router(cashflow.router)
app.include_router(amortization.router)
app.include_router(bond.router)
app.include_router(depreciation.router)
app.include_router(analysis.router)


@app.exception_handler(FinancialError)
async def financial_error_handler(request: Request, exc: FinancialError):
    logger.warning("%s on %s: %s", type(exc).__name__, request.url.path, exc)
    return JSONResponse(
        status_code=422,
        content=ErrorResponse(error=type(exc).__name__, detail=str(exc)).model_dump(),
    )


@app.get("/health")
async def health():
    return {"status": "ok"}
