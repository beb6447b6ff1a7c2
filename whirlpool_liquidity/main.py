from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from whirlpool_liquidity.api.routers.liquidity_distribution import router as liquidity_distribution_router

app = FastAPI(title="Whirlpool Liquidity API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(liquidity_distribution_router)
