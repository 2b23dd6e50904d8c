"""FastAPI 애플리케이션 메인"""

import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from ..logging_config import configure_logging
from .routers import bills


@asynccontextmanager
async def lifespan(app: FastAPI):
    """애플리케이션 라이프사이클 관리"""
    # 시작 시 로그 설정
    configure_logging()
    yield


# FastAPI 앱 생성
app = FastAPI(
    title="Bill Ledger API",
    description="계산서 소계, 할인, 세금, 최종 합계 계산",
    version="0.1.0",
    lifespan=lifespan
)

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # 프로덕션에서는 특정 도메인만 허용
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 라우터 등록
app.include_router(
    bills.router,
    prefix="/api/v1/bills",
    tags=["계산서"]
)


@app.get("/")
async def root():
    """루트 엔드포인트"""
    return {
        "message": "Bill Ledger API",
        "version": "0.1.0",
        "docs": "/docs"
    }


@app.get("/health")
async def health_check():
    """헬스체크 엔드포인트"""
    return {"status": "healthy"}


def run():
    """uvicorn으로 API 서버 실행"""
    import uvicorn

    uvicorn.run(
        app,
        host=os.getenv("BILL_LEDGER_HOST", "127.0.0.1"),
        port=int(os.getenv("BILL_LEDGER_PORT", "8000"))
    )


if __name__ == "__main__":
    run()
