import logging
from dataclasses import dataclass

from .enums import MAX_RESULTS, CaseMode, MatcherBackend

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """애플리케이션 설정"""

    # 매처 설정
    matcher_backend: MatcherBackend = MatcherBackend.FZF
    case_mode: CaseMode = CaseMode.SMART
    extended_syntax: bool = True  # fzf 확장 문법 ('exact, ^prefix, suffix$, !not, a | b)
    fuzzy_threshold: float = 0.8  # rapidfuzz 유사도 임계값 (0.0~1.0)

    # 검색 엔진 설정
    result_limit: int = MAX_RESULTS  # 결과 최대 개수 (100 초과 불가)
    max_workers: int = 1  # 검색 워커 스레드 수
    scan_budget_ms: int | None = None  # 스캔 시간 예산 (None이면 무제한)
    shutdown_timeout: float | None = None  # shutdown 대기 시간 (None이면 무한 대기)

    # 로깅
    log_level: str = "WARNING"

    # OpenTelemetry 설정
    otel_enabled: bool = False  # OpenTelemetry 활성화
    otel_endpoint: str = "http://localhost:4317"  # OTLP gRPC endpoint
    otel_sample_rate: float = 1.0  # 샘플링 비율 (0.0~1.0)
    otel_service_name: str = "scrollfind"  # 서비스 이름
    environment: str = "development"  # 환경 (development, staging, production)

    def __post_init__(self):
        """값 검증 및 정규화"""
        self.matcher_backend = MatcherBackend(self.matcher_backend)
        self.case_mode = CaseMode(self.case_mode)

        if self.result_limit < 1:
            raise ValueError(f"result_limit must be >= 1, got {self.result_limit}")
        if self.result_limit > MAX_RESULTS:
            logger.warning(f"result_limit {self.result_limit} exceeds cap, using {MAX_RESULTS}")
            self.result_limit = MAX_RESULTS

        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")

        if not 0.0 <= self.fuzzy_threshold <= 1.0:
            raise ValueError(f"fuzzy_threshold must be within [0, 1], got {self.fuzzy_threshold}")

        if self.scan_budget_ms is not None and self.scan_budget_ms <= 0:
            raise ValueError(f"scan_budget_ms must be positive, got {self.scan_budget_ms}")

    @classmethod
    def from_env(cls) -> "Config":
        """환경변수에서 설정 로드 (.env 파일 자동 로드)"""
        import os

        from dotenv import load_dotenv

        load_dotenv()

        return cls(
            matcher_backend=MatcherBackend(
                os.getenv("SCROLLFIND_MATCHER", MatcherBackend.FZF.value)
            ),
            case_mode=CaseMode(os.getenv("SCROLLFIND_CASE", CaseMode.SMART.value)),
            extended_syntax=os.getenv("SCROLLFIND_EXTENDED", "true").lower() == "true",
            fuzzy_threshold=float(os.getenv("SCROLLFIND_FUZZY_THRESHOLD", "0.8")),
            result_limit=int(os.getenv("SCROLLFIND_RESULT_LIMIT", str(MAX_RESULTS))),
            max_workers=int(os.getenv("SCROLLFIND_MAX_WORKERS", "1")),
            scan_budget_ms=(
                int(budget) if (budget := os.getenv("SCROLLFIND_SCAN_BUDGET_MS")) else None
            ),
            shutdown_timeout=(
                float(timeout) if (timeout := os.getenv("SCROLLFIND_SHUTDOWN_TIMEOUT")) else None
            ),
            log_level=os.getenv("SCROLLFIND_LOG_LEVEL", "WARNING").upper(),
            otel_enabled=os.getenv("OTEL_ENABLED", "false").lower() == "true",
            otel_endpoint=os.getenv("OTEL_ENDPOINT", "http://localhost:4317"),
            otel_sample_rate=float(os.getenv("OTEL_SAMPLE_RATE", "1.0")),
            otel_service_name=os.getenv("OTEL_SERVICE_NAME", "scrollfind"),
            environment=os.getenv("ENVIRONMENT", "development"),
        )
