"""OpenTelemetry 초기화 및 관리

검색 태스크 단위의 Trace와 스캔 시간 Metric을 설정합니다.
- 기본은 비활성화 (NoOp tracer/meter 반환)
- OTLP Exporter는 선택 설치 (pip install scrollfind[otlp])
"""

import logging
from typing import Optional

from opentelemetry import metrics, trace

logger = logging.getLogger(__name__)


class TelemetryManager:
    """OpenTelemetry 초기화 및 관리"""

    def __init__(
        self,
        service_name: str,
        service_version: str = "0.1.0",
        environment: str = "development",
        enabled: bool = True,
        otlp_endpoint: str = "http://localhost:4317",
        sample_rate: float = 1.0,
    ):
        self.enabled = enabled
        self.service_name = service_name

        if not enabled:
            logger.debug("OpenTelemetry disabled")
            return

        try:
            from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import (
                OTLPMetricExporter,
            )
            from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
        except ImportError as e:
            logger.warning(f"OTLP exporter not installed, telemetry disabled: {e}")
            self.enabled = False
            return

        from opentelemetry.sdk.metrics import MeterProvider
        from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
        from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
        from opentelemetry.sdk.trace import TracerProvider
        from opentelemetry.sdk.trace.export import BatchSpanProcessor
        from opentelemetry.sdk.trace.sampling import TraceIdRatioBased

        # Resource 생성
        resource = Resource.create(
            {
                SERVICE_NAME: service_name,
                SERVICE_VERSION: service_version,
                "deployment.environment": environment,
            }
        )

        # Trace Provider 설정
        sampler = TraceIdRatioBased(sample_rate)
        trace_provider = TracerProvider(resource=resource, sampler=sampler)
        trace_provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True))
        )
        trace.set_tracer_provider(trace_provider)

        # Metric Provider 설정
        metric_reader = PeriodicExportingMetricReader(
            OTLPMetricExporter(endpoint=otlp_endpoint, insecure=True)
        )
        metrics.set_meter_provider(
            MeterProvider(resource=resource, metric_readers=[metric_reader])
        )

        logger.info(
            f"OpenTelemetry initialized: service={service_name}, "
            f"endpoint={otlp_endpoint}, sample_rate={sample_rate}"
        )

    def get_tracer(self, name: str):
        """Tracer 가져오기"""
        if not self.enabled:
            return trace.get_tracer(name)
        return trace.get_tracer(name, self.service_name)

    def get_meter(self, name: str):
        """Meter 가져오기"""
        if not self.enabled:
            return metrics.get_meter(name)
        return metrics.get_meter(name, self.service_name)


# 전역 인스턴스 (Bootstrap에서 초기화)
_telemetry_manager: Optional[TelemetryManager] = None


def init_telemetry(config) -> TelemetryManager:
    """TelemetryManager 초기화

    Args:
        config: Config 인스턴스

    Returns:
        TelemetryManager 인스턴스
    """
    global _telemetry_manager
    _telemetry_manager = TelemetryManager(
        service_name=config.otel_service_name,
        enabled=config.otel_enabled,
        otlp_endpoint=config.otel_endpoint,
        sample_rate=config.otel_sample_rate,
        environment=config.environment,
    )
    return _telemetry_manager


def get_tracer(name: str):
    """편의 함수: Tracer 가져오기 (비활성화 시 NoOp tracer)"""
    if _telemetry_manager:
        return _telemetry_manager.get_tracer(name)
    return trace.get_tracer(name)


def get_meter(name: str):
    """편의 함수: Meter 가져오기 (비활성화 시 NoOp meter)"""
    if _telemetry_manager:
        return _telemetry_manager.get_meter(name)
    return metrics.get_meter(name)
