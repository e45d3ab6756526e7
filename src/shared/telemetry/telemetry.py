"""OpenTelemetry tracing setup"""

import logging

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import \
    OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.redis import RedisInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (BatchSpanProcessor,
                                            ConsoleSpanExporter)
from sqlalchemy.ext.asyncio import AsyncEngine

logger = logging.getLogger(__name__)

EXPORTERS = ("console", "otlp", "none")


class TelemetryConfig:
    """
    Tracer provider lifecycle plus library instrumentation.

    Exporters: "console" for local runs, "otlp" for a collector (Tempo,
    Jaeger, Datadog agent), "none" to keep spans in-process only.
    """

    def __init__(self, service_name: str, service_version: str, enabled: bool = True):
        self.service_name = service_name
        self.service_version = service_version
        self.enabled = enabled
        self.tracer_provider: TracerProvider | None = None

    def setup_telemetry(
        self, exporter_type: str = "console", otlp_endpoint: str | None = None
    ) -> TracerProvider | None:
        if not self.enabled:
            logger.info("Telemetry disabled")
            return None

        resource = Resource(
            attributes={SERVICE_NAME: self.service_name, SERVICE_VERSION: self.service_version}
        )
        self.tracer_provider = TracerProvider(resource=resource)

        if exporter_type == "otlp" and otlp_endpoint:
            exporter = OTLPSpanExporter(
                endpoint=otlp_endpoint, insecure=otlp_endpoint.startswith("http://")
            )
            self.tracer_provider.add_span_processor(BatchSpanProcessor(exporter))
        elif exporter_type == "console":
            self.tracer_provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
        elif exporter_type != "none":
            logger.warning(f"Unknown exporter type '{exporter_type}', spans will not be exported")

        trace.set_tracer_provider(self.tracer_provider)
        logger.info(
            f"OpenTelemetry initialized: service={self.service_name}, exporter={exporter_type}"
        )
        return self.tracer_provider

    def instrument_fastapi(self, app: FastAPI) -> None:
        if not self.tracer_provider:
            return
        FastAPIInstrumentor.instrument_app(
            app, tracer_provider=self.tracer_provider, excluded_urls="/health"
        )
        logger.info("FastAPI instrumentation enabled")

    def instrument_sqlalchemy(self, engine: AsyncEngine) -> None:
        if not self.tracer_provider:
            return
        SQLAlchemyInstrumentor().instrument(
            engine=engine.sync_engine, tracer_provider=self.tracer_provider
        )
        logger.info("SQLAlchemy instrumentation enabled")

    def instrument_redis(self) -> None:
        if not self.tracer_provider:
            return
        RedisInstrumentor().instrument(tracer_provider=self.tracer_provider)
        logger.info("Redis instrumentation enabled")

    def shutdown(self) -> None:
        """Flush remaining spans"""
        if self.tracer_provider:
            self.tracer_provider.shutdown()
            logger.info("Telemetry shutdown complete")


def get_tracer(name: str) -> trace.Tracer:
    """
    Get tracer for creating custom spans

    Usage:
        tracer = get_tracer(__name__)
        with tracer.start_as_current_span("operation_name"):
            ...
    """
    return trace.get_tracer(name)
