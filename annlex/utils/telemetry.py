from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from .logger import logger

DEFAULT_ENDPOINT = "http://localhost:4318/v1/traces"

_tracer_initialized = False

def init_telemetry(endpoint: str = DEFAULT_ENDPOINT, enabled: bool = True):
    """
    Initialize OpenTelemetry tracing for index builds and searches.
    Skipped silently when disabled or when no collector answers.
    """
    global _tracer_initialized
    if _tracer_initialized or not enabled:
        return

    import urllib.request
    import urllib.error
    base_url = endpoint.split("/v1/")[0]
    try:
        with urllib.request.urlopen(base_url, timeout=1):
            pass
    except urllib.error.HTTPError:
        # The collector is there, it just does not serve the base path
        pass
    except OSError:
        logger.info(f"Telemetry collector not reachable at {base_url}. Skipping tracing.")
        return

    provider = TracerProvider()
    provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint)))
    trace.set_tracer_provider(provider)
    _tracer_initialized = True
    logger.info(f"Telemetry initialized, exporting to {endpoint}")

def get_tracer(name: str = "annlex"):
    return trace.get_tracer(name)
