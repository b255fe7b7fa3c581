"""Application settings configuration."""

from neuroglia.hosting.abstractions import ApplicationSettings


class Settings(ApplicationSettings):
    """Application settings with bearer JWT verification, MongoDB persistence and observability."""

    # Debugging Configuration
    debug: bool = False
    environment: str = "development"  # development, production
    log_level: str = "INFO"

    # Application Configuration
    app_name: str = "Taskboard"
    app_version: str = "1.0.0"
    app_host: str = "127.0.0.1"  # Uvicorn bind address (override in production as needed)
    app_port: int = 5000  # Uvicorn port

    # Observability Configuration
    service_name: str = "taskboard-api"
    service_version: str = app_version
    deployment_environment: str = "development"

    observability_enabled: bool = True
    observability_metrics_enabled: bool = True
    observability_tracing_enabled: bool = True
    observability_logging_enabled: bool = True
    observability_health_endpoint: bool = True
    observability_metrics_endpoint: bool = True
    observability_ready_endpoint: bool = True
    observability_health_path: str = "/health"
    observability_metrics_path: str = "/metrics"
    observability_ready_path: str = "/ready"
    observability_health_checks: list[str] = []

    otel_enabled: bool = False
    otel_endpoint: str = "http://otel-collector:4317"
    otel_protocol: str = "grpc"
    otel_timeout: int = 10
    otel_console_export: bool = False
    otel_instrument_fastapi: bool = True
    otel_instrument_httpx: bool = False
    otel_instrument_logging: bool = True
    otel_instrument_system_metrics: bool = False
    otel_resource_attributes: dict = {}

    # CORS Configuration
    enable_cors: bool = True
    cors_origins: list[str] = ["http://localhost:3000"]

    # Bearer JWT verification (tokens are issued by the identity service)
    jwt_secret_key: str = "your-secret-key-change-in-production"
    jwt_algorithm: str = "HS256"
    auth_require_known_user: bool = True  # Reject tokens whose user is absent from the users collection

    # Persistence Configuration
    database_name: str = "taskboard"
    connection_strings: dict[str, str] = {"mongo": "mongodb://localhost:27017"}
    tasks_collection_name: str = "tasks"
    users_collection_name: str = "users"
    use_in_memory_store: bool = False  # Local runs without MongoDB

    # Task filtering
    task_filter_timezone: str = "UTC"  # IANA zone in which today/week/month boundaries are drawn

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"  # Ignore extra environment variables


app_settings = Settings()
