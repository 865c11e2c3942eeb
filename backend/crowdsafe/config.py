from __future__ import annotations

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ------------------------------------------------------------
    # Server
    # ------------------------------------------------------------
    backend_host: str = "0.0.0.0"
    backend_port: int = 5003
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"

    # ------------------------------------------------------------
    # CORS
    # ------------------------------------------------------------
    # Comma-separated origins, e.g.:
    # "http://localhost:5173,http://127.0.0.1:5173"
    cors_origins: str = "http://localhost:5173,http://localhost:5174,http://127.0.0.1:5173,http://127.0.0.1:5174"

    # ------------------------------------------------------------
    # Crowd tracking
    # ------------------------------------------------------------
    position_staleness_s: float = 300.0
    density_threshold_deg: float = 0.0005   # ~50 m box
    restricted_threshold_deg: float = 0.0002  # ~20 m box
    crowd_saturation: float = 5.0  # entities per sample that count as fully crowded

    # ------------------------------------------------------------
    # Route planning
    # ------------------------------------------------------------
    route_result_cap: int = 3

    # ------------------------------------------------------------
    # Event configuration catalog (YAML). None = packaged sample catalog.
    # ------------------------------------------------------------
    event_catalog_path: Optional[str] = None

    @property
    def cors_origins_list(self) -> List[str]:
        return [x.strip() for x in self.cors_origins.split(",") if x.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    def validate_runtime(self) -> None:
        """Fail fast on unusable config."""
        problems = []
        for name in ("position_staleness_s", "density_threshold_deg", "restricted_threshold_deg", "crowd_saturation"):
            if getattr(self, name) <= 0:
                problems.append(f"{name.upper()} must be positive")
        if self.route_result_cap < 1:
            problems.append("ROUTE_RESULT_CAP must be at least 1")
        if self.is_production and "*" in self.cors_origins_list:
            problems.append("CORS_ORIGINS must not be '*' in production")
        if problems:
            raise RuntimeError(f"Invalid configuration: {'; '.join(problems)}")


settings = Settings()
settings.validate_runtime()
