"""Preflight checks for container startup.

- validates engine thresholds
- loads the event catalog once so YAML errors surface before serving
- prints config summary
"""

from __future__ import annotations

from crowdsafe.config import settings
from crowdsafe.services.event_catalog import EventCatalog


def main():
    settings.validate_runtime()
    catalog = EventCatalog(settings.event_catalog_path)
    print("Preflight OK")
    print(f"ENVIRONMENT={settings.environment}")
    print(f"EVENT_CATALOG={catalog.path} ({len(catalog.list())} events)")
    print(f"POSITION_STALENESS_S={settings.position_staleness_s}")
    print(f"CORS_ORIGINS={settings.cors_origins}")


if __name__ == "__main__":
    main()
