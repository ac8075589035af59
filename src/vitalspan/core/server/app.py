"""Application factory for the vitalspan MCP server.

This module provides:
- create_app() for testability (integration tests create fresh server instances)
- Module-level `mcp` variable for FastMCP discovery
"""

from __future__ import annotations

import logging

from fastmcp import FastMCP

from vitalspan.core.config.settings import get_settings
from vitalspan.core.storage.database import CacheDatabase, DatabaseError
from vitalspan.core.storage.encryption import EncryptionError, FieldEncryptor
from vitalspan.core.storage.kv_store import (
    EncryptedKeyValueStore,
    InMemoryKeyValueStore,
    KeyValueStore,
    SQLiteKeyValueStore,
)
from vitalspan.domains.impact.connectors import HealthDataSource
from vitalspan.domains.impact.connectors.providers import MockHealthDataSource
from vitalspan.domains.impact.domain_logic.aggregator import ImpactAggregator
from vitalspan.domains.impact.domain_logic.daily_target_cache import DailyTargetCache
from vitalspan.domains.impact.domain_logic.interaction_engine import InteractionEngine
from vitalspan.domains.impact.domain_logic.life_projection import LifeProjectionService
from vitalspan.domains.impact.domain_logic.registry import CalculatorRegistry
from vitalspan.domains.impact.domain_logic.target_solver import TargetSolver
from vitalspan.domains.impact.tools.lifespan_impact_tools import register_lifespan_impact_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "vitalspan"
SERVER_VERSION = "0.1.0"


def _create_store(cache_db_path: str, encryption_key: str) -> tuple[KeyValueStore, str]:
    """Build the target cache store. Returns the store and a label describing it."""
    store: KeyValueStore
    label = "memory"
    if cache_db_path:
        try:
            db = CacheDatabase(cache_db_path)
            db.initialize()
            store = SQLiteKeyValueStore(db)
            label = "sqlite"
            logger.info(
                "Target cache initialized: %s (schema v%d)",
                cache_db_path,
                db.get_schema_version(),
            )
        except DatabaseError as exc:
            logger.error("Failed to open target cache: %s", exc)
            logger.warning("Continuing with an in-memory target cache")
            store = InMemoryKeyValueStore()
    else:
        store = InMemoryKeyValueStore()

    if encryption_key:
        try:
            store = EncryptedKeyValueStore(store, FieldEncryptor(encryption_key))
            label = f"encrypted-{label}"
        except EncryptionError as exc:
            logger.error("Invalid ENCRYPTION_KEY: %s", exc)
            logger.warning("Cached targets will be stored unencrypted")
    return store, label


def create_app(
    *,
    data_source_override: HealthDataSource | None = None,
    store_override: KeyValueStore | None = None,
) -> FastMCP:
    """Create and configure the vitalspan MCP server.

    This is the main application factory. It:
    1. Creates the FastMCP server instance
    2. Builds the calculator registry, interaction engine, and aggregator
    3. Builds the target solver and its persistent daily target cache
    4. Initializes the health data source (mock unless overridden)
    5. Registers all tools
    """
    settings = get_settings()

    # --- Server instance ---
    server = FastMCP(
        SERVER_NAME,
        instructions=(
            "Lifespan impact engine. Converts health metrics into estimated "
            "minutes of life gained or lost per day, accounts for interactions "
            "between metrics, and solves for the daily targets that would "
            "neutralise or improve each metric's impact."
        ),
    )

    # --- Impact engine ---
    registry = CalculatorRegistry.default()
    engine = InteractionEngine()
    aggregator = ImpactAggregator(registry, engine)
    projection_service = LifeProjectionService(aggregator)
    solver = TargetSolver(
        registry,
        max_iterations=settings.solver_max_iterations,
        tolerance_minutes=settings.solver_tolerance_minutes,
        improvement_factor=settings.positive_improvement_factor,
    )
    logger.info(
        "Impact engine ready: %d calculators, %d interaction rules",
        len(registry.supported_metrics()),
        len(engine.rules),
    )

    # --- Target cache ---
    if store_override is not None:
        store: KeyValueStore = store_override
        store_label = "override"
    else:
        store, store_label = _create_store(settings.cache_db_path, settings.encryption_key)
    target_cache = DailyTargetCache(
        store, solver, drift_threshold=settings.target_drift_threshold
    )

    # --- Health data source ---
    if data_source_override is not None:
        data_source = data_source_override
    else:
        data_source = MockHealthDataSource()
        logger.info("Using mock health data source")

    # --- Register tools ---
    @server.tool
    def health_check() -> dict:
        """Check server health and return basic status information."""
        return {
            "status": "ok",
            "server": SERVER_NAME,
            "version": SERVER_VERSION,
            "calculators_loaded": len(registry.supported_metrics()),
            "interaction_rules": len(engine.rules),
            "target_cache": store_label,
            "data_source": data_source.data_source,
        }

    register_lifespan_impact_tools(server, aggregator, target_cache, projection_service, data_source)
    logger.info("Lifespan impact tools registered")

    return server


# Module-level instance for FastMCP discovery.
# Lazy: only created when this module is loaded directly (not when tests import create_app).
def __getattr__(name: str):
    if name == "mcp":
        global mcp  # noqa: PLW0603
        mcp = create_app()
        return mcp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
