"""API Dependencies — wires adapters and services into route handlers.

Invariants:
    - Routes receive services through Depends, never construct adapters themselves
    - get_store/get_storage fail loudly when called before startup

Design Decisions:
    - Adapters are module singletons set by the lifespan; tests swap them with
      app.dependency_overrides
"""

from fastapi import Depends

import matsuri.infrastructure.database as database
import matsuri.infrastructure.storage_client as storage_module
from matsuri.config import Settings, get_settings
from matsuri.core.repository_protocols import FestivalStore, ObjectStorage
from matsuri.infrastructure.festival_store import SqlFestivalStore
from matsuri.services.catalog_resolver import CatalogResolver
from matsuri.services.creation_orchestrator import CreationOrchestrator
from matsuri.services.pledge_submitter import PledgeSubmitter


def get_store() -> FestivalStore:
    if not database.db_manager:
        raise RuntimeError("Database not initialized")
    return SqlFestivalStore(database.db_manager)


def get_storage() -> ObjectStorage:
    if not storage_module.storage_client:
        raise RuntimeError("Object storage not initialized")
    return storage_module.storage_client


def get_catalog_resolver(
    store: FestivalStore = Depends(get_store),
    storage: ObjectStorage = Depends(get_storage),
    settings: Settings = Depends(get_settings),
) -> CatalogResolver:
    return CatalogResolver(store, storage, settings)


def get_creation_orchestrator(
    store: FestivalStore = Depends(get_store),
    storage: ObjectStorage = Depends(get_storage),
    settings: Settings = Depends(get_settings),
) -> CreationOrchestrator:
    return CreationOrchestrator(store, storage, settings)


def get_pledge_submitter(
    store: FestivalStore = Depends(get_store),
    storage: ObjectStorage = Depends(get_storage),
    settings: Settings = Depends(get_settings),
) -> PledgeSubmitter:
    return PledgeSubmitter(store, storage, settings)
