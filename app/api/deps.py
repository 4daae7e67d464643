from fastapi import Request

from app.services.credential_store import CredentialStore
from app.services.inventory_store import InventoryStore
from app.storage.selector import StorageSelector


def get_storage(request: Request) -> StorageSelector:
    return request.app.state.storage


def get_credential_store(request: Request) -> CredentialStore:
    return request.app.state.credential_store


def get_inventory_store(request: Request) -> InventoryStore:
    return request.app.state.inventory_store
