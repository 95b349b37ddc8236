from fastapi import Request

from stockroom.core.config import Settings
from stockroom.repositories.store import Store


def get_store(request: Request) -> Store:
    return request.app.state.store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
