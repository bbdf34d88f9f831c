from dataclasses import dataclass

from src.books_api.core.services import DbSessionService
from src.books_api.runtime.config.config_data import ConfigData


@dataclass
class ApplicationDependencies:
    config: ConfigData
    database_service: DbSessionService
