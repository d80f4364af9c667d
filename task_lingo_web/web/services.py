from dataclasses import dataclass

from flask import current_app

from task_lingo_lib.client import TranslationClient

from .auth import AuthProviderI
from .stores import TaskStoreI

EXTENSION_KEY = "task_lingo"


@dataclass
class AppServices:
    """Collaborators built by ``create_app`` and shared by the views."""

    task_store: TaskStoreI
    auth_provider: AuthProviderI
    translator: TranslationClient
    user_scoped: bool = True


def get_services() -> AppServices:
    return current_app.extensions[EXTENSION_KEY]
