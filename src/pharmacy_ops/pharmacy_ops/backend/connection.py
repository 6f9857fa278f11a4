from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import firebase_admin
from firebase_admin import credentials, firestore, storage


@dataclass
class FirebaseConfig:
    project_id: str
    storage_bucket: str
    api_key: str
    credentials_file: Optional[str] = None


class FirebaseConnection:
    """Singleton-like holder of the firebase_admin app.

    Note: firebase_admin refuses to initialize the same app name twice, so the
    app is created once per process and shared by every tenant.
    """

    _instance: Optional["FirebaseConnection"] = None

    def __init__(self, config: FirebaseConfig):
        self._config = config
        self._app: Any = None

    @classmethod
    def get_instance(cls, config: FirebaseConfig) -> "FirebaseConnection":
        if cls._instance is None:
            cls._instance = FirebaseConnection(config)
        return cls._instance

    @property
    def config(self) -> FirebaseConfig:
        return self._config

    def app(self):
        if self._app is None:
            if self._config.credentials_file:
                cred = credentials.Certificate(self._config.credentials_file)
            else:
                cred = credentials.ApplicationDefault()
            self._app = firebase_admin.initialize_app(
                cred,
                {"projectId": self._config.project_id, "storageBucket": self._config.storage_bucket},
            )
        return self._app

    def firestore(self):
        return firestore.client(app=self.app())

    def bucket(self):
        return storage.bucket(app=self.app())
