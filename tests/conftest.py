from __future__ import annotations

import pytest

from salvato_collect.config import Settings


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        salvato_production_url="https://salvato.test/",
        salvato_client_id="client-id",
        salvato_client_secret="client-secret",
        dropbox_access_token="dbx-token",
        dropbox_folder="/Salvato/Test Lists/",
        plumsail_api_url="https://plumsail.test/processes/abc/def/start",
        plumsail_api_key="plumsail-key",
        output_dir=tmp_path,
    )
