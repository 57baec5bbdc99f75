from __future__ import annotations

from salvato_collect.logging import mask_secrets


def test_mask_secrets_hides_credentials():
    event = mask_secrets(
        None,
        "info",
        {
            "event": "environment_loaded",
            "dropbox_access_token": "sl.abc",
            "salvato_client_secret": None,
            "dropbox_folder": "/Salvato/Auction Lists",
        },
    )

    assert event["dropbox_access_token"] == "***"
    assert event["salvato_client_secret"] == "missing"
    assert event["dropbox_folder"] == "/Salvato/Auction Lists"
