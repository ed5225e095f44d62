"""REST surface for ledgerkit."""

from ledgerkit.api.app import create_app

__all__ = ["create_app"]
