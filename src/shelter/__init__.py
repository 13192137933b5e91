"""Shelter -- animal adoption records over a REST API."""

from shelter.app import create_shelter_app

__all__ = ["create_shelter_app"]
