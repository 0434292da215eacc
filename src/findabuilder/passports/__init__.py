"""Identity source (Talent Protocol passports) module."""

from findabuilder.passports.client import PassportClient, PassportLookupError

__all__ = ["PassportClient", "PassportLookupError"]
