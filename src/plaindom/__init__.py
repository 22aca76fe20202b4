"""Policy layer for turning document trees into normalized plaintext."""

from plaindom.dnm.parameters import DNMParameters, RuntimeParseData

__all__ = ["DNMParameters", "RuntimeParseData"]
