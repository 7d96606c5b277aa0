#!/usr/bin/env python3
"""
Errors
======
Exceptions raised by the model. Every error is raised before the model is
touched, so a failed call never leaves partial state behind.
"""


class WordChainError(Exception):
    """Base class for all wordchain errors."""


class InvalidArgument(WordChainError, ValueError):
    """A generation count was not a positive finite integer."""


class EmptyModel(WordChainError, RuntimeError):
    """Generation was attempted on a model with no entries."""


class UnsupportedOperation(WordChainError, RuntimeError):
    """Sentence generation on a model that never saw a sentence boundary."""


class MalformedSnapshot(WordChainError, ValueError):
    """Snapshot data is missing required fields or is inconsistent."""


__all__ = [
    'WordChainError',
    'InvalidArgument',
    'EmptyModel',
    'UnsupportedOperation',
    'MalformedSnapshot',
]
