"""Loot pipeline exceptions."""


class LootError(Exception):
    """Base class for all loot pipeline errors."""


class RequestMalformed(LootError, ValueError):
    """The request is outside the closed type/subtype domain or count < 1."""


class GenerationAttemptFailed(LootError):
    """A single generation attempt produced no item.

    Recovered by the orchestrator: logged, counted, never aborts a batch.
    """


class ProviderError(GenerationAttemptFailed):
    """The text-generation service rejected or failed the call."""


class ResponseParseError(GenerationAttemptFailed):
    """Raw model output is not parseable as the intermediate item shape."""


class ItemValidationError(GenerationAttemptFailed):
    """The reconciled item does not satisfy the LootItem shape."""


class StorageUnavailable(LootError):
    """The persistent store could not be reached or a write failed."""
