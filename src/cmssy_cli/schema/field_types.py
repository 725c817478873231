"""Process-wide field-type vocabulary."""

from __future__ import annotations

import functools

from cmssy_cli.client.errors import FieldTypesUnavailableError, RegistryError
from cmssy_cli.client.registry import RegistryClient
from cmssy_cli.config.manager import ConfigManager
from cmssy_cli.models.field_types import FieldTypeVocabulary


def fetch_vocabulary(client: RegistryClient) -> FieldTypeVocabulary:
    """Fetch the vocabulary through *client*; an empty one is unusable."""
    url = client.settings.url
    try:
        vocabulary = client.fetch_field_types()
    except RegistryError as exc:
        raise FieldTypesUnavailableError(
            f"Could not fetch field types from {url}: {exc}"
        ) from exc
    if not vocabulary.types:
        raise FieldTypesUnavailableError(f"Registry at {url} returned no field types")
    return vocabulary


@functools.lru_cache(maxsize=1)
def get_field_types() -> FieldTypeVocabulary:
    """Fetch the field-type vocabulary once and reuse it for the process.

    Call ``get_field_types.cache_clear()`` to force a refetch.
    """
    with RegistryClient(ConfigManager().resolve_api()) as client:
        return fetch_vocabulary(client)
