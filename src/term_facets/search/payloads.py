"""YAML serialization of multi-valued term payloads.

Documents store their facet terms in a single value slot as a YAML list:

    - cat
    - dog

A payload that is empty, not a list, or not valid YAML carries no terms.
"""

from collections.abc import Iterable
import logging
from typing import Any

import yaml


logger = logging.getLogger(__name__)


def decode_terms(payload: Any) -> list[str]:
    """Decode a stored payload into its ordered term strings.

    Args:
        payload: Serialized payload as stored in the value slot

    Returns:
        The scalar list items converted to strings, or an empty list when the
        payload does not decode to a list. Null items and nested lists or
        mappings are dropped; booleans are spelled ``true`` / ``false``.

    Example:
        >>> decode_terms("- cat\\n- dog\\n")
        ['cat', 'dog']
        >>> decode_terms("not: [a list")
        []
    """
    if not isinstance(payload, str) or not payload:
        return []

    try:
        decoded = yaml.safe_load(payload)
    except yaml.YAMLError as exc:
        logger.debug("Ignoring malformed term payload: %s", exc)
        return []

    if not isinstance(decoded, list):
        return []

    return [_scalar_text(item) for item in decoded if item is not None and not isinstance(item, (list, dict))]


def _scalar_text(item: Any) -> str:
    # YAML reads unquoted yes/no/true/false as booleans
    if isinstance(item, bool):
        return "true" if item else "false"
    return str(item)


def encode_terms(terms: Iterable[str]) -> str:
    """Serialize terms into the YAML list format read by :func:`decode_terms`."""
    return yaml.safe_dump([str(term) for term in terms], default_flow_style=False, allow_unicode=True)
