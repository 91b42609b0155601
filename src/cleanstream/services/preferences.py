"""User preference parsing.

A preference map assigns each parent category a threshold severity.
Anything that is not one of off/low/medium/high counts as off.
"""

import json
import logging
from collections.abc import Mapping

from cleanstream.models.segment import Severity
from cleanstream.services.taxonomy import PARENT_CATEGORIES

logger = logging.getLogger(__name__)

UserPreferenceMap = dict[str, Severity]

# Profile applied by the HTTP API when the caller sends no preferences
FAMILY_FRIENDLY_PREFERENCES: Mapping[str, Severity] = {
    "nudity": Severity.HIGH,
    "sex": Severity.HIGH,
    "violence": Severity.MEDIUM,
    "language": Severity.OFF,
    "drugs": Severity.OFF,
    "fear": Severity.OFF,
}


def parse_preferences(
    raw: Mapping[str, object] | None,
    defaults: Mapping[str, Severity] | None = None,
) -> UserPreferenceMap:
    """Build a preference map from loosely typed values.

    Args:
        raw: Category -> threshold string (e.g. from a query string)
        defaults: Thresholds to start from before applying ``raw``

    Returns:
        Category -> Severity; unknown threshold strings become OFF
    """
    prefs: UserPreferenceMap = dict(defaults or {})
    for category, value in (raw or {}).items():
        if not isinstance(value, (str, Severity)):
            value = None
        prefs[str(category)] = Severity.coerce(value)
    return prefs


def preferences_from_query(
    params: Mapping[str, str],
    defaults: Mapping[str, Severity] = FAMILY_FRIENDLY_PREFERENCES,
) -> UserPreferenceMap:
    """Read preferences from HTTP query parameters.

    A ``config`` parameter holding a JSON object wins. Otherwise (or when
    ``config`` is not valid JSON) individual per-category parameters such
    as ``violence=medium`` are used. Both are layered over ``defaults``.
    """
    config = params.get("config")
    if config:
        try:
            decoded = json.loads(config)
        except json.JSONDecodeError:
            logger.warning("Ignoring malformed preference config: %r", config)
        else:
            if isinstance(decoded, dict):
                return parse_preferences(decoded, defaults)
            logger.warning("Ignoring non-object preference config: %r", config)

    individual = {
        category: params[category]
        for category in PARENT_CATEGORIES
        if params.get(category)
    }
    return parse_preferences(individual, defaults)
