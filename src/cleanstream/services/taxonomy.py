"""MovieContentFilter category taxonomy.

Maps the fine-grained flag names of the MCF 1.1.0 specification onto
the nine parent categories used for user preferences.
"""

from types import MappingProxyType

PARENT_CATEGORIES: tuple[str, ...] = (
    "nudity",
    "sex",
    "violence",
    "language",
    "drugs",
    "fear",
    "discrimination",
    "dispensable",
    "commercial",
)

_FLAGS_BY_PARENT: dict[str, tuple[str, ...]] = {
    "nudity": ("bareButtocks", "exposedGenitalia", "fullNudity", "toplessness"),
    "sex": (
        "adultery",
        "analSex",
        "coitus",
        "kissing",
        "masturbation",
        "objectification",
        "oralSex",
        "premaritalSex",
        "promiscuity",
        "prostitution",
    ),
    "violence": (
        "choking",
        "crueltyToAnimals",
        "culturalViolence",
        "desecration",
        "emotionalViolence",
        "kicking",
        "massacre",
        "murder",
        "punching",
        "rape",
        "slapping",
        "slavery",
        "stabbing",
        "torture",
        "warfare",
        "weapons",
    ),
    "language": ("blasphemy", "nameCalling", "sexualDialogue", "swearing", "vulgarity"),
    "drugs": (
        "alcohol",
        "antipsychotics",
        "cigarettes",
        "depressants",
        "gambling",
        "hallucinogens",
        "stimulants",
    ),
    "fear": (
        "accident",
        "acrophobia",
        "aliens",
        "arachnophobia",
        "claustrophobia",
        "death",
        "explosion",
        "fire",
        "ghosts",
        "vampires",
    ),
    "discrimination": ("racism", "sexism", "homophobia"),
    "dispensable": ("tedious",),
    "commercial": ("productPlacement",),
}


def _build_parent_map() -> dict[str, str]:
    parents: dict[str, str] = {}
    for parent, flags in _FLAGS_BY_PARENT.items():
        parents[parent] = parent
        for flag in flags:
            parents[flag] = parent
    return parents


# Read-only flag -> parent category table
CATEGORY_PARENTS = MappingProxyType(_build_parent_map())

DEFAULT_DESCRIPTIONS = MappingProxyType(
    {
        "nudity": "Nudity",
        "sex": "Sexual content",
        "violence": "Violence",
        "language": "Strong language",
        "drugs": "Drug/alcohol use",
        "fear": "Frightening scene",
        "discrimination": "Discriminatory content",
        "dispensable": "Skippable scene",
        "commercial": "Product placement",
    }
)


def resolve_parent(flag: str) -> str:
    """Return the parent category of a flag, or the flag itself if unmapped."""
    return CATEGORY_PARENTS.get(flag, flag)


def is_parent_category(name: str) -> bool:
    """Check whether a name is one of the nine parent categories."""
    return name in PARENT_CATEGORIES


def describe_category(category: str) -> str:
    """Human-readable label for a parent category."""
    return DEFAULT_DESCRIPTIONS.get(category, category)
