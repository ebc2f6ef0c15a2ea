"""Build-time modest-wear classification."""

from dataclasses import dataclass

from catalog_builder.models import ProductSource

__all__ = ["ModestyRules", "DEFAULT_MODESTY_RULES", "is_modest"]


@dataclass(frozen=True)
class ModestyRules:
    """Reserved values that mark a product as modest wear."""

    brand: str = "brand-mina-lidya-modest"
    category: str = "tesettur"
    neckline: str = "hakim-yaka"
    tag_marker: str = "tesettür"


DEFAULT_MODESTY_RULES = ModestyRules()


def is_modest(source: ProductSource, rules: ModestyRules = DEFAULT_MODESTY_RULES) -> bool:
    """Return True when any modesty signal is present.

    This is a heuristic; misses are picked up again by the server's
    keyword pass.
    """
    if source.is_modest is True or source.is_modest == "yes":
        return True
    if source.brand == rules.brand:
        return True
    if source.category == rules.category:
        return True
    if source.neckline == rules.neckline:
        return True
    marker = rules.tag_marker.lower()
    return any(marker in tag.lower() for tag in source.tags)
