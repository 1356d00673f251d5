"""
Recipe Book Presentation Helpers
Tailwind class merging and recipe card view-models for the web client
"""

import re
from typing import Dict, List, Optional, Tuple

from schemas.recipe_schemas import RecipeCard, RecipeResponse
from utils.text_utils import total_minutes

MAX_VISIBLE_TAGS = 2
PLACEHOLDER_IMAGE = "/placeholder.svg"

_SIZES = r"(xs|sm|base|lg|xl|[2-9]xl)"
_ALIGN = r"(left|center|right|justify|start|end)"
_WEIGHTS = r"(thin|extralight|light|normal|medium|semibold|bold|extrabold|black)"

# (group, pattern) pairs; the first matching pattern decides the group
CLASS_GROUPS: List[Tuple[str, "re.Pattern"]] = [
    (name, re.compile(pattern))
    for name, pattern in [
        ("display", r"^(block|inline-block|inline|flex|inline-flex|grid|inline-grid|hidden|contents|table)$"),
        ("position", r"^(static|fixed|absolute|relative|sticky)$"),
        ("p", r"^p-"), ("px", r"^px-"), ("py", r"^py-"),
        ("pt", r"^pt-"), ("pr", r"^pr-"), ("pb", r"^pb-"), ("pl", r"^pl-"),
        ("m", r"^-?m-"), ("mx", r"^-?mx-"), ("my", r"^-?my-"),
        ("mt", r"^-?mt-"), ("mr", r"^-?mr-"), ("mb", r"^-?mb-"), ("ml", r"^-?ml-"),
        ("gap", r"^gap-\d"), ("gap-x", r"^gap-x-"), ("gap-y", r"^gap-y-"),
        ("w", r"^w-"), ("h", r"^h-"),
        ("min-w", r"^min-w-"), ("max-w", r"^max-w-"), ("min-h", r"^min-h-"), ("max-h", r"^max-h-"),
        ("font-size", r"^text-" + _SIZES + r"$"),
        ("text-align", r"^text-" + _ALIGN + r"$"),
        ("text-color", r"^text-"),
        ("font-weight", r"^font-" + _WEIGHTS + r"$"),
        ("font-family", r"^font-(sans|serif|mono)$"),
        ("bg-color", r"^bg-(?!(cover|contain|auto|fixed|local|scroll|none|gradient-))"),
        ("border-width", r"^border(-[0-9]+)?$"),
        ("border-color", r"^border-(?!(solid|dashed|dotted|double|none|[xytrbl]-|[xytrbl]$))"),
        ("rounded", r"^rounded(-(none|sm|md|lg|xl|2xl|3xl|full))?$"),
        ("shadow", r"^shadow(-(sm|md|lg|xl|2xl|inner|none))?$"),
        ("opacity", r"^opacity-"),
        ("z", r"^z-"),
        ("fill", r"^fill-"),
        ("flex-direction", r"^flex-(row|col)(-reverse)?$"),
        ("flex-shrink", r"^(flex-)?shrink(-0)?$"),
        ("items", r"^items-"),
        ("justify", r"^justify-(start|end|center|between|around|evenly|normal|stretch)$"),
        ("leading", r"^leading-"),
        ("line-clamp", r"^line-clamp-"),
        ("overflow", r"^overflow-(auto|hidden|clip|visible|scroll)$"),
        ("cursor", r"^cursor-"),
        ("transition", r"^transition(-[a-z]+)?$"),
        ("duration", r"^duration-"),
        ("scale", r"^scale-"),
    ]
]

# Groups that also override narrower groups
CONFLICTS: Dict[str, Tuple[str, ...]] = {
    "p": ("px", "py", "pt", "pr", "pb", "pl"),
    "px": ("pr", "pl"),
    "py": ("pt", "pb"),
    "m": ("mx", "my", "mt", "mr", "mb", "ml"),
    "mx": ("mr", "ml"),
    "my": ("mt", "mb"),
    "gap": ("gap-x", "gap-y"),
}


def _split_modifiers(cls: str) -> Tuple[str, str]:
    """("hover:text-accent") -> ("hover", "text-accent")"""
    modifiers, _, base = cls.rpartition(":")
    return modifiers, base.lstrip("!")


def _class_group(base: str) -> Optional[str]:
    for group, pattern in CLASS_GROUPS:
        if pattern.match(base):
            return group
    return None


def _flatten(values) -> List[str]:
    classes = []
    for value in values:
        if not value:
            continue
        if isinstance(value, str):
            classes.extend(value.split())
        elif isinstance(value, dict):
            classes.extend(cls for key, enabled in value.items() if enabled for cls in key.split())
        elif isinstance(value, (list, tuple)):
            classes.extend(_flatten(value))
    return classes


def cn(*inputs) -> str:
    """
    Join class names, dropping falsy values; conflicting Tailwind
    utilities resolve to the last one given.

    >>> cn("px-2 py-2", "p-4")
    'p-4'
    >>> cn("text-red-500", False and "hidden", "bg-blue-500")
    'text-red-500 bg-blue-500'
    """
    seen = set()
    kept = []
    for cls in reversed(_flatten(inputs)):
        modifiers, base = _split_modifiers(cls)
        group = _class_group(base)
        if group is None:
            if cls not in kept:
                kept.append(cls)
            continue

        key = (modifiers, group)
        if key in seen:
            continue
        seen.add(key)
        seen.update((modifiers, narrower) for narrower in CONFLICTS.get(group, ()))
        kept.append(cls)

    return " ".join(reversed(kept))


def favorite_icon_class(is_favorite: bool) -> str:
    return cn(
        "h-5 w-5 ml-2 cursor-pointer transition-all duration-200 flex-shrink-0",
        is_favorite and "text-accent fill-current",
        not is_favorite and "text-muted-foreground hover:text-accent hover:scale-110",
    )


def build_recipe_card(recipe: RecipeResponse, is_favorite: bool = False) -> RecipeCard:
    """Card view-model: two visible tags, the rest summarized as "+N" """
    visible_tags = list(recipe.tags[:MAX_VISIBLE_TAGS])
    hidden = max(0, len(recipe.tags) - MAX_VISIBLE_TAGS)

    return RecipeCard(
        id=recipe.id,
        title=recipe.title,
        description=recipe.description,
        image_url=recipe.image_url or PLACEHOLDER_IMAGE,
        total_time=f"{total_minutes(recipe.prep_time, recipe.cook_time)} min",
        servings_label=f"{recipe.servings} porções",
        rating=recipe.rating,
        category=recipe.category,
        visible_tags=visible_tags,
        hidden_tag_count=hidden,
        overflow_badge=f"+{hidden}" if hidden else None,
        is_favorite=is_favorite,
        favorite_icon_class=favorite_icon_class(is_favorite),
    )
