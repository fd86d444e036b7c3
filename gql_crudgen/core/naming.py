"""Name helpers for generated root fields."""

import re

_IRREGULAR_PLURALS = {
    "person": "people",
    "child": "children",
    "man": "men",
    "woman": "women",
    "mouse": "mice",
    "datum": "data",
    "medium": "media",
    "criterion": "criteria",
    "index": "indices",
    "matrix": "matrices",
    "vertex": "vertices",
}

_UNCOUNTABLE = {"news", "information", "equipment", "series", "species", "data"}


def lower_first(name: str) -> str:
    """Lower-case the first character, e.g. 'UserPost' -> 'userPost'."""
    return name[:1].lower() + name[1:]


def upper_first(name: str) -> str:
    """Upper-case the first character, e.g. 'userPost' -> 'UserPost'."""
    return name[:1].upper() + name[1:]


def pluralize(word: str) -> str:
    """Convert a singular English word to its plural form.

    Only the last CamelCase segment is inflected:
        >>> pluralize("BlogPost")
        'BlogPosts'
        >>> pluralize("Category")
        'Categories'
    """
    if not word:
        return word

    camel_match = re.match(r"^(.+?)([A-Z][a-z]+)$", word)
    if camel_match:
        prefix, last_word = camel_match.groups()
        return prefix + pluralize(last_word)

    lower_word = word.lower()
    if lower_word in _UNCOUNTABLE:
        return word
    if lower_word in _IRREGULAR_PLURALS:
        plural = _IRREGULAR_PLURALS[lower_word]
        return upper_first(plural) if word[0].isupper() else plural

    if lower_word.endswith(("s", "x", "z", "ch", "sh")):
        return word + "es"
    if lower_word.endswith("y") and len(word) > 1 and lower_word[-2] not in "aeiou":
        return word[:-1] + "ies"
    if lower_word.endswith("fe"):
        return word[:-2] + "ves"
    if lower_word.endswith(("elf", "alf", "olf", "eaf", "oaf", "arf")):
        return word[:-1] + "ves"
    return word + "s"


def plural_name(type_name: str) -> str:
    """Plural used for list root fields.

    Words whose plural equals the singular get an 'all' prefix so the list
    field does not clash with the single-item field.
    """
    plural = pluralize(type_name)
    if plural == type_name:
        return f"all{plural}"
    return plural
