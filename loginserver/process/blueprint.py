"""Provides the document that a newly created character starts out with."""

import copy
import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List

from ..domain import MALE, FEMALE

TEMPLATE_PATH = Path(__file__).resolve().parent.parent / 'data' \
    / 'character-template.json'

SEX_CODES: Dict[str, int] = {MALE: 0, FEMALE: 1}
DEFAULT_OUTFITS: Dict[str, int] = {MALE: 128, FEMALE: 136}
AVAILABLE_OUTFITS: Dict[str, List[int]] = {
    MALE: [128, 129, 130, 131],
    FEMALE: [136, 137, 138, 139],
}


@lru_cache(maxsize=1)
def _template() -> Dict[str, Any]:
    with open(TEMPLATE_PATH, encoding='utf-8') as f:
        template: Dict[str, Any] = json.load(f)
    return template


def generate(name: str, sex: str) -> Dict[str, Any]:
    """
    Generate the document of a new character.

    Parameters
    ----------
    name : str
        Character name; capitalized for display.
    sex : str
        One of :data:`.domain.SEXES`. Selects the sex code and the default
        and available outfits.

    Returns
    -------
    dict
        A fresh copy of the character template; the caller may mutate it.

    Raises
    ------
    ValueError
        ``sex`` is not recognized.

    """
    if sex not in SEX_CODES:
        raise ValueError(f'Unrecognized sex: {sex}')
    document = copy.deepcopy(_template())
    document['creatureStatistics']['name'] = name.capitalize()
    document['creatureStatistics']['outfit']['id'] = DEFAULT_OUTFITS[sex]
    document['characterStatistics']['sex'] = SEX_CODES[sex]
    document['characterStatistics']['availableOutfits'] \
        = list(AVAILABLE_OUTFITS[sex])
    return document
