"""Curated list of common facial skin conditions and their key symptoms."""

import copy
from typing import Any, Dict, List

COMMON_CONDITIONS: List[Dict[str, Any]] = [
    {
        "id": "acne",
        "name": "Acne",
        "symptoms": ["whiteheads", "blackheads", "pustules", "nodules", "inflammation"],
        "short": "Common in teens and adults; inflammatory and non-inflammatory lesions.",
    },
    {
        "id": "eczema",
        "name": "Eczema (Atopic Dermatitis)",
        "symptoms": ["dryness", "itching", "red patches", "crusting", "flare-ups"],
        "short": "Chronic itchy rash often linked to allergies or sensitive skin.",
    },
    {
        "id": "rosacea",
        "name": "Rosacea",
        "symptoms": ["facial redness", "visible blood vessels", "bumps", "flushing"],
        "short": "Persistent redness, may worsen with triggers (heat, alcohol, spicy foods).",
    },
    {
        "id": "melasma",
        "name": "Melasma",
        "symptoms": ["patchy brown/gray-brown pigmentation", "symmetrical spots"],
        "short": "Hormone-related hyperpigmentation, common on cheeks and forehead.",
    },
    {
        "id": "psoriasis",
        "name": "Psoriasis",
        "symptoms": ["thick red plaques", "silvery scales", "itching"],
        "short": "Autoimmune-related scaly plaques; can affect the face and scalp.",
    },
    {
        "id": "contact_dermatitis",
        "name": "Contact Dermatitis",
        "symptoms": ["redness", "blisters", "itching", "burning"],
        "short": "Skin reaction to irritants or allergens (cosmetics, metals, fragrances).",
    },
    {
        "id": "fungal_infection",
        "name": "Fungal Infection (Tinea)",
        "symptoms": ["ring-like patches", "scaling", "red border"],
        "short": "Often presents as circular, scaly patches; requires antifungal treatment.",
    },
    {
        "id": "sun_damage",
        "name": "Sun Damage / Photoaging",
        "symptoms": ["wrinkles", "pigmentation", "rough texture", "telangiectasia"],
        "short": "Chronic sun exposure leads to visible aging and spots.",
    },
    {
        "id": "perioral_dermatitis",
        "name": "Perioral Dermatitis",
        "symptoms": ["small red papules around mouth/nose", "scaling"],
        "short": "Red papules often around the mouth; can be triggered by topical steroids.",
    },
    {
        "id": "hyperpigmentation",
        "name": "Post-Inflammatory Hyperpigmentation",
        "symptoms": ["flat dark spots", "leftover marks after inflammation"],
        "short": "Dark spots remaining after acne or injury; cosmetic concern more than active disease.",
    },
]


def list_conditions() -> List[Dict[str, Any]]:
    """Return a copy of the catalog so callers cannot alter the shared list."""
    return copy.deepcopy(COMMON_CONDITIONS)
